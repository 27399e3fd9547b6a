"""Error taxonomy shared by the repository, builders and API layer."""


class WpDocsError(Exception):
    """Base class for all wpdocs errors."""


class BackingStoreError(WpDocsError):
    """A read against the content store failed.

    The message is the diagnostic text reported by the database engine.
    These errors are never retried.
    """


class InvalidArgumentError(WpDocsError, ValueError):
    """A structural precondition on the caller's input was violated."""


class ConfigError(WpDocsError, ValueError):
    """The configuration file is missing required keys or is malformed."""
