"""wpdocs: read-only aggregation layer over the documents database."""

__version__ = "1.0.0"
