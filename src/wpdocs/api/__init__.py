"""API layer: canonical read surface for the CLI and other front-ends.

Key rules:

1. No SQLAlchemy imports beyond Session - only call repo functions and content builders
2. No query logic here - filters are compiled in filters.criteria
3. Return pydantic read models, keyed by language where the PHP
   service did so
"""
