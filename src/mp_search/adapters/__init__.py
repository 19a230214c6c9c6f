"""Adapters – backend executors for query plans.

Each adapter lives in its own sub-package and imports its third-party
library lazily; install the matching extra (``mp-search[sqlalchemy]``).
"""
