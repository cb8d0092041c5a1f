"""Confluence client used by page-tree-copy.

Wraps the Confluence Cloud REST API (via atlassian-python-api) with
credential loading, typed errors and rate limit retries.
"""

from .errors import (
    PageTreeCopyError,
    ConfluenceError,
    InvalidCredentialsError,
    PageNotFoundError,
    PageAlreadyExistsError,
    APIUnreachableError,
    APIAccessError,
)

__all__ = [
    "PageTreeCopyError",
    "ConfluenceError",
    "InvalidCredentialsError",
    "PageNotFoundError",
    "PageAlreadyExistsError",
    "APIUnreachableError",
    "APIAccessError",
]
