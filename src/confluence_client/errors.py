"""Typed exception hierarchy for Confluence-related errors.

Every error raised by page-tree-copy derives from PageTreeCopyError. The
Confluence client errors below derive from ConfluenceError and carry the
context (page id, title, endpoint) needed to report them.
"""

from typing import Optional


class PageTreeCopyError(Exception):
    """Base exception for all page-tree-copy errors.

    Use this to catch any application-level error from the tool.
    """
    pass


class ConfluenceError(PageTreeCopyError):
    """Base exception for all Confluence-related errors."""
    pass


class InvalidCredentialsError(ConfluenceError):
    """Raised when API credentials are invalid or authentication fails."""

    def __init__(self, user: str, endpoint: str):
        super().__init__(
            f"API key is invalid (user: {user}, endpoint: {endpoint})"
        )
        self.user = user
        self.endpoint = endpoint


class PageNotFoundError(ConfluenceError):
    """Raised when a requested page does not exist."""

    def __init__(self, page_id: str):
        super().__init__(f"Page {page_id} not found")
        self.page_id = page_id


class PageAlreadyExistsError(ConfluenceError):
    """Raised when a page title is already taken in the target space.

    Confluence titles are unique per space, so copying the same tree twice
    without changing the copy suffix ends up here.
    """

    def __init__(self, title: str, parent_id: Optional[str] = None):
        if parent_id:
            message = f"Page with title '{title}' already exists under parent {parent_id}"
        else:
            message = f"Page with title '{title}' already exists"
        super().__init__(message)
        self.title = title
        self.parent_id = parent_id


class APIUnreachableError(ConfluenceError):
    """Raised when the Confluence API is not available or unreachable."""

    def __init__(self, endpoint: str):
        super().__init__(f"API is not available at {endpoint}")
        self.endpoint = endpoint


class APIAccessError(ConfluenceError):
    """Raised when a request is rejected or keeps failing after retries."""

    def __init__(self, message: str = "Confluence API failure (after 3 retries)"):
        super().__init__(message)
