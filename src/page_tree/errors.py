"""Typed exception hierarchy for page tree duplication.

NodeNotFoundError, NodeCreationError and MetadataWriteError are the per-page
failures; each abandons the page's subtree. DuplicationAbortedError is only raised in
strict mode.
"""

from typing import Optional, TYPE_CHECKING

from src.confluence_client.errors import PageTreeCopyError

if TYPE_CHECKING:
    from .models import DuplicationReport


class DuplicationError(PageTreeCopyError):
    """Base exception for page tree duplication errors."""
    pass


class NodeNotFoundError(DuplicationError):
    """Raised when a source page does not exist."""

    def __init__(self, node_id: str):
        super().__init__(f"Page {node_id} not found")
        self.node_id = node_id


class NodeCreationError(DuplicationError):
    """Raised when the host rejects creating a page."""

    def __init__(self, title: str, reason: Optional[str] = None):
        message = f"Could not create page '{title}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.title = title
        self.reason = reason


class MetadataWriteError(DuplicationError):
    """Raised when the host rejects a metadata value on a freshly created page.

    The page itself exists; node_id is the ID of that new page.
    """

    def __init__(self, node_id: str, key: str, reason: Optional[str] = None):
        message = f"Could not write metadata '{key}' on page {node_id}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.node_id = node_id
        self.key = key
        self.reason = reason


class DuplicationAbortedError(DuplicationError):
    """Raised in strict mode when a page could not be copied.

    Pages created before the failure are kept; the report lists them along
    with the page that failed.
    """

    def __init__(self, failed_node_id: str, report: 'DuplicationReport', cause: Optional[Exception] = None):
        super().__init__(
            f"Duplication of page {report.source_root_id} aborted at page "
            f"{failed_node_id} ({report.created_count} page(s) created)"
        )
        self.failed_node_id = failed_node_id
        self.report = report
        self.cause = cause


class FilesystemError(PageTreeCopyError):
    """Raised when filesystem operations fail (read, write, permissions, etc)."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Filesystem operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason


class ConfigError(PageTreeCopyError):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message
