"""Typed exception hierarchy for CLI-related errors."""

from src.confluence_client.errors import PageTreeCopyError


class CLIError(PageTreeCopyError):
    """Base exception for all CLI-related errors."""
    pass


class InvalidSourceError(CLIError):
    """Raised when the page to copy is neither a page ID nor a page URL."""

    def __init__(self, source: str):
        super().__init__(
            f"Invalid source page: '{source}'\n"
            "Supported formats:\n"
            "  - 123456\n"
            "  - https://domain.atlassian.net/wiki/spaces/SPACE/pages/123456[/Page-Title]"
        )
        self.source = source
