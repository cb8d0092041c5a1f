"""Command-line interface for page tree duplication.

This package provides the `page-tree-copy` CLI tool that copies a
Confluence page and all its subpages, with progress indication, a dry run
preview and exit codes for each failure type.
"""

from .duplicate_command import DuplicateCommand
from .models import ExitCode
from .errors import CLIError, InvalidSourceError

__all__ = [
    'DuplicateCommand',
    'ExitCode',
    'CLIError',
    'InvalidSourceError',
]
