"""Page tree duplication.

Copies a page and all of its descendants, keeping the hierarchy and the
metadata attached to each page.
"""

from .config_loader import ConfigLoader
from .confluence_store import ConfluenceContentStore
from .content_store import ContentStore, InMemoryContentStore
from .duplicator import TreeDuplicator
from .errors import (
    ConfigError,
    DuplicationAbortedError,
    DuplicationError,
    FilesystemError,
    MetadataWriteError,
    NodeCreationError,
    NodeNotFoundError,
)
from .models import (
    DuplicationMode,
    DuplicationReport,
    DuplicatorConfig,
    Node,
    NodeDraft,
    NodeStatus,
)

__all__ = [
    'ConfigLoader',
    'ConfluenceContentStore',
    'ContentStore',
    'InMemoryContentStore',
    'TreeDuplicator',
    'ConfigError',
    'DuplicationAbortedError',
    'DuplicationError',
    'FilesystemError',
    'MetadataWriteError',
    'NodeCreationError',
    'NodeNotFoundError',
    'DuplicationMode',
    'DuplicationReport',
    'DuplicatorConfig',
    'Node',
    'NodeDraft',
    'NodeStatus',
]
