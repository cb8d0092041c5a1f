"""Data models for page tree duplication.

All models use dataclasses for clean, type-safe data structures.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


# Metadata key -> every value stored under that key
Metadata = Dict[str, List[Any]]


class NodeStatus(str, Enum):
    """Publication status of a page."""
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"
    TRASHED = "trashed"

    @classmethod
    def from_confluence(cls, status: Optional[str]) -> 'NodeStatus':
        """Map a Confluence content status to a NodeStatus.

        Confluence calls published pages "current"; unknown values are
        treated as published.
        """
        mapping = {
            'current': cls.PUBLISHED,
            'draft': cls.DRAFT,
            'archived': cls.ARCHIVED,
            'trashed': cls.TRASHED,
        }
        return mapping.get((status or '').lower(), cls.PUBLISHED)

    def to_confluence(self) -> str:
        """Return the Confluence content status for this value."""
        if self is NodeStatus.PUBLISHED:
            return 'current'
        return self.value


class DuplicationMode(str, Enum):
    """What happens when a single page cannot be copied.

    LENIENT skips the page and its subtree and keeps going. STRICT stops
    the walk and reports what was created and what failed.
    """
    LENIENT = "lenient"
    STRICT = "strict"


@dataclass
class Node:
    """A page in the host's content tree.

    Attributes:
        node_id: Identifier assigned by the host on creation
        title: Page title
        body: Page content (Confluence storage format for Confluence pages)
        status: Publication status
        parent_id: Parent page ID (None for a top-level page)
        ordering: Sibling sort value
        author_id: Identity of the page's author
        content_type: Host content type (always "page" for copied trees)
        space_key: Space the page lives in
    """
    node_id: str
    title: str
    body: str = ""
    status: NodeStatus = NodeStatus.PUBLISHED
    parent_id: Optional[str] = None
    ordering: int = 0
    author_id: Optional[str] = None
    content_type: str = "page"
    space_key: str = ""


@dataclass
class NodeDraft:
    """Fields handed to the host when creating a page."""
    title: str
    body: str
    status: NodeStatus
    parent_id: Optional[str]
    author_id: Optional[str]
    ordering: int = 0
    content_type: str = "page"
    space_key: str = ""


@dataclass
class DuplicationReport:
    """Outcome of copying one tree.

    Attributes:
        source_root_id: ID of the page the copy started from
        new_root_id: ID of the root copy (None if the root could not be copied)
        created: Source page ID -> ID of its copy, in creation order
        skipped: Source page IDs whose copy failed (their subtrees are not copied)
        partial: Source page ID -> ID of a copy that was created but lost
            some metadata; such pages are also listed in skipped
    """
    source_root_id: str
    new_root_id: Optional[str] = None
    created: Dict[str, str] = field(default_factory=dict)
    skipped: List[str] = field(default_factory=list)
    partial: Dict[str, str] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.new_root_id is not None

    @property
    def created_count(self) -> int:
        return len(self.created)


@dataclass
class DuplicatorConfig:
    """Duplication settings loaded from .page-tree-copy/config.yaml.

    Attributes:
        copy_suffix: Text appended to every copied title
        mode: Failure policy for individual pages
    """
    copy_suffix: str = " (Copy)"
    mode: DuplicationMode = DuplicationMode.LENIENT
