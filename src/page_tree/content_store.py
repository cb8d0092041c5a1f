"""Content storage boundary used by the tree duplicator.

ContentStore lists the six host calls duplication needs. The Confluence
binding lives in confluence_store.py; InMemoryContentStore keeps everything
in dictionaries and backs the tests and local experiments.
"""

import copy
import itertools
import logging
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional

from .errors import MetadataWriteError, NodeCreationError, NodeNotFoundError
from .models import Metadata, Node, NodeDraft, NodeStatus

logger = logging.getLogger(__name__)


class ContentStore(ABC):
    """Host storage operations for pages and their metadata."""

    @abstractmethod
    def get_node(self, node_id: str) -> Optional[Node]:
        """Fetch a page by ID, or None if it does not exist."""

    @abstractmethod
    def create_node(self, draft: NodeDraft) -> str:
        """Create and persist a page, returning its new ID.

        Raises:
            NodeCreationError: If the host rejects the page
        """

    @abstractmethod
    def get_metadata(self, node_id: str) -> Metadata:
        """Fetch all metadata of a page as key -> list of values."""

    @abstractmethod
    def set_metadata(self, node_id: str, key: str, value: Any) -> None:
        """Attach one value under key; called once per value of multi-valued keys.

        Raises:
            NodeNotFoundError: If the page does not exist
            MetadataWriteError: If the host rejects the value
        """

    @abstractmethod
    def get_children(self, parent_id: str) -> List[Node]:
        """Fetch the direct children of a page in the host's default order."""

    @abstractmethod
    def current_acting_user(self) -> str:
        """Identity the host attributes new pages to."""


class InMemoryContentStore(ContentStore):
    """Dictionary-backed ContentStore.

    IDs are sequential numeric strings. Children come back sorted by
    ordering value, then creation order. Pages can be rejected on purpose
    through fail_on to exercise the failure paths.

    Example:
        >>> store = InMemoryContentStore(acting_user="admin")
        >>> root = store.add_node("Handbook")
        >>> store.add_node("Onboarding", parent_id=root.node_id)
    """

    def __init__(
        self,
        acting_user: str = "admin",
        fail_on: Optional[Callable[[NodeDraft], bool]] = None,
        fail_metadata_on: Optional[Callable[[Node, str], bool]] = None,
    ):
        """Initialize an empty store.

        Args:
            acting_user: Identity returned by current_acting_user()
            fail_on: Optional predicate; create_node rejects drafts it accepts
            fail_metadata_on: Optional predicate over (page, key); set_metadata
                rejects the values it accepts
        """
        self.acting_user = acting_user
        self.fail_on = fail_on
        self.fail_metadata_on = fail_metadata_on
        self._nodes: Dict[str, Node] = {}
        self._metadata: Dict[str, Metadata] = {}
        self._sequence: Dict[str, int] = {}
        self._ids = itertools.count(1)

    def _next_id(self) -> str:
        node_id = str(next(self._ids))
        while node_id in self._nodes:
            node_id = str(next(self._ids))
        return node_id

    def add_node(
        self,
        title: str,
        parent_id: Optional[str] = None,
        body: str = "",
        status: NodeStatus = NodeStatus.PUBLISHED,
        ordering: int = 0,
        author_id: Optional[str] = "author",
        metadata: Optional[Metadata] = None,
        space_key: str = "",
    ) -> Node:
        """Seed a page directly, bypassing create_node checks and fail_on."""
        node = Node(
            node_id=self._next_id(),
            title=title,
            body=body,
            status=status,
            parent_id=parent_id,
            ordering=ordering,
            author_id=author_id,
            space_key=space_key,
        )
        self._store(node)
        for key, values in (metadata or {}).items():
            self._metadata[node.node_id][key] = list(values)
        return replace(node)

    def _store(self, node: Node) -> None:
        self._sequence[node.node_id] = len(self._sequence)
        self._nodes[node.node_id] = node
        self._metadata[node.node_id] = {}

    def get_node(self, node_id: str) -> Optional[Node]:
        node = self._nodes.get(node_id)
        return replace(node) if node is not None else None

    def create_node(self, draft: NodeDraft) -> str:
        if draft.parent_id is not None and draft.parent_id not in self._nodes:
            raise NodeCreationError(
                draft.title, f"parent page {draft.parent_id} does not exist"
            )
        if self.fail_on is not None and self.fail_on(draft):
            raise NodeCreationError(draft.title, "rejected by store")

        node = Node(
            node_id=self._next_id(),
            title=draft.title,
            body=draft.body,
            status=draft.status,
            parent_id=draft.parent_id,
            ordering=draft.ordering,
            author_id=draft.author_id,
            content_type=draft.content_type,
            space_key=draft.space_key,
        )
        self._store(node)
        logger.debug(f"Created page {node.node_id} ('{node.title}') under {node.parent_id}")
        return node.node_id

    def get_metadata(self, node_id: str) -> Metadata:
        return copy.deepcopy(self._metadata.get(node_id, {}))

    def set_metadata(self, node_id: str, key: str, value: Any) -> None:
        if node_id not in self._nodes:
            raise NodeNotFoundError(node_id)
        if self.fail_metadata_on is not None and self.fail_metadata_on(self._nodes[node_id], key):
            raise MetadataWriteError(node_id, key, "rejected by store")
        self._metadata[node_id].setdefault(key, []).append(copy.deepcopy(value))

    def get_children(self, parent_id: str) -> List[Node]:
        children = [node for node in self._nodes.values() if node.parent_id == parent_id]
        children.sort(key=lambda node: (node.ordering, self._sequence[node.node_id]))
        return [replace(node) for node in children]

    def current_acting_user(self) -> str:
        return self.acting_user

    def all_nodes(self) -> List[Node]:
        """Every stored page in creation order."""
        return [replace(node) for node in self._nodes.values()]

    def __len__(self) -> int:
        return len(self._nodes)
