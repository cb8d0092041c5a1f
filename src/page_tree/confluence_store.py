"""ContentStore implementation backed by Confluence Cloud.

Pages map to Nodes, content properties map to metadata. Confluence keeps a
single value per content property key, so get_metadata always returns
one-element lists and a repeated set_metadata on the same key replaces the
earlier value.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from ..confluence_client.api_wrapper import APIWrapper
from ..confluence_client.errors import (
    APIAccessError,
    PageAlreadyExistsError,
    PageNotFoundError,
)
from .content_store import ContentStore
from .errors import MetadataWriteError, NodeCreationError, NodeNotFoundError
from .models import Metadata, Node, NodeDraft, NodeStatus

logger = logging.getLogger(__name__)

CHILD_EXPAND = "space,version,extensions.position"


class ConfluenceContentStore(ContentStore):
    """Reads and writes pages through the Confluence REST API.

    Example:
        >>> store = ConfluenceContentStore(APIWrapper(Authenticator()))
        >>> node = store.get_node("123456")
    """

    def __init__(self, api: APIWrapper):
        """Initialize the store.

        Args:
            api: APIWrapper used for every request
        """
        self._api = api
        # (page_id, key) -> property version number, for keys written this run
        self._written: Dict[Tuple[str, str], int] = {}
        self._acting_user: Optional[str] = None

    def get_node(self, node_id: str) -> Optional[Node]:
        try:
            page_data = self._api.get_page_by_id(node_id)
        except PageNotFoundError:
            logger.debug(f"Page {node_id} does not exist")
            return None
        except ValueError as e:
            logger.warning(f"Ignoring invalid page id: {e}")
            return None
        return self._to_node(page_data)

    def create_node(self, draft: NodeDraft) -> str:
        if not draft.space_key:
            raise NodeCreationError(draft.title, "no space key to create the page in")

        if draft.author_id and self._acting_user and draft.author_id != self._acting_user:
            logger.warning(
                f"Confluence attributes new pages to the authenticated account "
                f"{self._acting_user}, not {draft.author_id}"
            )

        try:
            created = self._api.create_page(
                space=draft.space_key,
                title=draft.title,
                body=draft.body,
                parent_id=draft.parent_id,
                status=draft.status.to_confluence(),
                content_type=draft.content_type,
            )
        except (PageAlreadyExistsError, PageNotFoundError, APIAccessError, ValueError) as e:
            raise NodeCreationError(draft.title, str(e)) from e

        new_id = str(created['id'])
        logger.info(f"Created page {new_id} ('{draft.title}') under {draft.parent_id or 'space root'}")
        return new_id

    def get_metadata(self, node_id: str) -> Metadata:
        metadata: Metadata = {}
        for prop in self._api.get_page_properties(node_id):
            key = prop.get('key')
            if not key:
                continue
            metadata.setdefault(key, []).append(prop.get('value'))
        return metadata

    def set_metadata(self, node_id: str, key: str, value: Any) -> None:
        written_version = self._written.get((node_id, key))
        try:
            if written_version is None:
                response = self._api.set_page_property(node_id, key, value)
            else:
                logger.debug(
                    f"Content property '{key}' on page {node_id} holds one value; "
                    f"replacing the earlier one"
                )
                response = self._api.update_page_property(node_id, key, value, written_version)
        except PageNotFoundError as e:
            raise NodeNotFoundError(node_id) from e
        except (APIAccessError, ValueError) as e:
            # Oversized or otherwise invalid property values end up here
            raise MetadataWriteError(node_id, key, str(e)) from e
        self._written[(node_id, key)] = self._property_version(response, written_version)

    def get_children(self, parent_id: str) -> List[Node]:
        children = self._api.get_page_child_by_type(
            page_id=parent_id,
            child_type='page',
            expand=CHILD_EXPAND
        )
        logger.debug(f"Found {len(children)} children for page {parent_id}")
        return [self._to_node(child, parent_id=parent_id) for child in children]

    def current_acting_user(self) -> str:
        if self._acting_user is None:
            user = self._api.get_current_user() or {}
            identity = user.get('accountId') or user.get('username') or user.get('email')
            if not identity:
                raise APIAccessError("Confluence did not report the current user")
            self._acting_user = str(identity)
        return self._acting_user

    @staticmethod
    def _property_version(response: Any, previous: Optional[int]) -> int:
        if isinstance(response, dict):
            number = response.get('version', {}).get('number')
            if isinstance(number, int):
                return number
        return (previous or 0) + 1

    @staticmethod
    def _to_node(page_data: Dict[str, Any], parent_id: Optional[str] = None) -> Node:
        """Build a Node from a Confluence page dict.

        Args:
            page_data: Page data from the Confluence API
            parent_id: Known parent ID; derived from ancestors when omitted
        """
        page_id = page_data.get('id')
        if not page_id:
            raise ValueError("Page data missing required 'id' field")

        if parent_id is None:
            ancestors = page_data.get('ancestors') or []
            if ancestors:
                parent_id = str(ancestors[-1].get('id'))

        position = page_data.get('extensions', {}).get('position')
        try:
            ordering = int(position) if position is not None else 0
        except (TypeError, ValueError):
            ordering = 0

        created_by = page_data.get('history', {}).get('createdBy', {})

        return Node(
            node_id=str(page_id),
            title=page_data.get('title', ''),
            body=page_data.get('body', {}).get('storage', {}).get('value', ''),
            status=NodeStatus.from_confluence(page_data.get('status')),
            parent_id=parent_id,
            ordering=ordering,
            author_id=created_by.get('accountId'),
            content_type=page_data.get('type', 'page'),
            space_key=page_data.get('space', {}).get('key', ''),
        )
