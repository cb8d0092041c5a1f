"""Recursive page tree duplication.

The duplicator copies a page, then walks its children depth first and
copies each one under the freshly created parent, so the copy has the same
shape as the source. Every copy is created as a draft, gets the copy
suffix appended to its title and is attributed to the acting user.
"""

import logging
from typing import List, Optional, Set, Tuple

from .content_store import ContentStore
from .errors import (
    DuplicationAbortedError,
    MetadataWriteError,
    NodeCreationError,
    NodeNotFoundError,
)
from .metadata import iter_metadata_values, maybe_deserialize
from .models import DuplicationMode, DuplicationReport, Node, NodeDraft, NodeStatus

logger = logging.getLogger(__name__)

DEFAULT_COPY_SUFFIX = " (Copy)"

# Failures that abandon one page and its subtree
PAGE_FAILURES = (NodeNotFoundError, NodeCreationError, MetadataWriteError)


class TreeDuplicator:
    """Copies a page and all its descendants inside one ContentStore.

    Failure policy per page (page not found, host rejected the page or one
    of its metadata values) is set by mode:
    - LENIENT (default): the page and its subtree are skipped, siblings
      and already copied branches stay, the walk continues.
    - STRICT: the walk stops and DuplicationAbortedError reports the pages
      created so far plus the one that failed.

    Nothing is rolled back in either mode; a copy whose metadata was
    rejected stays and is listed in report.partial. Errors other than the
    per-page failures (credentials, network) propagate unchanged.

    Example:
        >>> duplicator = TreeDuplicator(store, acting_user="admin")
        >>> report = duplicator.duplicate_tree("123456")
        >>> report.created_count
        4
    """

    def __init__(
        self,
        store: ContentStore,
        acting_user: str,
        copy_suffix: str = DEFAULT_COPY_SUFFIX,
        mode: DuplicationMode = DuplicationMode.LENIENT,
    ):
        """Initialize the duplicator.

        Args:
            store: Host storage to read from and write to
            acting_user: Identity recorded as author of every copy
            copy_suffix: Text appended to every copied title
            mode: Failure policy for individual pages
        """
        self.store = store
        self.acting_user = acting_user
        self.copy_suffix = copy_suffix
        self.mode = mode
        self._visited: Set[str] = set()

    def duplicate_tree(self, root_id: str) -> DuplicationReport:
        """Copy the page root_id and its whole subtree.

        The root copy is created without a parent.

        Args:
            root_id: ID of the page to copy

        Returns:
            DuplicationReport; new_root_id is None when the root itself
            could not be copied (only a root copy missing metadata, listed
            in report.partial, can exist in that case)

        Raises:
            DuplicationAbortedError: In strict mode, when any page fails
        """
        report = DuplicationReport(source_root_id=root_id)
        # Source IDs seen during this run
        self._visited = {root_id}

        try:
            new_root_id = self.duplicate_node(root_id, None)
        except PAGE_FAILURES as e:
            self._record_failure(report, root_id, e)
            logger.warning(f"Could not duplicate page {root_id}: {e}")
            return report

        report.new_root_id = new_root_id
        report.created[root_id] = new_root_id

        self.duplicate_subtree(root_id, new_root_id, report)

        logger.info(
            f"Duplicated page {root_id} as {new_root_id}: "
            f"{report.created_count} page(s) created, {len(report.skipped)} skipped"
        )
        return report

    def duplicate_node(self, source_id: str, new_parent_id: Optional[str]) -> str:
        """Copy a single page with all its metadata.

        Args:
            source_id: ID of the page to copy
            new_parent_id: Parent for the copy (None for a top-level page)

        Returns:
            ID of the new page

        Raises:
            NodeNotFoundError: If the source page does not exist
            NodeCreationError: If the host rejects the new page
            MetadataWriteError: If the host rejects a metadata value; the
                new page exists at that point
        """
        source = self.store.get_node(source_id)
        if source is None:
            raise NodeNotFoundError(source_id)

        draft = NodeDraft(
            title=f"{source.title}{self.copy_suffix}",
            body=source.body,
            status=NodeStatus.DRAFT,
            parent_id=new_parent_id,
            author_id=self.acting_user,
            ordering=source.ordering,
            content_type=source.content_type,
            space_key=source.space_key,
        )
        new_id = self.store.create_node(draft)
        logger.debug(f"Copied page {source_id} ('{source.title}') to {new_id}")

        metadata = self.store.get_metadata(source_id)
        for key, value in iter_metadata_values(metadata):
            self.store.set_metadata(new_id, key, maybe_deserialize(value))

        return new_id

    def duplicate_subtree(
        self,
        source_root_id: str,
        new_root_id: str,
        report: Optional[DuplicationReport] = None,
    ) -> DuplicationReport:
        """Copy every descendant of source_root_id under new_root_id.

        Args:
            source_root_id: Page whose children are copied
            new_root_id: Already created copy that becomes their parent
            report: Report to record results in (a new one when omitted)

        Returns:
            The report that was filled in

        Raises:
            DuplicationAbortedError: In strict mode, when any page fails
        """
        if report is None:
            report = DuplicationReport(source_root_id=source_root_id, new_root_id=new_root_id)
            self._visited = {source_root_id}

        children = self.store.get_children(source_root_id)
        for child in children:
            if child.node_id in self._visited:
                logger.warning(
                    f"Page {child.node_id} was already visited, not copying it again"
                )
                continue
            self._visited.add(child.node_id)

            try:
                new_child_id = self.duplicate_node(child.node_id, new_root_id)
            except PAGE_FAILURES as e:
                self._record_failure(report, child.node_id, e)
                logger.warning(
                    f"Skipping page {child.node_id} ('{child.title}') and its subpages: {e}"
                )
                continue

            report.created[child.node_id] = new_child_id
            self.duplicate_subtree(child.node_id, new_child_id, report)

        return report

    def _record_failure(self, report: DuplicationReport, source_id: str, error: Exception) -> None:
        """Note a failed page in the report; in strict mode, abort the walk."""
        report.skipped.append(source_id)
        if isinstance(error, MetadataWriteError):
            report.partial[source_id] = error.node_id
            logger.warning(
                f"Copy {error.node_id} of page {source_id} was created without all its metadata"
            )
        if self.mode is DuplicationMode.STRICT:
            raise DuplicationAbortedError(source_id, report, cause=error) from error

    def preview_tree(self, root_id: str) -> List[Tuple[int, Node]]:
        """List the pages duplicate_tree would copy, without creating anything.

        Returns:
            (depth, node) pairs in depth-first order, root at depth 0

        Raises:
            NodeNotFoundError: If the root page does not exist
        """
        root = self.store.get_node(root_id)
        if root is None:
            raise NodeNotFoundError(root_id)

        entries: List[Tuple[int, Node]] = []
        visited = {root_id}

        def _walk(node: Node, depth: int) -> None:
            entries.append((depth, node))
            for child in self.store.get_children(node.node_id):
                if child.node_id in visited:
                    continue
                visited.add(child.node_id)
                _walk(child, depth + 1)

        _walk(root, 0)
        return entries
