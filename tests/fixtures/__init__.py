"""Test fixtures for page tree duplication tests.

This module provides:
- Seeded page trees for InMemoryContentStore
- Confluence API response payloads for store and wrapper tests
"""

from .page_trees import (
    LAYOUT,
    build_handbook_tree,
    build_partial_failure_tree,
    tree_shape,
    subtree_nodes,
)
from .confluence_payloads import (
    create_mock_auth,
    create_page_data,
)

__all__ = [
    'LAYOUT',
    'build_handbook_tree',
    'build_partial_failure_tree',
    'tree_shape',
    'subtree_nodes',
    'create_mock_auth',
    'create_page_data',
]
