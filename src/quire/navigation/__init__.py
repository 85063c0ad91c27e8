"""Navigation layer — routed documents as an ordered sidebar tree.

Public API::

    from quire.navigation import build_navigation, build_sidebar

    tree = build_navigation(documents)
    sidebar = build_sidebar(documents, config.sidebar, label=config.site_title)
"""

from quire.navigation.sidebar import build_sidebar
from quire.navigation.tree import (
    UNORDERED,
    NavigationNode,
    build_navigation,
    derive_label,
    sort_nodes,
)

__all__ = [
    "UNORDERED",
    "NavigationNode",
    "build_navigation",
    "build_sidebar",
    "derive_label",
    "sort_nodes",
]
