"""Navigation tree builder — group routed documents into an ordered sidebar.

Each content directory becomes a folder node and each document a leaf under
its directory's folder.  Siblings at every depth are ordered independently:

1. nodes with an explicit order, ascending;
2. then nodes without one;
3. ties (and all unordered nodes) alphabetically by label, case-insensitive.

The exact label, route and source path break any remaining tie, so the order
is total and never depends on filesystem read order.

Trees are immutable.  A content change means building a new tree.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Any

from quire.routing.resolver import Document, route_to_href

# Order assigned to nodes without an explicit position; sorts after any real one.
UNORDERED: int = sys.maxsize


@dataclass(frozen=True, slots=True)
class NavigationNode:
    """A folder (category) or leaf (document or link) in the navigation tree.

    Attributes:
        label: Display text.
        order: Explicit position among siblings, or ``UNORDERED``.
        children: Ordered child nodes; empty for leaves.
        route: Route of the document a leaf points at; None for folders.
        link: External URL for config-declared links.
        collapsed: Rendering hint for folders.
        source: Content-relative file (leaves) or directory (folders).

    """

    label: str
    order: int = UNORDERED
    children: tuple[NavigationNode, ...] = ()
    route: str | None = None
    link: str | None = None
    collapsed: bool = False
    source: str | None = None

    @property
    def is_leaf(self) -> bool:
        return self.route is not None or self.link is not None

    @property
    def has_order(self) -> bool:
        return self.order != UNORDERED

    @property
    def href(self) -> str | None:
        """URL the node points at, or None for folders."""
        if self.link is not None:
            return self.link
        if self.route is not None:
            return route_to_href(self.route)
        return None

    def walk(self) -> Iterator[NavigationNode]:
        """Yield this node and every descendant, depth-first, in order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def leaves(self) -> Iterator[NavigationNode]:
        """Yield leaf nodes in navigation order."""
        return (node for node in self.walk() if node.is_leaf)

    def find(self, route: str) -> NavigationNode | None:
        """Return the leaf pointing at *route*, or None."""
        for node in self.walk():
            if node.route == route:
                return node
        return None

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the rendering layer (JSON-safe, key order fixed)."""
        data: dict[str, Any] = {"label": self.label}
        if self.has_order:
            data["order"] = self.order
        if self.route is not None:
            data["route"] = self.route
        if self.href is not None:
            data["href"] = self.href
        if self.collapsed:
            data["collapsed"] = True
        if not self.is_leaf:
            data["children"] = [child.to_dict() for child in self.children]
        return data


def sort_key(node: NavigationNode) -> tuple[int, str, str, str, str]:
    """Sibling ordering key shared by every depth of the tree."""
    return (
        node.order,
        node.label.casefold(),
        node.label,
        node.route or node.link or "",
        node.source or "",
    )


def sort_nodes(nodes: Iterable[NavigationNode]) -> tuple[NavigationNode, ...]:
    return tuple(sorted(nodes, key=sort_key))


def derive_label(segment: str) -> str:
    """Derive a human-readable label from a path segment.

    ``getting-started`` -> ``Getting Started``
    ``spring_cloud``    -> ``Spring Cloud``

    """
    return segment.replace("-", " ").replace("_", " ").strip().title()


def document_node(doc: Document) -> NavigationNode:
    """Build the leaf for a single document."""
    meta = doc.metadata
    label = meta.sidebar_label or meta.title or derive_label(
        PurePosixPath(doc.file_path).stem,
    )
    return NavigationNode(
        label=label,
        order=meta.sidebar_order if meta.sidebar_order is not None else UNORDERED,
        route=doc.route,
        source=doc.file_path,
    )


class _Folder:
    """Mutable scratch node used only while grouping."""

    __slots__ = ("folders", "leaves", "path")

    def __init__(self, path: str) -> None:
        self.path = path
        self.folders: dict[str, _Folder] = {}
        self.leaves: list[NavigationNode] = []

    def child(self, segment: str) -> _Folder:
        folder = self.folders.get(segment)
        if folder is None:
            path = f"{self.path}/{segment}" if self.path else segment
            folder = _Folder(path)
            self.folders[segment] = folder
        return folder

    def freeze(self, label: str, *, order: int = UNORDERED, collapsed: bool = False) -> NavigationNode:
        children = [
            folder.freeze(derive_label(segment))
            for segment, folder in self.folders.items()
        ]
        children = [c for c in children if c.children]
        children.extend(self.leaves)
        return NavigationNode(
            label=label,
            order=order,
            children=sort_nodes(children),
            collapsed=collapsed,
            source=self.path,
        )


def build_navigation(
    documents: Iterable[Document],
    *,
    label: str = "Docs",
    directory: str = "",
    collapsed: bool = False,
) -> NavigationNode:
    """Build the navigation tree for *documents*.

    Args:
        documents: Routed documents (any order).
        label: Label of the returned root node.
        directory: Only include documents under this content directory, and
            root the tree there (used for autogenerated sidebar groups).
        collapsed: Rendering hint copied onto the returned root.

    Hidden documents (``sidebar.hidden``) are routed but left out.  Folders
    that end up with no visible children are dropped.
    """
    prefix = tuple(p for p in directory.strip("/").split("/") if p)
    root = _Folder("/".join(prefix))

    for doc in documents:
        if doc.metadata.sidebar_hidden:
            continue
        parts = tuple(p for p in doc.directory.split("/") if p)
        if parts[:len(prefix)] != prefix:
            continue
        folder = root
        for segment in parts[len(prefix):]:
            folder = folder.child(segment)
        folder.leaves.append(document_node(doc))

    return root.freeze(label, collapsed=collapsed)


def content_directories(documents: Iterable[Document]) -> frozenset[str]:
    """Every directory (and ancestor directory) holding at least one document."""
    return source_directories(doc.file_path for doc in documents)


def source_directories(file_paths: Iterable[str]) -> frozenset[str]:
    """Every directory (and ancestor directory) of the given source files."""
    dirs: set[str] = {""}
    for file_path in file_paths:
        parts = list(PurePosixPath(file_path).parent.parts)
        for depth in range(1, len(parts) + 1):
            dirs.add("/".join(parts[:depth]))
    return frozenset(dirs)
