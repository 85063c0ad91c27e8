"""Declared sidebar — build the navigation root from configuration.

Sites may spell out the top of their sidebar instead of relying entirely on
the directory tree.  Items are read from the ``sidebar`` config key::

    sidebar:
      - label: Courses
        link: /guides/courses
      - label: Basics
        collapsed: true
        autogenerate:
          directory: guides/basics
      - label: Java
        items:
          - label: OOP Design Patterns
            link: guides/java/oop-design-patterns
          - label: Hibernate
            autogenerate: {directory: guides/java/hibernate}
      - guides/react/react-hooks

Declared items keep their declared order.  Children of an ``autogenerate``
group follow the usual tree ordering rules.

Items that point at a source file which exists but was left out of the
routed set (a draft, or a file that failed to load or validate) are dropped
from the sidebar; that file's own error, if any, decides the build.
"""

from __future__ import annotations

from collections.abc import Collection, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from quire._errors import ConfigError
from quire.navigation.tree import (
    NavigationNode,
    build_navigation,
    content_directories,
    document_node,
    sort_nodes,
)
from quire.routing.resolver import Document

_EXTERNAL_PREFIXES = ("http://", "https://", "mailto:")


@dataclass(frozen=True, slots=True)
class _Targets:
    """What declared items may point at."""

    documents: Sequence[Document]
    by_route: Mapping[str, Document]
    directories: frozenset[str]
    omitted_routes: Collection[str]
    omitted_directories: Collection[str]


def build_sidebar(
    documents: Sequence[Document],
    items: Sequence[Mapping[str, Any] | str] = (),
    *,
    label: str = "Docs",
    omitted_routes: Collection[str] = (),
    omitted_directories: Collection[str] = (),
) -> NavigationNode:
    """Build the navigation root.

    With no declared *items* the whole content tree is autogenerated.

    Args:
        documents: Routed documents.
        items: Declared sidebar items.
        label: Label of the root node.
        omitted_routes: Routes of sources that exist but are not routed;
            links to them are skipped instead of rejected.
        omitted_directories: Directories of such sources; autogenerating
            from one that holds no routed document is skipped.

    Raises:
        ConfigError: If an item is malformed, links to an unknown route, or
            autogenerates from a directory that holds no documents.

    """
    if not items:
        return build_navigation(documents, label=label)

    targets = _Targets(
        documents=documents,
        by_route={doc.route: doc for doc in documents},
        directories=content_directories(documents),
        omitted_routes=frozenset(omitted_routes),
        omitted_directories=frozenset(omitted_directories),
    )
    return NavigationNode(label=label, children=_build_items(items, targets))


def _build_items(
    items: Sequence[Mapping[str, Any] | str], targets: _Targets,
) -> tuple[NavigationNode, ...]:
    nodes = (_build_item(item, index, targets) for index, item in enumerate(items))
    return sort_nodes(node for node in nodes if node is not None)


def _build_item(
    item: Mapping[str, Any] | str,
    index: int,
    targets: _Targets,
) -> NavigationNode | None:
    if isinstance(item, str):
        doc = _lookup(item, targets)
        if doc is None:
            return None
        leaf = document_node(doc)
        return NavigationNode(
            label=leaf.label, order=index, route=leaf.route, source=leaf.source,
        )

    if not isinstance(item, Mapping):
        msg = f"Sidebar item #{index} must be a mapping or a route string, got {item!r}"
        raise ConfigError(msg)

    label = item.get("label")
    if not isinstance(label, str) or not label.strip():
        msg = f"Sidebar item #{index} needs a non-empty 'label'"
        raise ConfigError(msg)
    collapsed = bool(item.get("collapsed", False))

    kinds = [key for key in ("link", "items", "autogenerate") if key in item]
    if len(kinds) != 1:
        msg = (
            f"Sidebar item {label!r} must have exactly one of "
            f"'link', 'items' or 'autogenerate'"
        )
        raise ConfigError(msg)

    kind = kinds[0]
    if kind == "link":
        link = item["link"]
        if not isinstance(link, str):
            msg = f"Sidebar item {label!r}: 'link' must be a string"
            raise ConfigError(msg)
        if link.startswith(_EXTERNAL_PREFIXES):
            return NavigationNode(label=label, order=index, link=link)
        doc = _lookup(link, targets)
        if doc is None:
            return None
        return NavigationNode(
            label=label, order=index, route=doc.route, source=doc.file_path,
        )

    if kind == "items":
        nested = item["items"]
        if not isinstance(nested, list):
            msg = f"Sidebar item {label!r}: 'items' must be a list"
            raise ConfigError(msg)
        return NavigationNode(
            label=label,
            order=index,
            children=_build_items(nested, targets),
            collapsed=collapsed,
        )

    options = item["autogenerate"]
    directory = options.get("directory") if isinstance(options, Mapping) else None
    if not isinstance(directory, str):
        msg = f"Sidebar item {label!r}: 'autogenerate' needs a 'directory'"
        raise ConfigError(msg)
    directory = directory.strip("/")
    if directory not in targets.directories:
        if directory in targets.omitted_directories:
            return None
        msg = f"Sidebar item {label!r}: no documents under directory {directory!r}"
        raise ConfigError(msg)
    subtree = build_navigation(
        targets.documents, label=label, directory=directory, collapsed=collapsed,
    )
    return NavigationNode(
        label=subtree.label,
        order=index,
        children=subtree.children,
        collapsed=collapsed,
        source=directory,
    )


def _lookup(link: str, targets: _Targets) -> Document | None:
    """Resolve an internal link; None when it names an omitted source."""
    route = link.strip("/")
    doc = targets.by_route.get(route)
    if doc is None and route not in targets.omitted_routes:
        msg = f"Sidebar links to unknown route {link!r}"
        raise ConfigError(msg)
    return doc
