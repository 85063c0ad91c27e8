"""Route resolver — derive a canonical route for every validated document.

Routes come from the file's position under the content root:

    guides/kotlin/coroutines.md   -> guides/kotlin/coroutines
    guides/Kotlin/Index.md        -> guides/kotlin
    index.md                      -> ""          (site root)

An explicit ``slug`` replaces the derived path entirely:

    guides/b.md  (slug: guides/a) -> guides/a

Routes carry no leading or trailing slash; ``Document.href`` renders the
URL form.  Two documents on one route is a :class:`RouteCollisionError`.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import PurePosixPath

from quire._errors import RouteCollisionError
from quire._types import Frontmatter, RoutePath, SourcePath
from quire.content.validator import DocumentMetadata, ValidatedRecord

_INDEX_STEM = "index"
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True, slots=True)
class Document:
    """A validated document with its resolved route.

    Attributes:
        file_path: POSIX path relative to the content root.
        metadata: Validated frontmatter.
        body: Raw content handed to the renderer.
        route: Canonical route (no leading/trailing slash).
        frontmatter: The raw frontmatter mapping, for renderers that need it.

    """

    file_path: SourcePath
    metadata: DocumentMetadata
    body: str
    route: RoutePath
    frontmatter: Frontmatter

    @property
    def href(self) -> str:
        """Route as a URL path: ``/guides/kotlin/``, or ``/`` for the root."""
        return route_to_href(self.route)

    @property
    def directory(self) -> str:
        """Content-relative directory of the source file ("" at the root)."""
        parent = PurePosixPath(self.file_path).parent.as_posix()
        return "" if parent == "." else parent

    @property
    def is_index(self) -> bool:
        return PurePosixPath(self.file_path).stem.lower() == _INDEX_STEM


def derive_route(file_path: str) -> str:
    """Compute the default route for a content-relative *file_path*.

    Strips the extension, lower-cases every segment, turns whitespace runs
    into ``-`` and drops a trailing ``index`` segment.
    """
    path = PurePosixPath(file_path.replace("\\", "/"))
    segments = [s for s in (*path.parent.parts, path.stem) if s not in ("", ".")]
    normalized = [_WHITESPACE_RE.sub("-", s.strip()).lower() for s in segments]
    if normalized and normalized[-1] == _INDEX_STEM:
        normalized.pop()
    return "/".join(normalized)


def resolve_route(file_path: str, metadata: DocumentMetadata) -> str:
    """Return the route for a document: its slug if set, else the derived path."""
    if metadata.slug is not None:
        return metadata.slug.strip("/")
    return derive_route(file_path)


def route_to_href(route: str) -> str:
    if not route:
        return "/"
    return f"/{route}/"


def attach_routes(records: Iterable[ValidatedRecord]) -> tuple[Document, ...]:
    """Resolve a route for every record, without checking for collisions."""
    return tuple(
        Document(
            file_path=record.file_path,
            metadata=record.metadata,
            body=record.body,
            route=resolve_route(record.file_path, record.metadata),
            frontmatter=record.frontmatter,
        )
        for record in records
    )


def find_collisions(documents: Iterable[Document]) -> list[RouteCollisionError]:
    """Return one error per document whose route is already taken.

    Documents are considered in sorted ``file_path`` order; the first file on
    a route is the claimant and each later one is reported against it.
    """
    claimed: dict[str, str] = {}
    collisions: list[RouteCollisionError] = []
    for doc in sorted(documents, key=lambda d: d.file_path):
        first = claimed.get(doc.route)
        if first is not None:
            collisions.append(RouteCollisionError(doc.route, first, doc.file_path))
        else:
            claimed[doc.route] = doc.file_path
    return collisions


def resolve_routes(records: Iterable[ValidatedRecord]) -> tuple[Document, ...]:
    """Resolve routes for all records and insist they are unique.

    Raises:
        RouteCollisionError: For the first route claimed by two documents.

    """
    documents = attach_routes(records)
    collisions = find_collisions(documents)
    if collisions:
        raise collisions[0]
    return documents


def route_map(documents: Iterable[Document]) -> dict[str, Document]:
    """Index documents by route, sorted by route for stable output.

    Raises:
        RouteCollisionError: If two documents share a route.

    """
    docs = tuple(documents)
    collisions = find_collisions(docs)
    if collisions:
        raise collisions[0]
    return {doc.route: doc for doc in sorted(docs, key=lambda d: d.route)}
