"""Quire error hierarchy.

All quire-specific errors inherit from QuireError for easy catching.

Per-document errors (``LoadError`` for a single file, ``ValidationError``,
``RouteCollisionError``) are collected into the build report rather than
raised out of the pipeline.  ``LoadError`` for a missing content root and
``ConfigError`` abort the build immediately.
"""

from __future__ import annotations

from typing import Literal, TypeAlias

LoadErrorKind: TypeAlias = Literal["not_found", "malformed_frontmatter", "unreadable"]

ValidationErrorKind: TypeAlias = Literal[
    "missing_title",
    "invalid_description",
    "invalid_order",
    "invalid_slug",
    "invalid_label",
    "invalid_flag",
]


class QuireError(Exception):
    """Base error for all quire operations."""


class ConfigError(QuireError):
    """Invalid or missing configuration."""


class LoadError(QuireError):
    """The content tree or a single source file could not be loaded.

    Args:
        kind: ``not_found`` for a missing content root,
            ``malformed_frontmatter`` for a broken delimiter pair or YAML block,
            ``unreadable`` for I/O or decoding failures.
        file_path: Offending path (content-relative for documents).
        detail: Human-readable explanation.

    """

    def __init__(self, kind: LoadErrorKind, file_path: str, detail: str = "") -> None:
        self.kind = kind
        self.file_path = file_path
        self.detail = detail
        super().__init__(_format(kind, file_path, detail))


class ValidationError(QuireError):
    """A document's metadata violates the frontmatter schema."""

    def __init__(
        self, kind: ValidationErrorKind, file_path: str, detail: str = "",
    ) -> None:
        self.kind = kind
        self.file_path = file_path
        self.detail = detail
        super().__init__(_format(kind, file_path, detail))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return (self.kind, self.file_path) == (other.kind, other.file_path)

    def __hash__(self) -> int:
        return hash((self.kind, self.file_path))


class RouteCollisionError(QuireError):
    """Two documents resolve to the same route.

    Args:
        route: The contested route.
        first: Source file that claimed the route first (sorted order).
        second: Source file that collided with it.

    """

    def __init__(self, route: str, first: str, second: str) -> None:
        self.route = route
        self.first = first
        self.second = second
        super().__init__(
            f"Route {route!r} is claimed by both {first} and {second}",
        )

    @property
    def file_paths(self) -> tuple[str, str]:
        """Both colliding source files."""
        return (self.first, self.second)


class ExportError(QuireError):
    """Error while writing build output."""


def _format(kind: str, file_path: str, detail: str) -> str:
    msg = f"{kind}: {file_path}"
    if detail:
        msg += f" ({detail})"
    return msg
