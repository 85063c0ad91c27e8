"""Metadata validator — turn raw frontmatter into typed DocumentMetadata.

Validation is fail-soft per document and fail-hard per build: every record is
checked, every violation is reported, and the caller decides the verdict from
``ValidationResult.ok``.

Two spellings of the sidebar fields are accepted::

    sidebar:            # nested
      order: 2
      label: Intro
      hidden: false

    sidebarOrder: 2     # flat
    sidebarLabel: Intro

The nested form wins when both are present.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal

from quire._errors import ValidationError, ValidationErrorKind
from quire.content.loader import DocumentRecord

DEFAULT_MAX_TITLE_LENGTH = 200

# Alphanumerics, "-" and "/"; empty inner segments are rejected separately.
_SLUG_RE = re.compile(r"[A-Za-z0-9/-]*")

# Keys lifted into DocumentMetadata; everything else lands in ``extra``.
_RESERVED_KEYS: frozenset[str] = frozenset({
    "title",
    "description",
    "slug",
    "sidebar",
    "sidebarOrder",
    "sidebarLabel",
    "draft",
})

_MISSING = object()


@dataclass(frozen=True, slots=True)
class DocumentMetadata:
    """Validated frontmatter of one document.

    Attributes:
        title: Non-empty page title.
        description: Short summary, or None when the author left it out.
        slug: Explicit route override, or None.
        sidebar_order: Position among siblings, or None for unordered.
        sidebar_label: Navigation label override, or None.
        sidebar_hidden: Keep the page out of the navigation tree.
        draft: Page is unpublished.
        extra: Frontmatter keys quire does not interpret, verbatim.

    """

    title: str
    description: str | None = None
    slug: str | None = None
    sidebar_order: int | None = None
    sidebar_label: str | None = None
    sidebar_hidden: bool = False
    draft: bool = False
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.extra, MappingProxyType):
            object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))


@dataclass(frozen=True, slots=True)
class ValidatedRecord:
    """A DocumentRecord whose metadata passed validation."""

    file_path: str
    metadata: DocumentMetadata
    body: str
    frontmatter: Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class ValidationWarning:
    """A non-fatal metadata issue (the build still passes)."""

    kind: Literal["missing_description"]
    file_path: str

    def __str__(self) -> str:
        return f"{self.kind}: {self.file_path}"


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of validating a batch of records.

    Attributes:
        valid: Records that passed, in input order.
        errors: Every violation found, grouped by record in input order.
        warnings: Recommendations that did not fail the record.

    """

    valid: tuple[ValidatedRecord, ...] = ()
    errors: tuple[ValidationError, ...] = ()
    warnings: tuple[ValidationWarning, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_documents(
    records: Iterable[DocumentRecord],
    *,
    max_title_length: int = DEFAULT_MAX_TITLE_LENGTH,
) -> ValidationResult:
    """Validate every record and collect errors and warnings.

    A record with any error is excluded from ``valid``; the others carry on.
    """
    valid: list[ValidatedRecord] = []
    errors: list[ValidationError] = []
    warnings: list[ValidationWarning] = []

    for record in records:
        metadata, record_errors, record_warnings = check_record(
            record, max_title_length=max_title_length,
        )
        errors.extend(record_errors)
        warnings.extend(record_warnings)
        if metadata is not None:
            valid.append(ValidatedRecord(
                file_path=record.file_path,
                metadata=metadata,
                body=record.body,
                frontmatter=record.frontmatter,
            ))

    return ValidationResult(
        valid=tuple(valid), errors=tuple(errors), warnings=tuple(warnings),
    )


def check_record(
    record: DocumentRecord,
    *,
    max_title_length: int = DEFAULT_MAX_TITLE_LENGTH,
) -> tuple[DocumentMetadata | None, list[ValidationError], list[ValidationWarning]]:
    """Validate a single record.

    Returns the typed metadata (None if any rule failed) together with the
    errors and warnings raised against it.
    """
    fm = record.frontmatter
    path = record.file_path
    errors: list[ValidationError] = []
    warnings: list[ValidationWarning] = []

    def fail(kind: ValidationErrorKind, detail: str) -> None:
        errors.append(ValidationError(kind, path, detail))

    # title
    title = fm.get("title")
    if title is None:
        fail("missing_title", "'title' is required")
    elif not isinstance(title, str):
        fail("missing_title", f"'title' must be a string, got {type(title).__name__}")
    elif not title.strip():
        fail("missing_title", "'title' is empty")
    elif len(title) > max_title_length:
        fail("missing_title", f"'title' exceeds {max_title_length} characters")

    # description
    description = fm.get("description")
    if description is None:
        warnings.append(ValidationWarning("missing_description", path))
    elif not isinstance(description, str):
        fail("invalid_description", "'description' must be a string")

    # slug
    slug = fm.get("slug")
    if slug is not None and not is_valid_slug(slug):
        fail("invalid_slug", f"{slug!r} may only contain letters, digits, '-' and '/'")

    sidebar = fm.get("sidebar", {})
    if sidebar is None:
        sidebar = {}
    if not isinstance(sidebar, Mapping):
        fail("invalid_order", "'sidebar' must be a mapping")
        sidebar = {}

    # sidebar.order / sidebarOrder
    order = _pick(sidebar, "order", fm, "sidebarOrder")
    if order is not _MISSING and order is not None:
        if isinstance(order, bool) or not isinstance(order, int) or order < 0:
            fail("invalid_order", f"sidebar order must be an integer >= 0, got {order!r}")
    else:
        order = None

    # sidebar.label / sidebarLabel
    label = _pick(sidebar, "label", fm, "sidebarLabel")
    if label is not _MISSING and label is not None:
        if not isinstance(label, str) or not label.strip():
            fail("invalid_label", "sidebar label must be a non-empty string")
    else:
        label = None

    hidden = sidebar.get("hidden", False)
    if not isinstance(hidden, bool):
        fail("invalid_flag", "'sidebar.hidden' must be true or false")

    draft = fm.get("draft", False)
    if not isinstance(draft, bool):
        fail("invalid_flag", "'draft' must be true or false")

    if errors:
        return None, errors, warnings

    extra = {k: v for k, v in fm.items() if k not in _RESERVED_KEYS}
    sidebar_extra = {
        k: v for k, v in sidebar.items() if k not in {"order", "label", "hidden"}
    }
    if sidebar_extra:
        extra["sidebar"] = sidebar_extra

    metadata = DocumentMetadata(
        title=title,
        description=description,
        slug=slug,
        sidebar_order=order,
        sidebar_label=label,
        sidebar_hidden=hidden,
        draft=draft,
        extra=extra,
    )
    return metadata, errors, warnings


def is_valid_slug(slug: object) -> bool:
    """Return True if *slug* is a usable route override.

    ``""`` and ``"/"`` denote the site root.
    """
    if not isinstance(slug, str) or not _SLUG_RE.fullmatch(slug):
        return False
    stripped = slug.strip("/")
    return "//" not in stripped


def _pick(
    nested: Mapping[str, Any], nested_key: str,
    flat: Mapping[str, Any], flat_key: str,
) -> Any:
    if nested_key in nested:
        return nested[nested_key]
    return flat.get(flat_key, _MISSING)
