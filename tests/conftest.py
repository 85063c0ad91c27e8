"""Shared test fixtures for quire."""

from __future__ import annotations

from pathlib import Path

import pytest

from quire.content.validator import DocumentMetadata
from quire.routing.resolver import Document, derive_route


def write_doc(
    content_root: Path,
    rel_path: str,
    *,
    title: str | None = "Untitled",
    body: str = "Body text.\n",
    **frontmatter: object,
) -> Path:
    """Write a Markdown file with simple ``key: value`` frontmatter.

    Nested mappings are emitted one level deep, e.g. ``sidebar={"order": 1}``.
    Pass ``title=None`` to omit the title.
    """
    lines = ["---"]
    if title is not None:
        lines.append(f"title: {title!r}" if ":" in title else f"title: {title}")
    for key, value in frontmatter.items():
        if isinstance(value, dict):
            lines.append(f"{key}:")
            lines.extend(f"  {k}: {_scalar(v)}" for k, v in value.items())
        else:
            lines.append(f"{key}: {_scalar(value)}")
    lines.append("---")
    path = content_root / rel_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n" + body, encoding="utf-8")
    return path


def _scalar(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return f'"{value}"'
    return str(value)


def make_document(
    file_path: str,
    *,
    title: str = "Doc",
    order: int | None = None,
    label: str | None = None,
    slug: str | None = None,
    hidden: bool = False,
    route: str | None = None,
) -> Document:
    """Build a routed Document directly, bypassing the filesystem."""
    metadata = DocumentMetadata(
        title=title,
        description="d",
        slug=slug,
        sidebar_order=order,
        sidebar_label=label,
        sidebar_hidden=hidden,
    )
    if route is None:
        route = slug.strip("/") if slug is not None else derive_route(file_path)
    return Document(
        file_path=file_path,
        metadata=metadata,
        body="",
        route=route,
        frontmatter={},
    )


@pytest.fixture
def content_root(tmp_path: Path) -> Path:
    """An empty content/ directory inside a temp site root."""
    root = tmp_path / "content"
    root.mkdir()
    return root


@pytest.fixture
def tmp_site(tmp_path: Path) -> Path:
    """Create a small docs site resembling a real guides tree.

    Returns the site root containing content/.
    """
    content = tmp_path / "content"
    content.mkdir()
    write_doc(content, "index.md", title="Home", description="Start here")
    write_doc(
        content, "guides/kotlin/index.md",
        title="Kotlin", description="Kotlin guides", sidebar={"order": 0},
    )
    write_doc(
        content, "guides/kotlin/coroutines.md",
        title="Coroutines", description="Structured concurrency", sidebar={"order": 1},
    )
    write_doc(
        content, "guides/mongodb/aggregation.md",
        title="Aggregation", description="Pipelines",
    )
    write_doc(
        content, "guides/mongodb/indexes.mdx",
        title="Indexes", description="B-trees", sidebar={"label": "Index Basics"},
    )
    return tmp_path
