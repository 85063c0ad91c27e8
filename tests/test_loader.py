"""Tests for quire.content.loader — discovery and DocumentRecord loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from quire._errors import LoadError
from quire.content.loader import (
    DocumentLoader,
    DocumentRecord,
    discover_sources,
    load_document,
)

from .conftest import write_doc


# ---------------------------------------------------------------------------
# DocumentRecord
# ---------------------------------------------------------------------------


class TestDocumentRecord:
    """Verify DocumentRecord is frozen and its frontmatter read-only."""

    def test_frozen(self) -> None:
        record = DocumentRecord(file_path="a.md", frontmatter={"title": "A"}, body="")
        with pytest.raises(AttributeError):
            record.body = "changed"  # type: ignore[misc]

    def test_frontmatter_read_only(self) -> None:
        record = DocumentRecord(file_path="a.md", frontmatter={"title": "A"}, body="")
        with pytest.raises(TypeError):
            record.frontmatter["title"] = "B"  # type: ignore[index]

    def test_source_mapping_not_shared(self) -> None:
        source = {"title": "A"}
        record = DocumentRecord(file_path="a.md", frontmatter=source, body="")
        source["title"] = "B"
        assert record.frontmatter["title"] == "A"

    def test_equality(self) -> None:
        a = DocumentRecord(file_path="a.md", frontmatter={"title": "A"}, body="x")
        b = DocumentRecord(file_path="a.md", frontmatter={"title": "A"}, body="x")
        assert a == b


# ---------------------------------------------------------------------------
# discover_sources
# ---------------------------------------------------------------------------


class TestDiscoverSources:
    """File discovery under the content root."""

    def test_missing_root_raises_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(LoadError) as exc_info:
            discover_sources(tmp_path / "nope")
        assert exc_info.value.kind == "not_found"

    def test_file_as_root_raises_not_found(self, tmp_path: Path) -> None:
        f = tmp_path / "file.md"
        f.write_text("x")
        with pytest.raises(LoadError) as exc_info:
            discover_sources(f)
        assert exc_info.value.kind == "not_found"

    def test_empty_root(self, content_root: Path) -> None:
        assert discover_sources(content_root) == ()

    def test_only_content_extensions(self, content_root: Path) -> None:
        write_doc(content_root, "a.md")
        write_doc(content_root, "b.mdx")
        (content_root / "c.txt").write_text("ignored")
        (content_root / "d.png").write_bytes(b"\x89PNG")
        names = [p.name for p in discover_sources(content_root)]
        assert names == ["a.md", "b.mdx"]

    def test_extension_match_is_case_insensitive(self, content_root: Path) -> None:
        write_doc(content_root, "README.MD")
        assert len(discover_sources(content_root)) == 1

    def test_custom_extensions(self, content_root: Path) -> None:
        write_doc(content_root, "a.md")
        write_doc(content_root, "b.markdown")
        names = [p.name for p in discover_sources(content_root, (".markdown",))]
        assert names == ["b.markdown"]

    def test_sorted_by_relative_path(self, content_root: Path) -> None:
        for rel in ("z.md", "guides/b.md", "guides/a.md", "a.md"):
            write_doc(content_root, rel)
        rels = [p.relative_to(content_root).as_posix() for p in discover_sources(content_root)]
        assert rels == ["a.md", "guides/a.md", "guides/b.md", "z.md"]

    def test_skips_hidden_and_private(self, content_root: Path) -> None:
        write_doc(content_root, "visible.md")
        write_doc(content_root, ".hidden.md")
        write_doc(content_root, "_partial.md")
        write_doc(content_root, ".git/notes.md")
        write_doc(content_root, "_drafts/idea.md")
        names = [p.name for p in discover_sources(content_root)]
        assert names == ["visible.md"]


# ---------------------------------------------------------------------------
# load_document
# ---------------------------------------------------------------------------


class TestLoadDocument:
    """Reading a single file into a DocumentRecord."""

    def test_relative_posix_path(self, content_root: Path) -> None:
        path = write_doc(content_root, "guides/kotlin/index.md", title="Kotlin")
        record = load_document(path, content_root)
        assert record.file_path == "guides/kotlin/index.md"

    def test_frontmatter_and_body(self, content_root: Path) -> None:
        path = write_doc(content_root, "a.md", title="A", body="# Heading\n\nText\n")
        record = load_document(path, content_root)
        assert record.frontmatter["title"] == "A"
        assert record.body == "# Heading\n\nText\n"

    def test_unknown_keys_preserved(self, content_root: Path) -> None:
        path = write_doc(content_root, "a.md", template="splash", tags="x")
        record = load_document(path, content_root)
        assert record.frontmatter["template"] == "splash"
        assert record.frontmatter["tags"] == "x"

    def test_missing_frontmatter(self, content_root: Path) -> None:
        path = content_root / "plain.md"
        path.write_text("# No frontmatter\n")
        with pytest.raises(LoadError) as exc_info:
            load_document(path, content_root)
        assert exc_info.value.kind == "malformed_frontmatter"
        assert exc_info.value.file_path == "plain.md"

    def test_unbalanced_delimiters(self, content_root: Path) -> None:
        path = content_root / "open.md"
        path.write_text("---\ntitle: Open\n# Body\n")
        with pytest.raises(LoadError) as exc_info:
            load_document(path, content_root)
        assert exc_info.value.kind == "malformed_frontmatter"

    def test_bad_yaml(self, content_root: Path) -> None:
        path = content_root / "bad.md"
        path.write_text("---\ntitle: [oops\n---\n")
        with pytest.raises(LoadError) as exc_info:
            load_document(path, content_root)
        assert exc_info.value.kind == "malformed_frontmatter"

    def test_invalid_utf8(self, content_root: Path) -> None:
        path = content_root / "binary.md"
        path.write_bytes(b"---\ntitle: \xff\xfe\n---\n")
        with pytest.raises(LoadError) as exc_info:
            load_document(path, content_root)
        assert exc_info.value.kind == "unreadable"

    def test_source_file_untouched(self, content_root: Path) -> None:
        path = write_doc(content_root, "a.md", title="A")
        before = path.read_bytes()
        load_document(path, content_root)
        assert path.read_bytes() == before


# ---------------------------------------------------------------------------
# DocumentLoader
# ---------------------------------------------------------------------------


class TestDocumentLoader:
    """Lazy iteration and fail-soft loading."""

    def test_iteration_is_lazy_and_restartable(self, content_root: Path) -> None:
        write_doc(content_root, "a.md", title="A")
        write_doc(content_root, "b.md", title="B")
        loader = DocumentLoader(content_root)
        first = [r.file_path for r in loader]
        second = [r.file_path for r in loader]
        assert first == second == ["a.md", "b.md"]

    def test_rescan_sees_new_files(self, content_root: Path) -> None:
        write_doc(content_root, "a.md")
        loader = DocumentLoader(content_root)
        assert len(list(loader)) == 1
        write_doc(content_root, "b.md")
        assert len(list(loader)) == 2

    def test_strict_iteration_raises_on_malformed(self, content_root: Path) -> None:
        (content_root / "a.md").write_text("no frontmatter")
        with pytest.raises(LoadError):
            list(DocumentLoader(content_root))

    def test_iteration_missing_root(self, tmp_path: Path) -> None:
        with pytest.raises(LoadError) as exc_info:
            list(DocumentLoader(tmp_path / "missing"))
        assert exc_info.value.kind == "not_found"

    def test_load_collects_errors(self, content_root: Path) -> None:
        write_doc(content_root, "a.md", title="A")
        (content_root / "b.md").write_text("no frontmatter")
        write_doc(content_root, "c.md", title="C")
        result = DocumentLoader(content_root).load()
        assert [r.file_path for r in result.documents] == ["a.md", "c.md"]
        assert [e.file_path for e in result.errors] == ["b.md"]
        assert result.ok is False

    def test_load_missing_root_is_fatal(self, tmp_path: Path) -> None:
        with pytest.raises(LoadError) as exc_info:
            DocumentLoader(tmp_path / "missing").load()
        assert exc_info.value.kind == "not_found"

    def test_threaded_load_matches_sequential(self, content_root: Path) -> None:
        for i in range(25):
            write_doc(content_root, f"section-{i % 3}/page-{i:02d}.md", title=f"P{i}")
        (content_root / "section-1" / "broken.md").write_text("nope")
        sequential = DocumentLoader(content_root).load()
        threaded = DocumentLoader(content_root).load(workers=4)
        assert threaded.documents == sequential.documents
        assert [e.file_path for e in threaded.errors] == [
            e.file_path for e in sequential.errors
        ]
