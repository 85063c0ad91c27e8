"""Document loader — scan the content tree into raw DocumentRecords.

Walks a content directory for Markdown sources and splits each file into its
frontmatter mapping and opaque body:

    content/guides/kotlin/index.md     -> file_path "guides/kotlin/index.md"
    content/guides/java/hibernate.mdx  -> file_path "guides/java/hibernate.mdx"

Files and directories whose names start with ``.`` or ``_`` are skipped.
Discovery order is the sorted relative path, so every scan of an unchanged
tree yields the same sequence.
"""

from __future__ import annotations

from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from quire._errors import LoadError
from quire._types import Frontmatter, SourcePath
from quire.content.frontmatter import (
    FrontmatterSyntaxError,
    parse_frontmatter,
    split_frontmatter,
)

DEFAULT_EXTENSIONS: tuple[str, ...] = (".md", ".mdx")


@dataclass(frozen=True, slots=True)
class DocumentRecord:
    """One source file as read from disk, before validation.

    Attributes:
        file_path: POSIX path relative to the content root.
        frontmatter: Parsed frontmatter, read-only; unknown keys kept verbatim.
        body: Everything after the closing ``---``, untouched.

    """

    file_path: SourcePath
    frontmatter: Frontmatter
    body: str

    def __post_init__(self) -> None:
        if not isinstance(self.frontmatter, MappingProxyType):
            object.__setattr__(
                self, "frontmatter", MappingProxyType(dict(self.frontmatter)),
            )


@dataclass(frozen=True, slots=True)
class LoadResult:
    """Outcome of a fail-soft scan.

    Attributes:
        documents: Records that loaded, in sorted path order.
        errors: Per-file load failures, in sorted path order.

    """

    documents: tuple[DocumentRecord, ...] = ()
    errors: tuple[LoadError, ...] = field(default=())

    @property
    def ok(self) -> bool:
        return not self.errors


def discover_sources(
    root: Path,
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
) -> tuple[Path, ...]:
    """Return every content file under *root*, sorted by relative path.

    Raises:
        LoadError: ``not_found`` if *root* is not an existing directory.

    """
    if not root.is_dir():
        raise LoadError("not_found", str(root), "content root does not exist")

    wanted = {ext.lower() for ext in extensions}
    found: list[Path] = []
    for path in root.rglob("*"):
        if not path.is_file() or path.suffix.lower() not in wanted:
            continue
        relative = path.relative_to(root)
        if any(part.startswith((".", "_")) for part in relative.parts):
            continue
        found.append(path)

    return tuple(sorted(found, key=lambda p: p.relative_to(root).as_posix()))


def load_document(path: Path, root: Path) -> DocumentRecord:
    """Read one source file into a DocumentRecord.

    Raises:
        LoadError: ``unreadable`` on I/O or UTF-8 decoding failure,
            ``malformed_frontmatter`` when the delimiters or YAML are broken.

    """
    file_path = path.relative_to(root).as_posix()
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise LoadError("unreadable", file_path, str(exc)) from exc

    try:
        source, body = split_frontmatter(text)
        frontmatter = parse_frontmatter(source)
    except FrontmatterSyntaxError as exc:
        raise LoadError("malformed_frontmatter", file_path, str(exc)) from exc

    return DocumentRecord(file_path=file_path, frontmatter=frontmatter, body=body)


class DocumentLoader:
    """Lazy, restartable scanner over a content directory.

    Iterating the loader rescans the directory each time and stops at the
    first broken file.  :meth:`load` is the fail-soft variant used by the
    build: every file is attempted and failures are collected.

    Args:
        root: Content root directory.
        extensions: File extensions treated as documents.

    """

    def __init__(
        self,
        root: Path,
        extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
    ) -> None:
        self._root = root
        self._extensions = extensions

    @property
    def root(self) -> Path:
        return self._root

    def __iter__(self) -> Iterator[DocumentRecord]:
        for path in discover_sources(self._root, self._extensions):
            yield load_document(path, self._root)

    def load(self, *, workers: int = 0) -> LoadResult:
        """Load every source file, collecting per-file errors.

        With ``workers > 0`` files are read on a thread pool.  Results are
        placed back into their sorted slot so the output does not depend on
        which read finishes first.

        Raises:
            LoadError: ``not_found`` if the content root is missing.

        """
        paths = discover_sources(self._root, self._extensions)

        if workers > 0 and len(paths) > 1:
            with ThreadPoolExecutor(
                max_workers=workers, thread_name_prefix="quire-loader",
            ) as pool:
                outcomes = list(pool.map(self._try_load, paths))
        else:
            outcomes = [self._try_load(path) for path in paths]

        documents: list[DocumentRecord] = []
        errors: list[LoadError] = []
        for outcome in outcomes:
            if isinstance(outcome, LoadError):
                errors.append(outcome)
            else:
                documents.append(outcome)
        return LoadResult(documents=tuple(documents), errors=tuple(errors))

    def _try_load(self, path: Path) -> DocumentRecord | LoadError:
        try:
            return load_document(path, self._root)
        except LoadError as exc:
            return exc
