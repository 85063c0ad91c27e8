"""Quire configuration.

QuireConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True, slots=True)
class QuireConfig:
    """Configuration for a Quire build.

    Attributes:
        root: Path to the site root directory (contains content/, quire.yaml).
              Always resolved to an absolute path on construction.
        content_dir: Directory containing Markdown content, relative to root.
        extensions: File extensions treated as documents.
        output: Output directory for ``quire build``.
        base_url: Base URL for the site (used for sitemap generation).
        site_title: Label of the navigation root.
        max_title_length: Upper bound on frontmatter ``title`` length.
        include_drafts: Keep ``draft: true`` documents in the build.
        workers: Thread count for reading files (0 = sequential).
        sidebar: Declared sidebar items; empty means a fully autogenerated tree.

    """

    root: Path = field(default_factory=Path.cwd)
    content_dir: str = "content"
    extensions: tuple[str, ...] = (".md", ".mdx")
    output: Path = field(default_factory=lambda: Path("dist"))
    base_url: str = ""
    site_title: str = "Docs"
    max_title_length: int = 200
    include_drafts: bool = False
    workers: int = 0
    sidebar: tuple[dict[str, Any] | str, ...] = ()

    def __post_init__(self) -> None:
        # watchfiles reports absolute paths; keep root comparable with them.
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())
        exts = tuple(
            ext.lower() if ext.startswith(".") else "." + ext.lower()
            for ext in self.extensions
        )
        object.__setattr__(self, "extensions", exts)

    @property
    def content_path(self) -> Path:
        """Absolute path to content directory."""
        return self.root / self.content_dir

    @property
    def output_path(self) -> Path:
        """Absolute path to output directory."""
        if self.output.is_absolute():
            return self.output
        return self.root / self.output
