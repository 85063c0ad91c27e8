"""Manifest export — hand the build to the rendering layer as JSON.

Writes a successful :class:`BuildResult` to the output directory:

    dist/routes.json       route -> {file, href, metadata, body}
    dist/navigation.json   the navigation tree
    dist/sitemap.xml       when base_url is configured

Both JSON files are written with sorted keys and a trailing newline, so two
exports of an unchanged tree are byte-identical.
"""

from __future__ import annotations

import json
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

from quire._errors import ExportError

if TYPE_CHECKING:
    from quire.config import QuireConfig
    from quire.observability.collector import BuildCollector
    from quire.pipeline import BuildResult
    from quire.routing.resolver import Document

ROUTES_FILENAME = "routes.json"
NAVIGATION_FILENAME = "navigation.json"


@dataclass(frozen=True, slots=True)
class ExportedFile:
    """Record of a single file written during export.

    Attributes:
        kind: What the file holds.
        output_path: Absolute filesystem path to the written file.
        size_bytes: Size of the written file in bytes.
        duration_ms: Time taken to serialize and write this file.

    """

    kind: Literal["routes", "navigation", "sitemap"]
    output_path: Path
    size_bytes: int
    duration_ms: float


@dataclass(frozen=True, slots=True)
class ExportResult:
    """Aggregate result of an export.

    Attributes:
        files: All files written.
        total_documents: Number of routed documents exported.
        duration_ms: Total wall-clock time for the export.
        output_dir: Absolute path to the output directory.

    """

    files: tuple[ExportedFile, ...]
    total_documents: int
    duration_ms: float
    output_dir: Path


def document_entry(doc: Document) -> dict[str, Any]:
    """JSON-safe description of one routed document."""
    meta = doc.metadata
    return {
        "file": doc.file_path,
        "href": doc.href,
        "title": meta.title,
        "description": meta.description,
        "slug": meta.slug,
        "sidebar": {
            "order": meta.sidebar_order,
            "label": meta.sidebar_label,
            "hidden": meta.sidebar_hidden,
        },
        "draft": meta.draft,
        "extra": dict(meta.extra),
        "body": doc.body,
    }


class ManifestExporter:
    """Writes a build's routes and navigation for the renderer.

    Args:
        result: A successful build.
        config: Frozen Quire configuration (output dir, base_url).
        collector: Optional collector receiving ``FileWritten`` events.

    """

    def __init__(
        self,
        result: BuildResult,
        config: QuireConfig,
        collector: BuildCollector | None = None,
    ) -> None:
        self._result = result
        self._config = config
        self._collector = collector

    def export(self) -> ExportResult:
        """Clean the output directory and write every output file.

        Raises:
            ExportError: If the build failed or a file cannot be written.

        """
        if not self._result.ok:
            msg = (
                f"Refusing to export a failed build "
                f"({len(self._result.errors)} error(s))"
            )
            raise ExportError(msg)

        start = time.perf_counter()
        output_dir = self._config.output_path
        self._clean_output(output_dir)

        files: list[ExportedFile] = []

        routes = {
            route: document_entry(doc) for route, doc in self._result.documents.items()
        }
        files.append(self._write_json("routes", output_dir / ROUTES_FILENAME, routes))

        navigation = self._result.navigation.to_dict()
        files.append(
            self._write_json("navigation", output_dir / NAVIGATION_FILENAME, navigation),
        )

        from quire.export.sitemap import write_sitemap

        sitemap = write_sitemap(
            [doc.href for doc in self._result.documents.values()],
            self._config.base_url,
            output_dir,
        )
        if sitemap is not None:
            files.append(sitemap)

        if self._collector is not None:
            for f in files:
                self._collector.record_write(
                    f.kind, str(f.output_path),
                    size_bytes=f.size_bytes, duration_ms=f.duration_ms,
                )
            self._collector.record_stage(
                "export", items=len(files), duration_ms=_since(start),
            )

        return ExportResult(
            files=tuple(files),
            total_documents=len(self._result.documents),
            duration_ms=_since(start),
            output_dir=output_dir,
        )

    def _clean_output(self, output_dir: Path) -> None:
        """Remove and recreate the output directory."""
        resolved = output_dir.resolve()
        if (
            resolved == self._config.root.resolve()
            or self._config.content_path.resolve().is_relative_to(resolved)
        ):
            msg = f"Output directory {output_dir} would overwrite site sources"
            raise ExportError(msg)
        try:
            if output_dir.exists():
                shutil.rmtree(output_dir)
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            msg = f"Cannot prepare output directory {output_dir}: {exc}"
            raise ExportError(msg) from exc

    @staticmethod
    def _write_json(
        kind: Literal["routes", "navigation"], path: Path, payload: object,
    ) -> ExportedFile:
        t0 = time.perf_counter()
        data = (json.dumps(
            payload, indent=2, sort_keys=True, ensure_ascii=False, default=str,
        ) + "\n")
        encoded = data.encode("utf-8")
        try:
            path.write_bytes(encoded)
        except OSError as exc:
            msg = f"Failed to write {path}: {exc}"
            raise ExportError(msg) from exc
        return ExportedFile(
            kind=kind, output_path=path, size_bytes=len(encoded), duration_ms=_since(t0),
        )


def _since(t0: float) -> float:
    return (time.perf_counter() - t0) * 1000
