"""Build report — the pass/fail verdict and error list for console and CI.

Respects ``NO_COLOR`` and ``TERM=dumb``; colour is also dropped when stderr
is not a terminal, so CI logs stay plain.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from quire._types import QuireMode
    from quire.config import QuireConfig
    from quire.export.manifest import ExportResult
    from quire.pipeline import BuildResult


# ---------------------------------------------------------------------------
# ANSI helpers — respect NO_COLOR (https://no-color.org)
# ---------------------------------------------------------------------------

def supports_color() -> bool:
    """Return True if stderr supports ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


class _Palette:
    __slots__ = ("bold", "dim", "green", "red", "reset", "yellow")

    def __init__(self, enabled: bool) -> None:
        self.reset = "\033[0m" if enabled else ""
        self.bold = "\033[1m" if enabled else ""
        self.dim = "\033[2m" if enabled else ""
        self.green = "\033[32m" if enabled else ""
        self.yellow = "\033[33m" if enabled else ""
        self.red = "\033[31m" if enabled else ""


_MODE_LABELS: dict[str, str] = {
    "build": "build",
    "check": "check",
    "watch": "watch",
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def format_report(
    result: BuildResult,
    config: QuireConfig,
    mode: QuireMode,
    *,
    color: bool | None = None,
    show_warnings: bool = True,
) -> str:
    """Render the build report as text.

    Args:
        result: Outcome of the build pass.
        config: Resolved QuireConfig.
        mode: One of ``"build"``, ``"check"``, ``"watch"``.
        color: Force colour on or off; None detects from the terminal.
        show_warnings: Include the warning list.

    """
    from quire import __version__

    c = _Palette(supports_color() if color is None else color)
    badge = f"{c.dim}[{_MODE_LABELS.get(mode, mode)}]{c.reset}"

    lines: list[str] = [
        "",
        f"  {c.bold}Quire{c.reset} {c.dim}v{__version__}{c.reset}  {badge}",
        f"  {c.dim}{'─' * 43}{c.reset}",
    ]

    doc_count = len(result.documents)
    docs_label = "document" if doc_count == 1 else "documents"
    lines.append(
        f"  {c.dim}├─{c.reset} {doc_count} {docs_label} routed "
        f"{c.dim}in {result.duration_ms:.0f}ms{c.reset}",
    )
    lines.append(f"  {c.dim}├─{c.reset} content: {c.dim}{config.content_path}{c.reset}")

    if result.warnings:
        n = len(result.warnings)
        lines.append(f"  {c.dim}├─{c.reset} {n} warning{'s' if n != 1 else ''}")

    if result.ok:
        lines.append(f"  {c.dim}└─{c.reset} {c.green}{c.bold}PASS{c.reset}")
    else:
        n = len(result.errors)
        lines.append(
            f"  {c.dim}└─{c.reset} {c.red}{c.bold}FAIL{c.reset} "
            f"— {n} error{'s' if n != 1 else ''}",
        )

    if result.errors:
        lines.append("")
        lines.extend(f"  {c.red}✗{c.reset} {error}" for error in result.errors)

    if show_warnings and result.warnings:
        lines.append("")
        lines.extend(f"  {c.yellow}!{c.reset} {warning}" for warning in result.warnings)

    lines.append("")
    return "\n".join(lines)


def print_report(
    result: BuildResult,
    config: QuireConfig,
    mode: QuireMode,
    *,
    show_warnings: bool = True,
) -> None:
    """Print the build report to stderr."""
    print(format_report(result, config, mode, show_warnings=show_warnings), file=sys.stderr)


def format_export_summary(result: ExportResult) -> str:
    """Render the export completion summary."""
    n = result.total_documents
    lines = [
        "─" * 41,
        f"  Exported {n} document{'s' if n != 1 else ''}",
        f"  Wrote {', '.join(f.output_path.name for f in result.files)}",
        f"  Output: {result.output_dir}",
        f"  Done in {result.duration_ms:.0f}ms",
        "",
    ]
    return "\n".join(lines)
