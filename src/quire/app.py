"""Quire application — the three public entry points.

``build`` runs the pipeline and writes the renderer hand-off, ``check`` runs
the pipeline only, and ``watch`` rebuilds on every relevant change.  Each
call loads configuration afresh and threads the result back to the caller;
nothing is cached between calls.
"""

import sys
from pathlib import Path

from quire._errors import QuireError
from quire._types import QuireMode
from quire.config import QuireConfig
from quire.config_loader import load_config
from quire.observability.collector import BuildCollector
from quire.pipeline import BuildResult, run_pipeline


def _run(
    config: QuireConfig,
    mode: QuireMode,
    collector: BuildCollector,
    *,
    quiet: bool,
    show_warnings: bool = True,
) -> BuildResult:
    from quire.report import print_report

    result = run_pipeline(config, collector)
    if not quiet:
        print_report(result, config, mode, show_warnings=show_warnings)
    return result


def check(
    root: str | Path = ".",
    *,
    quiet: bool = False,
    show_warnings: bool = True,
    **kwargs: object,
) -> BuildResult:
    """Validate the content tree without writing anything.

    Args:
        root: Path to the site root directory.
        quiet: Suppress the report on stderr.
        show_warnings: List warnings in the report.
        **kwargs: Override QuireConfig fields.

    Raises:
        LoadError: If the content root does not exist.
        ConfigError: If the configuration is invalid.

    """
    config = load_config(Path(root), **kwargs)
    return _run(
        config, "check", BuildCollector(), quiet=quiet, show_warnings=show_warnings,
    )


def build(root: str | Path = ".", *, quiet: bool = False, **kwargs: object) -> BuildResult:
    """Build the site and write routes, navigation and sitemap.

    Output is only written when the build passes; a failed build leaves the
    previous output untouched.

    Args:
        root: Path to the site root directory.
        quiet: Suppress the report on stderr.
        **kwargs: Override QuireConfig fields.

    Raises:
        LoadError: If the content root does not exist.
        ConfigError: If the configuration is invalid.
        ExportError: If output cannot be written.

    """
    from quire.export.manifest import ManifestExporter
    from quire.report import format_export_summary

    config = load_config(Path(root), **kwargs)
    collector = BuildCollector()
    result = _run(config, "build", collector, quiet=quiet)
    if not result.ok:
        return result

    exported = ManifestExporter(result, config, collector).export()
    if not quiet:
        print(format_export_summary(exported), file=sys.stderr)
    return result


def watch(root: str | Path = ".", *, write: bool = True, **kwargs: object) -> None:
    """Build once, then rebuild after every content or config change.

    Each rebuild reloads configuration and runs a full pass; a changed
    configuration also restarts the watcher on the new paths.  Errors are
    reported and the watcher keeps running.  Stops on Ctrl+C.

    Args:
        root: Path to the site root directory.
        write: Write output after each passing build (``build``) rather than
            only validating (``check``).
        **kwargs: Override QuireConfig fields.

    """
    from quire.content.watcher import ContentWatcher

    step = build if write else check
    root_path = Path(root)

    _guarded(step, root_path, kwargs)

    config = load_config(root_path, **kwargs)
    watcher = ContentWatcher(config)
    print("  Watching for changes...", file=sys.stderr)
    try:
        while True:
            for events in watcher.batches():
                names = ", ".join(sorted({e.path.name for e in events}))
                print(f"  Changed: {names}", file=sys.stderr)
                _guarded(step, root_path, kwargs)
                if any(e.category == "config" for e in events):
                    reloaded = _reload_config(root_path, kwargs)
                    if reloaded is not None and reloaded != config:
                        break
            else:
                return
            # Content paths may have moved; watch against the new config.
            watcher.stop()
            config = reloaded
            watcher = ContentWatcher(config)
    except KeyboardInterrupt:
        watcher.stop()


def _reload_config(root: Path, kwargs: dict[str, object]) -> QuireConfig | None:
    try:
        return load_config(root, **kwargs)
    except QuireError:
        # Already reported by the rebuild that just ran.
        return None


def _guarded(step: object, root: Path, kwargs: dict[str, object]) -> BuildResult | None:
    try:
        return step(root, **kwargs)  # type: ignore[operator]
    except QuireError as exc:
        print(f"  Build error: {exc}", file=sys.stderr)
        return None
