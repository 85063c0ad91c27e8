"""File watcher — signals when the content tree or config needs a rebuild.

Navigation trees are never patched in place: any relevant change means a
full build pass.  The watcher's job is only to decide which filesystem
events are relevant and to batch them (watchfiles debounces bursts such as
an editor's save-rename-delete dance into one batch).
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from watchfiles import Change, watch

from quire.config_loader import CONFIG_FILENAMES

if TYPE_CHECKING:
    from quire.config import QuireConfig


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    """A file change detected by the watcher.

    Attributes:
        path: Absolute path to the changed file.
        kind: Type of filesystem change.
        category: ``content`` for documents, ``config`` for quire.yaml & co.

    """

    path: Path
    kind: Literal["created", "modified", "deleted"]
    category: Literal["content", "config"]


# Mapping from watchfiles Change enum to our kind literals.
_CHANGE_KIND_MAP: dict[Change, Literal["created", "modified", "deleted"]] = {
    Change.added: "created",
    Change.modified: "modified",
    Change.deleted: "deleted",
}


def categorize_change(path: Path, config: QuireConfig) -> str | None:
    """Determine the category of a changed file based on its location.

    Returns None if the file cannot affect the build.
    """
    try:
        rel = path.relative_to(config.root)
    except ValueError:
        return None

    parts = rel.parts
    if not parts:
        return None

    if len(parts) == 1 and parts[0] in CONFIG_FILENAMES:
        return "config"

    try:
        content_rel = path.relative_to(config.content_path)
    except ValueError:
        return None

    if path.suffix.lower() in config.extensions:
        return "content"
    # A renamed or deleted directory shows up without a suffix.
    if not path.suffix and content_rel.parts:
        return "content"
    return None


class ContentWatcher:
    """Watches the site root and yields batches of relevant changes.

    Uses watchfiles for filesystem monitoring.  :meth:`stop` may be called
    from another thread (or a signal handler) to end iteration.

    Args:
        config: Site configuration; ``root`` is watched recursively.
        debounce_ms: Quiet period that closes a batch.

    """

    def __init__(self, config: QuireConfig, *, debounce_ms: int = 300) -> None:
        self._config = config
        self._debounce_ms = debounce_ms
        self._stop_event = threading.Event()

    def stop(self) -> None:
        """Signal the watcher to stop after the current batch."""
        self._stop_event.set()

    @property
    def config(self) -> QuireConfig:
        return self._config

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def batches(self) -> Iterator[tuple[ChangeEvent, ...]]:
        """Yield one tuple of ChangeEvents per debounced batch.

        Batches with no relevant change are skipped.  Blocks between batches.
        """
        self._stop_event.clear()
        for raw_changes in watch(
            self._config.root,
            stop_event=self._stop_event,
            debounce=self._debounce_ms,
            step=100,
        ):
            events = to_events(raw_changes, self._config)
            if events:
                yield events


def to_events(
    raw_changes: set[tuple[Change, str]], config: QuireConfig,
) -> tuple[ChangeEvent, ...]:
    """Translate a watchfiles batch into sorted, relevant ChangeEvents."""
    events: list[ChangeEvent] = []
    for change_type, path_str in raw_changes:
        path = Path(path_str)
        category = categorize_change(path, config)
        if category is None:
            continue
        kind = _CHANGE_KIND_MAP.get(change_type, "modified")
        events.append(ChangeEvent(path=path, kind=kind, category=category))  # type: ignore[arg-type]
    return tuple(sorted(events, key=lambda e: (str(e.path), e.kind)))
