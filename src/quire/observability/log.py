"""Event log — the record of one build pass, kept for inspection and tests.

A bounded ring buffer of ``BuildEvent`` objects.  When it fills up the oldest
events fall off the front.  Filters combine: type, pipeline stage, the file an
event concerns, and a monotonic timestamp floor.

Thread Safety:
    Every access goes through a ``threading.Lock``; loader worker threads
    may append while the main thread reads.

"""

import threading
from collections import Counter, deque
from collections.abc import Iterable
from typing import Any

from quire.observability.events import BuildEvent, DocumentRejected


def _subject(event: BuildEvent) -> str:
    # DocumentRejected names a source file, FileWritten an output file.
    return getattr(event, "path", None) or getattr(event, "target", None) or ""


class EventLog:
    """Bounded, queryable event store.

    Args:
        max_events: Capacity of the ring buffer.

    """

    __slots__ = ("_events", "_lock", "_max_events")

    def __init__(self, max_events: int = 10_000) -> None:
        self._max_events = max_events
        self._events: deque[BuildEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    @property
    def max_events(self) -> int:
        return self._max_events

    def append(self, event: BuildEvent) -> None:
        with self._lock:
            self._events.append(event)

    def append_many(self, events: Iterable[BuildEvent]) -> None:
        batch = list(events)
        with self._lock:
            self._events.extend(batch)

    def query(
        self,
        *,
        event_type: type | None = None,
        stage: str | None = None,
        since_ns: int = 0,
        path: str | None = None,
        limit: int = 100,
    ) -> list[BuildEvent]:
        """Return matching events, newest first.

        Args:
            event_type: Keep only instances of this class.
            stage: Keep only events tagged with this pipeline stage.
            since_ns: Drop events stamped before this ``now_ns()`` value.
            path: Substring of the source or output file the event concerns.
            limit: Stop after this many matches.

        """
        with self._lock:
            snapshot = list(self._events)

        matches: list[BuildEvent] = []
        for event in reversed(snapshot):
            if len(matches) == limit:
                break
            if event_type is not None and not isinstance(event, event_type):
                continue
            if stage is not None and getattr(event, "stage", None) != stage:
                continue
            if event.timestamp_ns < since_ns:
                continue
            if path is not None and path not in _subject(event):
                continue
            matches.append(event)
        return matches

    def rejections(self) -> list[DocumentRejected]:
        """Every rejected document, oldest first."""
        with self._lock:
            return [e for e in self._events if isinstance(e, DocumentRejected)]

    def recent(self, n: int = 20) -> list[BuildEvent]:
        """The *n* newest events, oldest first."""
        with self._lock:
            snapshot = list(self._events)
        return snapshot[-n:]

    def clear(self) -> int:
        """Empty the log; return how many events were dropped."""
        with self._lock:
            dropped = len(self._events)
            self._events.clear()
        return dropped

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def stats(self) -> dict[str, Any]:
        """Counts by event class and by rejection kind."""
        with self._lock:
            snapshot = list(self._events)

        by_type = Counter(type(event).__name__ for event in snapshot)
        rejected = Counter(
            event.kind for event in snapshot if isinstance(event, DocumentRejected)
        )
        return {
            "total": len(snapshot),
            "max_events": self._max_events,
            "by_type": dict(by_type),
            "rejected_by_kind": dict(rejected),
        }
