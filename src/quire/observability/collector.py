"""Build collector — the one place pipeline code reports events through.

Stages call the ``record_*`` methods; the collector stamps each event and
stores it in an :class:`EventLog`.  ``app.build`` creates one collector per
build pass and hands its log back on the ``BuildResult``.

Thread Safety:
    The collector delegates to ``EventLog`` which is internally locked.

"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from quire.observability.events import (
    BuildFinished,
    DocumentRejected,
    FileWritten,
    Stage,
    StageCompleted,
    now_ns,
)
from quire.observability.log import EventLog

if TYPE_CHECKING:
    from quire._errors import LoadError, RouteCollisionError, ValidationError


class BuildCollector:
    """Event collector for a build pass.

    Args:
        log: The EventLog to store events in.

    """

    __slots__ = ("_log",)

    def __init__(self, log: EventLog | None = None) -> None:
        self._log = log if log is not None else EventLog()

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    def record_stage(
        self,
        stage: Stage,
        *,
        items: int,
        errors: int = 0,
        duration_ms: float = 0.0,
    ) -> None:
        """Record a completed pipeline stage."""
        self._log.append(
            StageCompleted(
                stage=stage,
                items=items,
                errors=errors,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_rejections(
        self,
        stage: Stage,
        errors: Iterable[LoadError | ValidationError | RouteCollisionError],
    ) -> None:
        """Record one DocumentRejected per error."""
        ts = now_ns()
        events = []
        for error in errors:
            path = getattr(error, "file_path", None) or getattr(error, "second", "")
            kind = getattr(error, "kind", None) or "route_collision"
            events.append(DocumentRejected(path=path, stage=stage, kind=kind, timestamp_ns=ts))
        self._log.append_many(events)

    def record_write(
        self,
        kind: str,
        target: str,
        *,
        size_bytes: int,
        duration_ms: float = 0.0,
    ) -> None:
        """Record a file written by the exporter."""
        self._log.append(
            FileWritten(
                kind=kind,  # type: ignore[arg-type]
                target=target,
                size_bytes=size_bytes,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_build(
        self,
        *,
        ok: bool,
        documents: int,
        errors: int,
        warnings: int,
        duration_ms: float,
    ) -> None:
        """Record the final verdict of a build pass."""
        self._log.append(
            BuildFinished(
                ok=ok,
                documents=documents,
                errors=errors,
                warnings=warnings,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )
