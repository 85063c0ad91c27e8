"""Build event model.

One event type per thing worth knowing about a build pass:

- ``StageCompleted``: a pipeline stage finished (load, validate, resolve, ...)
- ``DocumentRejected``: a source file dropped out with a load/validation error
- ``FileWritten``: an output file was written by the exporter
- ``BuildFinished``: the overall verdict

All events are frozen dataclasses carrying a ``timestamp_ns`` from the
monotonic clock, safe to share across the loader's worker threads.

"""

import time
from dataclasses import dataclass
from typing import Literal, TypeAlias

Stage: TypeAlias = Literal["load", "validate", "resolve", "navigate", "export"]


@dataclass(frozen=True, slots=True)
class StageCompleted:
    """A pipeline stage ran to completion.

    Attributes:
        stage: Which stage.
        items: Number of documents leaving the stage.
        errors: Number of errors the stage reported.
        duration_ms: Wall time spent in the stage.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    stage: Stage
    items: int
    errors: int
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class DocumentRejected:
    """A source file was excluded from the build.

    Attributes:
        path: Content-relative path of the file.
        stage: Stage that rejected it.
        kind: Error kind (e.g. ``missing_title``).
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    stage: Stage
    kind: str
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class FileWritten:
    """The exporter wrote an output file."""

    kind: Literal["routes", "navigation", "sitemap"]
    target: str
    size_bytes: int
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class BuildFinished:
    """A build pass ended.

    Attributes:
        ok: Overall verdict.
        documents: Number of routed documents.
        errors: Number of errors across all stages.
        warnings: Number of warnings.
        duration_ms: Total wall time.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    ok: bool
    documents: int
    errors: int
    warnings: int
    duration_ms: float
    timestamp_ns: int


BuildEvent: TypeAlias = StageCompleted | DocumentRejected | FileWritten | BuildFinished


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
