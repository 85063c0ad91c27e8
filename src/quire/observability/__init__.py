"""Build observability — a queryable record of what a build pass did.

Quick Start:
    >>> from quire.observability import BuildCollector
    >>> collector = BuildCollector()
    >>> collector.record_stage("load", items=12)
    >>> collector.log.stats()["by_type"]
    {'StageCompleted': 1}

"""

from quire.observability.collector import BuildCollector
from quire.observability.events import (
    BuildEvent,
    BuildFinished,
    DocumentRejected,
    FileWritten,
    StageCompleted,
    now_ns,
)
from quire.observability.log import EventLog

__all__ = [
    "BuildCollector",
    "BuildEvent",
    "BuildFinished",
    "DocumentRejected",
    "EventLog",
    "FileWritten",
    "StageCompleted",
    "now_ns",
]
