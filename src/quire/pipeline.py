"""Build pipeline — Loader -> Validator -> Route Resolver -> Navigation.

Each stage receives its input as arguments and returns its output; the only
thing that outlives a pass is the :class:`BuildResult` handed back to the
caller.  Errors from every stage are gathered into one ordered list and a
single verdict:

    load errors, then validation errors, then route collisions

A missing content root (``LoadError(not_found)``) and configuration problems
(``ConfigError``) are raised instead, since no meaningful report exists.
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from quire._errors import LoadError, QuireError, RouteCollisionError, ValidationError
from quire.config import QuireConfig
from quire.content.loader import DocumentLoader, LoadResult
from quire.content.validator import (
    ValidatedRecord,
    ValidationResult,
    ValidationWarning,
    validate_documents,
)
from quire.navigation.sidebar import build_sidebar
from quire.navigation.tree import NavigationNode, source_directories
from quire.observability.collector import BuildCollector
from quire.observability.log import EventLog
from quire.routing.resolver import Document, attach_routes, derive_route, find_collisions


@dataclass(frozen=True, slots=True)
class BuildResult:
    """Everything a build pass produced.

    Attributes:
        ok: True when no stage reported an error.
        documents: Route -> Document, sorted by route.
        navigation: Root of the navigation tree built from ``documents``.
        errors: Load, validation and collision errors, in that order.
        warnings: Non-fatal validation findings.
        duration_ms: Wall time of the pass.
        events: Event log recorded during the pass.

    """

    ok: bool
    documents: Mapping[str, Document]
    navigation: NavigationNode
    errors: tuple[QuireError, ...] = ()
    warnings: tuple[ValidationWarning, ...] = ()
    duration_ms: float = 0.0
    events: EventLog = field(default_factory=EventLog, compare=False)

    @property
    def routes(self) -> tuple[str, ...]:
        return tuple(self.documents)

    @property
    def load_errors(self) -> tuple[LoadError, ...]:
        return tuple(e for e in self.errors if isinstance(e, LoadError))

    @property
    def validation_errors(self) -> tuple[ValidationError, ...]:
        return tuple(e for e in self.errors if isinstance(e, ValidationError))

    @property
    def collisions(self) -> tuple[RouteCollisionError, ...]:
        return tuple(e for e in self.errors if isinstance(e, RouteCollisionError))


def run_pipeline(
    config: QuireConfig,
    collector: BuildCollector | None = None,
) -> BuildResult:
    """Run one full build pass over ``config.content_path``.

    Raises:
        LoadError: If the content root does not exist.
        ConfigError: If the declared sidebar does not match the content.

    """
    collector = collector if collector is not None else BuildCollector()
    start = time.perf_counter()

    # 1. Load
    t0 = time.perf_counter()
    loader = DocumentLoader(config.content_path, config.extensions)
    loaded = loader.load(workers=config.workers)
    collector.record_rejections("load", loaded.errors)
    collector.record_stage(
        "load", items=len(loaded.documents), errors=len(loaded.errors),
        duration_ms=_since(t0),
    )

    # 2. Validate
    t0 = time.perf_counter()
    validation = validate_documents(
        loaded.documents, max_title_length=config.max_title_length,
    )
    collector.record_rejections("validate", validation.errors)
    collector.record_stage(
        "validate", items=len(validation.valid), errors=len(validation.errors),
        duration_ms=_since(t0),
    )

    records = validation.valid
    drafts: tuple[ValidatedRecord, ...] = ()
    if not config.include_drafts:
        drafts = tuple(r for r in records if r.metadata.draft)
        records = tuple(r for r in records if not r.metadata.draft)

    # 3. Resolve routes
    t0 = time.perf_counter()
    documents = attach_routes(records)
    collisions = find_collisions(documents)
    losers = {c.second for c in collisions}
    routed = sorted(
        (d for d in documents if d.file_path not in losers),
        key=lambda d: d.route,
    )
    collector.record_rejections("resolve", collisions)
    collector.record_stage(
        "resolve", items=len(routed), errors=len(collisions), duration_ms=_since(t0),
    )

    # 4. Navigation
    t0 = time.perf_counter()
    omitted_routes, omitted_files = _omitted_sources(loaded, validation, drafts)
    navigation = build_sidebar(
        routed,
        config.sidebar,
        label=config.site_title,
        omitted_routes=omitted_routes,
        omitted_directories=source_directories(omitted_files),
    )
    collector.record_stage(
        "navigate", items=sum(1 for _ in navigation.leaves()), duration_ms=_since(t0),
    )

    errors: tuple[QuireError, ...] = (*loaded.errors, *validation.errors, *collisions)
    ok = not errors
    duration_ms = _since(start)
    collector.record_build(
        ok=ok,
        documents=len(routed),
        errors=len(errors),
        warnings=len(validation.warnings),
        duration_ms=duration_ms,
    )

    return BuildResult(
        ok=ok,
        documents=MappingProxyType({d.route: d for d in routed}),
        navigation=navigation,
        errors=errors,
        warnings=validation.warnings,
        duration_ms=duration_ms,
        events=collector.log,
    )


def _omitted_sources(
    loaded: LoadResult,
    validation: ValidationResult,
    drafts: tuple[ValidatedRecord, ...],
) -> tuple[frozenset[str], frozenset[str]]:
    """Routes and file paths of sources that exist but were not routed.

    Failed files have no validated slug, so both their derived route and any
    string ``slug`` they declare are counted.
    """
    passed = {r.file_path for r in validation.valid}
    routes: set[str] = set()
    files: set[str] = set()

    for error in loaded.errors:
        files.add(error.file_path)
        routes.add(derive_route(error.file_path))
    for record in loaded.documents:
        if record.file_path in passed:
            continue
        files.add(record.file_path)
        routes.add(derive_route(record.file_path))
        slug = record.frontmatter.get("slug")
        if isinstance(slug, str):
            routes.add(slug.strip("/"))
    for doc in attach_routes(drafts):
        files.add(doc.file_path)
        routes.add(doc.route)

    return frozenset(routes), frozenset(files)


def _since(t0: float) -> float:
    return (time.perf_counter() - t0) * 1000
