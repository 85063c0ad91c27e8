"""Content layer — source files as validated, typed records.

Handles discovery and frontmatter parsing, metadata validation, and file
watching for rebuild-on-change.
"""

from quire.content.loader import DocumentLoader, DocumentRecord, LoadResult, load_document
from quire.content.validator import (
    DocumentMetadata,
    ValidatedRecord,
    ValidationResult,
    ValidationWarning,
    validate_documents,
)
from quire.content.watcher import ChangeEvent, ContentWatcher

__all__ = [
    "ChangeEvent",
    "ContentWatcher",
    "DocumentLoader",
    "DocumentMetadata",
    "DocumentRecord",
    "LoadResult",
    "ValidatedRecord",
    "ValidationResult",
    "ValidationWarning",
    "load_document",
    "validate_documents",
]
