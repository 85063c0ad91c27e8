"""Build output — JSON manifests and sitemap for the rendering layer."""

from quire.export.manifest import ExportedFile, ExportResult, ManifestExporter
from quire.export.sitemap import generate_sitemap

__all__ = ["ExportResult", "ExportedFile", "ManifestExporter", "generate_sitemap"]
