"""Sitemap generation — produce sitemap.xml from routed documents.

Requires ``base_url`` to be configured; skips generation with a notice on
stderr when it is empty.
"""

from __future__ import annotations

import sys
import time
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING
from xml.etree.ElementTree import Element, SubElement, tostring

if TYPE_CHECKING:
    from quire.export.manifest import ExportedFile

# XML namespace for sitemaps
_SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

SITEMAP_FILENAME = "sitemap.xml"


def generate_sitemap(hrefs: Iterable[str], base_url: str) -> str:
    """Generate a sitemap.xml string.

    Args:
        hrefs: URL paths of routed documents (``/guides/kotlin/``).
        base_url: Site base URL (e.g., ``"https://example.com"``).

    Returns:
        Complete XML string with one ``<url>`` per href, sorted.

    """
    base = base_url.rstrip("/")

    urlset = Element("urlset")
    urlset.set("xmlns", _SITEMAP_NS)

    for href in sorted(set(hrefs)):
        url_el = SubElement(urlset, "url")
        loc = SubElement(url_el, "loc")
        path = href if href.startswith("/") else "/" + href
        if not path.endswith("/"):
            path += "/"
        loc.text = base + path

    xml = tostring(urlset, encoding="unicode", xml_declaration=False)
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + xml + "\n"


def write_sitemap(
    hrefs: Iterable[str],
    base_url: str,
    output_dir: Path,
) -> ExportedFile | None:
    """Write sitemap.xml to the output directory.

    Returns *None* (with a notice on stderr) if ``base_url`` is empty.
    """
    from quire.export.manifest import ExportedFile

    if not base_url:
        print(
            "  Sitemap skipped — set base_url in config to enable",
            file=sys.stderr,
        )
        return None

    t0 = time.perf_counter()
    data = generate_sitemap(hrefs, base_url).encode("utf-8")

    sitemap_path = output_dir / SITEMAP_FILENAME
    sitemap_path.write_bytes(data)
    elapsed = (time.perf_counter() - t0) * 1000

    return ExportedFile(
        kind="sitemap",
        output_path=sitemap_path,
        size_bytes=len(data),
        duration_ms=elapsed,
    )
