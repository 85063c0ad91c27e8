"""Frontmatter splitting and parsing.

A document opens with a YAML block fenced by ``---`` lines::

    ---
    title: Kotlin Coroutines
    sidebar:
      order: 2
    ---

    # Body starts here

The block is parsed with PyYAML's ``safe_load``; anything after the closing
fence is the body and is returned untouched.
"""

from __future__ import annotations

from typing import Any

import yaml

DELIMITER = "---"

_BOM = "\ufeff"


class FrontmatterSyntaxError(ValueError):
    """The delimiter pair or the YAML inside it is malformed."""


def split_frontmatter(text: str) -> tuple[str, str]:
    """Split *text* into ``(frontmatter_source, body)``.

    The first line must be exactly ``---`` (trailing whitespace allowed) and a
    later line must close the block the same way.  CRLF line endings and a
    leading byte-order mark are tolerated.

    Raises:
        FrontmatterSyntaxError: If the opening or closing delimiter is absent.

    """
    if text.startswith(_BOM):
        text = text[len(_BOM):]
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != DELIMITER:
        msg = "document does not open with a '---' frontmatter delimiter"
        raise FrontmatterSyntaxError(msg)

    for index in range(1, len(lines)):
        if lines[index].rstrip() == DELIMITER:
            source = "".join(lines[1:index])
            body = "".join(lines[index + 1:])
            return source, body

    msg = "frontmatter block is not closed with '---'"
    raise FrontmatterSyntaxError(msg)


def parse_frontmatter(source: str) -> dict[str, Any]:
    """Parse a frontmatter block into a mapping.

    An empty block yields ``{}``.  Keys are kept verbatim, including ones
    quire does not know about.

    Raises:
        FrontmatterSyntaxError: If the YAML is invalid or not a mapping.

    """
    try:
        data = yaml.safe_load(source)
    except yaml.YAMLError as exc:
        msg = f"invalid YAML: {exc}"
        raise FrontmatterSyntaxError(msg) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"frontmatter must be a mapping, got {type(data).__name__}"
        raise FrontmatterSyntaxError(msg)
    return {str(k): v for k, v in data.items()}
