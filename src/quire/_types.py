"""Shared type definitions for quire."""

from collections.abc import Mapping
from typing import Any, Literal, TypeAlias

# Canonical route, no leading or trailing slash ("" is the site root)
RoutePath: TypeAlias = str

# Content-relative POSIX path of a source file (e.g. "guides/kotlin/index.md")
SourcePath: TypeAlias = str

# Raw frontmatter as parsed from YAML
Frontmatter: TypeAlias = Mapping[str, Any]

# Command being run
QuireMode: TypeAlias = Literal["build", "check", "watch"]
