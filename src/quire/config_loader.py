"""Load QuireConfig from quire.yaml if present.

Merges file config with CLI kwargs. CLI overrides file.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

import yaml

from quire._errors import ConfigError
from quire.config import QuireConfig

CONFIG_FILENAMES: tuple[str, ...] = ("quire.yaml", "quire.yml", "quire.toml")

_KNOWN_KEYS: frozenset[str] = frozenset({
    "content_dir",
    "extensions",
    "output",
    "base_url",
    "site_title",
    "max_title_length",
    "include_drafts",
    "workers",
    "sidebar",
})


def load_config(root: Path, **overrides: object) -> QuireConfig:
    """Load QuireConfig from root, optionally merging quire.yaml.

    Looks for quire.yaml, quire.yml, or quire.toml in root. If found, loads
    and merges with overrides. Overrides whose value is None are ignored so
    that unset CLI flags do not mask file values.

    Raises:
        ConfigError: If the config file cannot be parsed or holds bad values.

    """
    file_config = _read_quire_config(root)
    merged = {**file_config, **{k: v for k, v in overrides.items() if v is not None}}
    unknown = sorted(set(merged) - _KNOWN_KEYS)
    if unknown:
        msg = f"Unknown configuration keys: {', '.join(unknown)}"
        raise ConfigError(msg)
    return QuireConfig(root=root, **_normalize(merged))


def find_config_file(root: Path) -> Path | None:
    """Return the first config file present in *root*, or None."""
    for name in CONFIG_FILENAMES:
        path = root / name
        if path.is_file():
            return path
    return None


def _read_quire_config(root: Path) -> dict[str, object]:
    """Read quire config from yaml/toml if present. Returns empty dict otherwise."""
    path = find_config_file(root)
    if path is None:
        return {}
    if path.suffix == ".toml":
        return _parse_toml(path)
    return _parse_yaml(path)


def _parse_yaml(path: Path) -> dict[str, object]:
    """Parse YAML config."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        msg = f"Failed to read {path.name}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path.name} must contain a mapping at the top level"
        raise ConfigError(msg)
    return _flatten_quire_section(data)


def _parse_toml(path: Path) -> dict[str, object]:
    """Parse TOML config."""
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        msg = f"Failed to read {path.name}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_quire_section(data)


def _flatten_quire_section(data: dict[str, object]) -> dict[str, object]:
    """Extract quire.* keys into top-level config."""
    result: dict[str, object] = {}
    for k, v in data.items():
        if k != "quire" and k in _KNOWN_KEYS:
            result[k] = v
    quire = data.get("quire")
    if isinstance(quire, dict):
        result.update(quire)
    return result


def _normalize(merged: dict[str, object]) -> dict[str, object]:
    """Coerce file/CLI values into the types QuireConfig expects."""
    result = dict(merged)
    if "output" in result and not isinstance(result["output"], Path):
        result["output"] = Path(str(result["output"]))

    if "extensions" in result:
        exts = result["extensions"]
        if isinstance(exts, str):
            exts = [exts]
        if not isinstance(exts, (list, tuple)) or not all(isinstance(e, str) for e in exts):
            msg = "'extensions' must be a list of strings"
            raise ConfigError(msg)
        result["extensions"] = tuple(exts)

    for key in ("max_title_length", "workers"):
        if key in result:
            value = result[key]
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                msg = f"{key!r} must be a non-negative integer, got {value!r}"
                raise ConfigError(msg)

    if "sidebar" in result:
        sidebar = result["sidebar"]
        if not isinstance(sidebar, list) or not all(isinstance(i, (dict, str)) for i in sidebar):
            msg = "'sidebar' must be a list of mappings or route strings"
            raise ConfigError(msg)
        result["sidebar"] = tuple(sidebar)

    return result
