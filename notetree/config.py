from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from .errors import ConfigError

CONFIG_FILENAME = "notetree.toml"

# Fields every note store understands. Extra fields are read from front matter by name.
KNOWN_FIELDS = ("title", "identifier", "keywords", "signature", "date")

MISSING_POLICIES = ("error", "stub")


@dataclass
class TreeConfig:
    """Rendering and store settings."""

    fields: tuple[str, ...] = ("title", "keywords")
    extra_fields: tuple[str, ...] = ()
    marker: str = "*"
    node_style: str = "bold cyan"
    cycle_style: str = "bold magenta"
    broken_style: str = "bold red"
    on_missing: str = "error"
    extensions: tuple[str, ...] = (".md", ".org", ".txt")
    editor: str | None = None

    @property
    def all_fields(self) -> tuple[str, ...]:
        """Known fields followed by extra fields, without repeats."""
        seen: list[str] = []
        for name in (*KNOWN_FIELDS, *self.extra_fields):
            if name not in seen:
                seen.append(name)
        return tuple(seen)

    def style_for(self, tag: str) -> str:
        return {
            "node": self.node_style,
            "cycle": self.cycle_style,
            "broken": self.broken_style,
        }[tag]


def _str_tuple(key: str, value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{key} must be a list of strings")
    return tuple(v.strip() for v in value if v.strip())


def config_from_dict(data: dict[str, Any]) -> TreeConfig:
    """Validate a `[tree]` table into a TreeConfig."""
    known = {f.name for f in fields(TreeConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

    kwargs: dict[str, Any] = {}
    for key in ("fields", "extra_fields", "extensions"):
        if key in data:
            kwargs[key] = _str_tuple(key, data[key])
    for key in ("marker", "node_style", "cycle_style", "broken_style", "on_missing", "editor"):
        if key in data:
            value = data[key]
            if not isinstance(value, str):
                raise ConfigError(f"{key} must be a string")
            kwargs[key] = value

    config = TreeConfig(**kwargs)

    if not config.fields:
        raise ConfigError("fields must name at least one field")
    allowed = set(config.all_fields)
    bad = [name for name in config.fields if name not in allowed]
    if bad:
        raise ConfigError(f"Unknown fields in render order: {', '.join(bad)} (add them to extra_fields)")
    if len(config.marker) != 1 or config.marker.isspace():
        raise ConfigError("marker must be a single visible character")
    if config.on_missing not in MISSING_POLICIES:
        raise ConfigError(f"on_missing must be one of: {', '.join(MISSING_POLICIES)}")
    config.extensions = tuple((ext if ext.startswith(".") else f".{ext}").lower() for ext in config.extensions)
    return config


def load_config(path: Path | None) -> TreeConfig:
    """
    Load settings from the `[tree]` table of a TOML file.

    Returns defaults when no path is given.
    """
    if path is None:
        return TreeConfig()

    import tomllib

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{path}: {e}") from e

    table = data.get("tree", {})
    if not isinstance(table, dict):
        raise ConfigError(f"{path}: [tree] must be a table")
    return config_from_dict(table)
