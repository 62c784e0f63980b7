"""
Utilities for loading richerr configuration metadata and generating references.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional

import yaml

from richerr.exceptions import RichErrConfigError

SCHEMA_PATH = Path(__file__).resolve().parents[1] / "configs" / "config_default.yaml"


@dataclass(frozen=True)
class ConfigField:
    """Structured representation of a configuration field."""

    section: str
    name: str
    type: str
    default: object
    description: str

    def as_dict(self) -> Dict[str, object]:
        return {
            "section": self.section,
            "key": self.name,
            "type": self.type,
            "default": self.default,
            "description": self.description,
        }


def _load_schema() -> Dict[str, Dict[str, ConfigField]]:
    if not SCHEMA_PATH.exists():
        raise FileNotFoundError(f"Configuration schema file not found: {SCHEMA_PATH}")
    raw: Mapping[str, Mapping[str, Mapping[str, object]]] = yaml.safe_load(
        SCHEMA_PATH.read_text(encoding="utf-8")
    )
    schema: Dict[str, Dict[str, ConfigField]] = {}
    for section, entries in raw.items():
        section_map: Dict[str, ConfigField] = {}
        for key, meta in entries.items():
            section_map[key] = ConfigField(
                section=section,
                name=key,
                type=str(meta.get("type", "Any")),
                default=meta.get("default"),
                description=str(meta.get("description", "")).strip(),
            )
        schema[section] = section_map
    return schema


CONFIG_SCHEMA: Dict[str, Dict[str, ConfigField]] = _load_schema()


def _sections(section: Optional[str]) -> Dict[str, Dict[str, ConfigField]]:
    if section:
        if section not in CONFIG_SCHEMA:
            raise RichErrConfigError(
                f"Unknown config section '{section}'. Options: {list(CONFIG_SCHEMA)}",
                context={"section": section},
            )
        return {section: CONFIG_SCHEMA[section]}
    return CONFIG_SCHEMA


def iter_fields(section: Optional[str] = None) -> Iterable[ConfigField]:
    """Yield configuration fields optionally filtered by section."""

    for section_fields in _sections(section).values():
        yield from section_fields.values()


def defaults() -> Dict[str, Dict[str, Any]]:
    """Return the schema defaults as a nested ``{section: {key: value}}`` mapping."""

    return {
        sec: {field.name: field.default for field in section_fields.values()}
        for sec, section_fields in CONFIG_SCHEMA.items()
    }


def as_dict(section: Optional[str] = None) -> Dict[str, Dict[str, Dict[str, object]]]:
    """Return configuration metadata as a nested dictionary."""

    return {
        sec: {field.name: field.as_dict() for field in section_fields.values()}
        for sec, section_fields in _sections(section).items()
    }


def explain(key: str) -> str:
    """Return a human readable description for a configuration key.

    Accepts either a bare key (``"depth"``) or a dotted one (``"stack.depth"``).
    """

    normalized = key.strip().lower().replace("-", "_")
    section_name, _, name = normalized.rpartition(".")
    for sec, fields in CONFIG_SCHEMA.items():
        if section_name and sec != section_name:
            continue
        field = fields.get(name)
        if field is None:
            continue
        default_repr = "None" if field.default is None else repr(field.default)
        description = field.description or "No description available."
        return f"{sec}.{field.name} (type={field.type}, default={default_repr}) -> {description}"
    raise RichErrConfigError(f"Unknown configuration key '{key}'.", context={"key": key})


def to_markdown(section: Optional[str] = None) -> str:
    """Render the configuration reference as a markdown table."""

    sections = _sections(section)
    title = (
        f"# richerr Configuration Reference - {section.title()}\n"
        if section
        else "# richerr Configuration Reference\n"
    )
    lines = [title, ""]
    for sec_name, fields in sections.items():
        lines.append(f"## {sec_name.title()}")
        lines.append("")
        lines.append("| Key | Type | Default | Description |")
        lines.append("| --- | --- | --- | --- |")
        for field in fields.values():
            default_repr = "`None`" if field.default is None else f"`{field.default}`"
            description = field.description.replace("|", "\\|")
            lines.append(f"| `{field.name}` | `{field.type}` | {default_repr} | {description} |")
        lines.append("")
    return "\n".join(lines)


def write_markdown(path: Path, section: Optional[str] = None) -> Path:
    """Persist the markdown representation to the specified path."""

    content = to_markdown(section=section)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def to_console(section: Optional[str] = None) -> str:
    """Format the configuration reference as a console-friendly table."""

    lines = []
    for sec_name, fields in _sections(section).items():
        lines.append(f"[{sec_name.upper()}]")
        for field in fields.values():
            default_repr = "None" if field.default is None else repr(field.default)
            description = field.description or "No description available."
            lines.append(
                f"  - {field.name} (type={field.type}, default={default_repr}): {description}"
            )
        lines.append("")
    return "\n".join(lines).strip()


__all__ = [
    "ConfigField",
    "CONFIG_SCHEMA",
    "iter_fields",
    "defaults",
    "as_dict",
    "explain",
    "to_markdown",
    "write_markdown",
    "to_console",
]
