from __future__ import annotations

import logging
from datetime import date, datetime, time
from pathlib import Path
from typing import TypeAlias
import tomllib

from readmyreadme.schema import ReadmeSettings
from readmyreadme.settings import parse_settings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "readmyreadme.toml"
OUTLINE_TABLE = "outline"

TomlScalar: TypeAlias = str | int | float | bool | None | date | datetime | time
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlTable: TypeAlias = dict[str, TomlValue]


def _load_toml(path: Path) -> TomlTable:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as exc:
        logger.debug("cannot read %s: %s", path, exc)
        return {}
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        logger.debug("ignoring malformed %s: %s", path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def load_config(root: Path | None = None, config_path: Path | None = None) -> TomlTable:
    if config_path is None:
        base = root if root is not None else Path.cwd()
        config_path = base / DEFAULT_CONFIG_NAME
    return _load_toml(config_path)


def outline_defaults(
    root: Path | None = None, config_path: Path | None = None
) -> TomlTable:
    data = load_config(root=root, config_path=config_path)
    section = data.get(OUTLINE_TABLE, {})
    return section if isinstance(section, dict) else {}


def merge_payload(payload: TomlTable, defaults: TomlTable) -> TomlTable:
    merged = dict(defaults)
    for key, value in payload.items():
        if value is None:
            continue
        merged[key] = value
    return merged


def _normalize_outline_table(table: TomlTable) -> TomlTable:
    # `[[outline.sections]]` sits beside the scalar keys in the file but
    # under `outline_structure` in the settings model.
    aliases = {
        field.alias: name
        for name, field in ReadmeSettings.model_fields.items()
        if field.alias
    }
    normalized = {aliases.get(key, key): value for key, value in table.items()}
    sections = normalized.pop("sections", None)
    if sections is not None and "outline_structure" not in normalized:
        normalized["outline_structure"] = {"sections": sections}
    return normalized


def load_settings(
    root: Path | None = None,
    config_path: Path | None = None,
    overrides: TomlTable | None = None,
) -> ReadmeSettings:
    table = _normalize_outline_table(outline_defaults(root=root, config_path=config_path))
    return parse_settings(merge_payload(overrides or {}, table))
