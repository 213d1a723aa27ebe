from __future__ import annotations

import logging
from datetime import date, datetime, time
from pathlib import Path
from typing import TypeAlias
import tomllib

from importorder.rule import RuleOptions

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "importorder.toml"
RULE_SECTION = "import_order"

TomlScalar: TypeAlias = str | int | float | bool | None | date | datetime | time
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlTable: TypeAlias = dict[str, TomlValue]

# Option name -> accepted spellings in the config table.
_OPTION_KEYS: dict[str, tuple[str, ...]] = {
    "sort_imports": ("sort_imports", "sortImports"),
    "sort_exports": ("sort_exports", "sortExports"),
    "space_between_groups": ("space_between_groups", "spaceBetweenGroups"),
}


def _load_toml(path: Path) -> TomlTable:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as exc:
        logger.warning("could not read %s: %s", path, exc)
        return {}
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        logger.warning("ignoring invalid TOML in %s: %s", path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def load_config(root: Path | None = None, config_path: Path | None = None) -> TomlTable:
    if config_path is None:
        base = root if root is not None else Path.cwd()
        config_path = base / DEFAULT_CONFIG_NAME
    return _load_toml(config_path)


def rule_defaults(
    root: Path | None = None, config_path: Path | None = None
) -> TomlTable:
    data = load_config(root=root, config_path=config_path)
    section = data.get(RULE_SECTION, {})
    if not isinstance(section, dict):
        return {}
    defaults: TomlTable = {}
    for option, spellings in _OPTION_KEYS.items():
        for key in spellings:
            if key in section:
                defaults[option] = _as_bool(section[key])
                break
    return defaults


def _as_bool(value: TomlValue) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return False


def merge_payload(payload: TomlTable, defaults: TomlTable) -> TomlTable:
    merged = dict(defaults)
    for key, value in payload.items():
        if value is None:
            continue
        merged[key] = value
    return merged


def rule_options(table: TomlTable) -> RuleOptions:
    base = RuleOptions()
    return RuleOptions(
        sort_imports=_as_bool(table.get("sort_imports", base.sort_imports)),
        sort_exports=_as_bool(table.get("sort_exports", base.sort_exports)),
        space_between_groups=_as_bool(
            table.get("space_between_groups", base.space_between_groups)
        ),
    )
