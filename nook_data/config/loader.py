from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.category import DEFAULT_CATEGORY_SHEETS, IGNORED_SHEETS, Category

"""Config loader for the spreadsheet export.

Responsibilities:
- Load YAML config/export.yml
- Validate against config_schema.json (unknown keys are rejected)
- Apply defaults (category tabs, ignored tabs, cache/output directories)
- Apply environment overrides (NOOK_SPREADSHEET_ID, GOOGLE_APPLICATION_CREDENTIALS)
"""

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/export.yml")

DEFAULT_CREDENTIALS_FILE = ".credentials/service-account.json"
DEFAULT_CACHE_DIRECTORY = "./cache"
DEFAULT_OUTPUT_DIRECTORY = "./out"

ENV_SPREADSHEET_ID = "NOOK_SPREADSHEET_ID"
ENV_CREDENTIALS = "GOOGLE_APPLICATION_CREDENTIALS"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ExportConfig:
    spreadsheet_id: str
    credentials_file: Path
    cache_directory: Path
    output_directory: Path
    categories: dict[Category, tuple[str, ...]]  # Category 定義順
    ignored_sheets: frozenset[str]


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: if the schema file is missing or invalid, or the data
            fails validation (unknown keys, wrong types, unknown categories)
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _resolve_categories(raw: dict[str, list[str]] | None) -> dict[Category, tuple[str, ...]]:
    configured = raw or {}
    categories: dict[Category, tuple[str, ...]] = {}
    owner: dict[str, Category] = {}
    for category in Category:
        if category.value in configured:
            sheets = tuple(configured[category.value])
        else:
            sheets = DEFAULT_CATEGORY_SHEETS[category]
        for sheet in sheets:
            # 1 タブ = 1 カテゴリ
            if sheet in owner:
                raise ConfigError(
                    f"sheet '{sheet}' listed in both {owner[sheet].value} and {category.value}"
                )
            owner[sheet] = category
        categories[category] = sheets
    return categories


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> ExportConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config validation failed: top level must be a mapping")

    _validate_config_schema(data)

    spreadsheet_id = os.getenv(ENV_SPREADSHEET_ID) or data.get("spreadsheet_id")
    if not spreadsheet_id:
        raise ConfigError(f"spreadsheet_id is not set (config or {ENV_SPREADSHEET_ID})")
    credentials = os.getenv(ENV_CREDENTIALS) or data.get("credentials_file", DEFAULT_CREDENTIALS_FILE)

    ignored = data.get("ignored_sheets")
    return ExportConfig(
        spreadsheet_id=spreadsheet_id,
        credentials_file=Path(credentials),
        cache_directory=Path(data.get("cache_directory", DEFAULT_CACHE_DIRECTORY)),
        output_directory=Path(data.get("output_directory", DEFAULT_OUTPUT_DIRECTORY)),
        categories=_resolve_categories(data.get("categories")),
        ignored_sheets=frozenset(ignored) if ignored is not None else IGNORED_SHEETS,
    )
