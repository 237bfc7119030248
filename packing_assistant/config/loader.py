from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import FieldSynonyms, IngestConfig, LeadTimes

"""Config loader.

Responsibilities:
- Load YAML (config/ingest.yml by default, see the CLI)
- Validate against the bundled config_schema.json
- Overlay provided keys on IngestConfig.default(); omitted keys keep defaults
"""

__all__ = [
    "SCHEMA_PATH",
    "ConfigError",
    "load_config",
    "config_from_dict",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing or unreadable, or the data violates it
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


def config_from_dict(data: dict[str, Any]) -> IngestConfig:
    """Build an IngestConfig from already validated data."""
    base = IngestConfig.default()

    synonyms = base.synonyms
    if data.get("synonyms"):
        synonyms = replace(
            FieldSynonyms(),
            **{name: tuple(values) for name, values in data["synonyms"].items()},
        )
    lead_times = base.lead_times
    if data.get("lead_times"):
        lead_times = replace(LeadTimes(), **data["lead_times"])

    tz = data.get("timezone", base.timezone)
    if tz:
        try:
            ZoneInfo(tz)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigError(f"unknown timezone: {tz}") from e

    return IngestConfig(
        synonyms=synonyms,
        packaging_codes=tuple(data.get("packaging_codes", base.packaging_codes)),
        lead_times=lead_times,
        display_fields=tuple(data.get("display_fields", base.display_fields)),
        timezone=tz,
    )


def load_config(path: Path) -> IngestConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config validation failed: top level must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)
    return config_from_dict(data)
