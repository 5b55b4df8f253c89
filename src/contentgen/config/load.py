# contentgen/config/load.py

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import ValidationError

from contentgen.config.models import ContentGenConfig
from contentgen.errors import ConfigValidationError, FileMissing


def config_from_dict(d: Dict[str, Any]) -> ContentGenConfig:
    """Validate an already-parsed configuration document."""
    if not isinstance(d, dict):
        raise ConfigValidationError(
            f"Configuration document must be a mapping; got {type(d).__name__}"
        )
    try:
        return ContentGenConfig.model_validate(d)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration: {e}") from e


def load_config(path: str | Path) -> ContentGenConfig:
    """
    Load a configuration document from JSON or YAML.

    The format is picked from the suffix: .yaml/.yml go through
    yaml.safe_load, everything else is read as JSON.
    """
    path = Path(path).expanduser()
    if not path.is_file():
        raise FileMissing(f"Configuration file not found: {path}", path)

    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigValidationError(f"{path}: cannot parse configuration: {e}") from e

    return config_from_dict(data)
