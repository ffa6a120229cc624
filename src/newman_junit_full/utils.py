"""Safe lookups over loosely structured mappings, plus JSON/YAML helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

_MISSING = object()


def get_path(data: Any, path: str, default: Any = None) -> Any:
    """Follow a dotted path through nested dicts, returning default on any miss.

    A present key holding None also yields the default.
    """
    current = data
    for part in path.split("."):
        if not isinstance(current, dict):
            return default
        current = current.get(part, _MISSING)
        if current is _MISSING or current is None:
            return default
    return current


def load_json(path: Path) -> dict:
    """Load a JSON file, returning empty dict if missing or malformed."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (FileNotFoundError, json.JSONDecodeError, UnicodeDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def load_yaml(path: Path) -> dict:
    """Load a YAML file, returning empty dict if missing or malformed."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (FileNotFoundError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base, returning a new dict."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result
