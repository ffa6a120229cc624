"""Reporter options: defaults, optional options file, validation."""

from __future__ import annotations

import logging
from pathlib import Path

from newman_junit_full.utils import deep_merge, load_json, load_yaml

logger = logging.getLogger(__name__)

ARTIFACT_NAME = "junit-reporter-full"
DEFAULT_FILENAME = "newman-run-report-full.xml"

DEFAULT_OPTIONS: dict = {
    # Output path override; None means the caller writes DEFAULT_FILENAME.
    "export": None,
}

_YAML_SUFFIXES = {".yml", ".yaml"}


def load_options(path: Path | None = None, overrides: dict | None = None) -> dict:
    """Load options from a JSON or YAML file, merged over the defaults.

    Non-None entries of overrides (usually CLI flags) win over the file.
    """
    options = DEFAULT_OPTIONS.copy()
    if path is not None:
        if not path.exists():
            logger.warning("Options file not found: %s Using defaults.", path)
        else:
            loader = load_yaml if path.suffix.lower() in _YAML_SUFFIXES else load_json
            from_file = loader(path)
            if not from_file:
                logger.warning(
                    "Options file exists but could not be loaded (empty or corrupt?): %s "
                    "Using defaults.", path
                )
            options = deep_merge(options, from_file)
    if overrides:
        options = deep_merge(options, {k: v for k, v in overrides.items() if v is not None})
    return options


def validate_options(options: dict) -> list[str]:
    """Validate options, returning list of error messages (empty if valid)."""
    errors = []
    for key in options:
        if key not in DEFAULT_OPTIONS:
            errors.append(f"Unknown option '{key}'")
    export = options.get("export")
    if export is not None and not isinstance(export, (str, Path)):
        errors.append(f"Option 'export' must be a path string, got {type(export).__name__}")
    elif isinstance(export, str) and not export.strip():
        errors.append("Option 'export' must not be empty")
    return errors
