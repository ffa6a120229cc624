"""Merge environment and global variable scopes into report properties."""

from __future__ import annotations

import json
from dataclasses import dataclass

from newman_junit_full.models import Variable


@dataclass(frozen=True)
class Property:
    name: str
    value: str


def _as_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, default=str)
    return str(value)


def merge_properties(
    environment: list[Variable] | None,
    globals_: list[Variable] | None,
) -> list[Property]:
    """Merge both scopes into one ordered property list.

    Globals are merged first and the environment last, so an environment
    value replaces a global one outright on key collision. Each key appears
    once, at the position of its first occurrence. An empty result means no
    <properties> element.
    """
    merged: dict[str, object] = {}
    for scope in (globals_ or [], environment or []):
        for variable in scope:
            merged[variable.key] = variable.value
    return [Property(name=key, value=_as_text(value)) for key, value in merged.items()]
