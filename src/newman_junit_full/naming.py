"""Hierarchical display names for collection nodes."""

from __future__ import annotations

from newman_junit_full.models import CollectionTree

DEFAULT_SEPARATOR = " / "


def resolve_name(
    tree: CollectionTree | None,
    index: int | None,
    separator: str = DEFAULT_SEPARATOR,
) -> str | None:
    """Return the path of a node as "Group / Subgroup / Item".

    The implicit root collection is never part of the path and resolves to
    an empty string itself. None means the node is unknown.
    """
    if tree is None:
        return None
    node = tree.get(index)
    if node is None:
        return None
    if not isinstance(separator, str):
        separator = DEFAULT_SEPARATOR

    chain: list[str] = []
    for ancestor in tree.ancestors(index):
        if ancestor.parent is None:
            break  # root collection
        chain.insert(0, ancestor.display_name or "")

    if node.parent is not None:
        chain.append(node.display_name or "")
    return separator.join(chain)


def join_names(*parts: str | None, separator: str = DEFAULT_SEPARATOR) -> str:
    """Join the non-empty parts with the path separator."""
    return separator.join(p for p in parts if p)
