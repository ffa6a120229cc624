"""Typed trace model and the loader that builds it from a Newman run summary."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from newman_junit_full.utils import get_path

logger = logging.getLogger(__name__)

DEFAULT_PROTOCOL = "https"
DEFAULT_HOST = "localhost"


class NodeKind(str, Enum):
    COLLECTION = "collection"
    GROUP = "group"
    ITEM = "item"


@dataclass(frozen=True)
class CollectionNode:
    kind: NodeKind
    id: str | None = None
    name: str | None = None
    parent: int | None = None

    @property
    def display_name(self) -> str | None:
        return self.name or self.id


@dataclass
class CollectionTree:
    """Collection structure as a flat node list with parent indices.

    Index 0 is always the implicit root collection.
    """

    nodes: list[CollectionNode] = field(
        default_factory=lambda: [CollectionNode(kind=NodeKind.COLLECTION)]
    )
    _by_id: dict[str, int] = field(default_factory=dict, repr=False)

    ROOT = 0

    def add(self, kind: NodeKind, id: str | None, name: str | None, parent: int) -> int:
        self.nodes.append(CollectionNode(kind=kind, id=id, name=name, parent=parent))
        index = len(self.nodes) - 1
        if id and id not in self._by_id:
            self._by_id[id] = index
        return index

    def get(self, index: int | None) -> CollectionNode | None:
        if index is None or not 0 <= index < len(self.nodes):
            return None
        return self.nodes[index]

    def find(self, id: str | None) -> int | None:
        if not id:
            return None
        return self._by_id.get(id)

    def ancestors(self, index: int) -> Iterator[CollectionNode]:
        """Yield ancestors from the immediate parent up to the root."""
        node = self.get(index)
        seen = {index}
        while node is not None and node.parent is not None and node.parent not in seen:
            seen.add(node.parent)
            node = self.get(node.parent)
            if node is not None:
                yield node


@dataclass(frozen=True)
class ErrorInfo:
    name: str = ""
    message: str = ""
    stack: str = ""


@dataclass(frozen=True)
class AssertionResult:
    assertion: str
    error: ErrorInfo | None = None


@dataclass(frozen=True)
class ScriptResult:
    error: ErrorInfo | None = None


@dataclass(frozen=True)
class Cursor:
    iteration: int = 0
    position: int = 0
    length: int = 0


@dataclass(frozen=True)
class RequestInfo:
    protocol: str = DEFAULT_PROTOCOL
    host: tuple[str, ...] = ()


@dataclass(frozen=True)
class Execution:
    item: int
    cursor: Cursor = field(default_factory=Cursor)
    request: RequestInfo = field(default_factory=RequestInfo)
    response_time: float | None = None
    assertions: tuple[AssertionResult, ...] = ()
    prerequest_script: tuple[ScriptResult, ...] = ()
    test_script: tuple[ScriptResult, ...] = ()
    request_error: ErrorInfo | None = None


@dataclass(frozen=True)
class Variable:
    key: str
    value: object = None


@dataclass
class Trace:
    tree: CollectionTree
    executions: list[Execution]
    collection_id: str | None = None
    collection_name: str | None = None
    globals: list[Variable] = field(default_factory=list)
    environment: list[Variable] = field(default_factory=list)


# -- loading -------------------------------------------------------------


def _as_int(value: object, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default


def _as_float(value: object) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _as_str(value: object) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def parse_error(raw: object) -> ErrorInfo | None:
    """Build an ErrorInfo from a Newman error object, or None if there is none."""
    if not raw:
        return None
    if isinstance(raw, str):
        return ErrorInfo(name="Error", message=raw, stack=raw)
    if not isinstance(raw, dict):
        return ErrorInfo(name="Error", message=str(raw))
    message = _as_str(raw.get("message")) or ""
    stack = _as_str(raw.get("stack")) or _as_str(raw.get("stacktrace")) or ""
    return ErrorInfo(name=_as_str(raw.get("name")) or "", message=message, stack=stack)


def _build_tree(items: object, tree: CollectionTree, parent: int) -> None:
    if not isinstance(items, list):
        return
    for raw in items:
        if not isinstance(raw, dict):
            continue
        children = raw.get("item")
        kind = NodeKind.GROUP if isinstance(children, list) else NodeKind.ITEM
        index = tree.add(kind, _as_str(raw.get("id")), _as_str(raw.get("name")), parent)
        if kind is NodeKind.GROUP:
            _build_tree(children, tree, index)


def _parse_scope(raw: object) -> list[Variable]:
    values = raw.get("values") if isinstance(raw, dict) else raw
    if not isinstance(values, list):
        return []
    scope: list[Variable] = []
    for entry in values:
        if isinstance(entry, dict) and _as_str(entry.get("key")) is not None:
            scope.append(Variable(key=_as_str(entry["key"]), value=entry.get("value")))
    return scope


def _parse_host(raw: object) -> tuple[str, ...]:
    if isinstance(raw, str):
        raw = raw.split(".")
    if not isinstance(raw, list):
        return ()
    return tuple(str(part) for part in raw if part not in (None, ""))


def _resolve_item(raw_item: object, tree: CollectionTree) -> int:
    if not isinstance(raw_item, dict):
        return tree.add(NodeKind.ITEM, None, None, CollectionTree.ROOT)
    item_id = _as_str(raw_item.get("id"))
    index = tree.find(item_id)
    if index is not None:
        return index
    # Items unknown to the collection definition hang directly off the root.
    return tree.add(NodeKind.ITEM, item_id, _as_str(raw_item.get("name")), CollectionTree.ROOT)


def parse_execution(raw: dict, tree: CollectionTree) -> Execution:
    """Build one Execution, degrading each malformed field to its default."""
    cursor = Cursor(
        iteration=_as_int(get_path(raw, "cursor.iteration")),
        position=_as_int(get_path(raw, "cursor.position")),
        length=_as_int(get_path(raw, "cursor.length")),
    )
    request = RequestInfo(
        protocol=_as_str(get_path(raw, "request.url.protocol")) or DEFAULT_PROTOCOL,
        host=_parse_host(get_path(raw, "request.url.host")),
    )

    assertions: list[AssertionResult] = []
    raw_assertions = raw.get("assertions")
    for entry in raw_assertions if isinstance(raw_assertions, list) else []:
        if not isinstance(entry, dict):
            continue
        assertions.append(AssertionResult(
            assertion=_as_str(entry.get("assertion")) or "",
            error=parse_error(entry.get("error")),
        ))

    def scripts(key: str) -> tuple[ScriptResult, ...]:
        entries = raw.get(key) or []
        if not isinstance(entries, list):
            return ()
        return tuple(
            ScriptResult(error=parse_error(e.get("error")))
            for e in entries if isinstance(e, dict)
        )

    return Execution(
        item=_resolve_item(raw.get("item"), tree),
        cursor=cursor,
        request=request,
        response_time=_as_float(get_path(raw, "response.responseTime")),
        assertions=tuple(assertions),
        prerequest_script=scripts("prerequestScript"),
        test_script=scripts("testScript"),
        request_error=parse_error(raw.get("requestError")),
    )


def load_trace(summary: dict) -> Trace | None:
    """Build a Trace from a Newman run summary.

    Returns None when the summary carries no executions at all.
    """
    if not isinstance(summary, dict):
        return None
    raw_executions = get_path(summary, "run.executions")
    if not isinstance(raw_executions, list):
        return None

    tree = CollectionTree()
    _build_tree(get_path(summary, "collection.item"), tree, CollectionTree.ROOT)

    executions: list[Execution] = []
    for i, raw in enumerate(raw_executions):
        if not isinstance(raw, dict):
            logger.warning("Skipping malformed execution #%d: %r", i, type(raw).__name__)
            continue
        executions.append(parse_execution(raw, tree))

    return Trace(
        tree=tree,
        executions=executions,
        collection_id=_as_str(
            get_path(summary, "collection.id") or get_path(summary, "collection.info._postman_id")
        ),
        collection_name=_as_str(
            get_path(summary, "collection.name") or get_path(summary, "collection.info.name")
        ),
        globals=_parse_scope(summary.get("globals")),
        environment=_parse_scope(summary.get("environment")),
    )
