"""Fold one execution into a suite record."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from newman_junit_full.classifier import CaseIssue, Classification, Outcome, classify_execution
from newman_junit_full.models import DEFAULT_HOST, DEFAULT_PROTOCOL, Execution, Trace
from newman_junit_full.naming import join_names, resolve_name
from newman_junit_full.properties import Property
from newman_junit_full.timestamps import TimestampSequencer


@dataclass(frozen=True)
class CaseRecord:
    classname: str
    name: str
    time: float
    outcome: Outcome = Outcome.PASS
    type: str = ""
    message: str = ""
    body: str = ""

    @property
    def has_issue(self) -> bool:
        return self.outcome is not Outcome.PASS


@dataclass
class SuiteRecord:
    id: int
    hostname: str
    package: str
    name: str
    tests: int
    failures: int
    errors: int
    timestamp: str
    time: float
    properties: list[Property] = field(default_factory=list)
    cases: list[CaseRecord] = field(default_factory=list)


def suite_id(execution: Execution) -> int:
    cursor = execution.cursor
    return cursor.iteration * cursor.length + cursor.position


def suite_hostname(execution: Execution) -> str:
    protocol = execution.request.protocol or DEFAULT_PROTOCOL
    host = ".".join(execution.request.host) or DEFAULT_HOST
    return f"{protocol}://{host}"


def suite_time(execution: Execution) -> float:
    """Elapsed response time in seconds, 0 when unknown."""
    elapsed = execution.response_time
    if not elapsed or not math.isfinite(elapsed) or elapsed < 0:
        return 0.0
    return elapsed / 1000


def _issue_body(
    issue: CaseIssue,
    execution: Execution,
    trace: Trace,
    request_name: str,
    case_name: str,
) -> str:
    lines = [f"Iteration: {execution.cursor.iteration}"]
    if trace.collection_id:
        lines.append(f"Collection JSON ID: {trace.collection_id}")
    if trace.collection_name:
        lines.append(f"Collection name: {trace.collection_name}")
    lines.append(f"Request name: {request_name}")
    lines.append(f"Test description: {case_name}")
    lines.append(f"Error message: {issue.message}")
    if issue.details:
        lines.append("Stacktrace:")
        lines.append(issue.details)
    return "\n".join(lines)


def build_suite(
    execution: Execution,
    trace: Trace,
    sequencer: TimestampSequencer,
    properties: list[Property] | None = None,
    classification: Classification | None = None,
) -> SuiteRecord:
    """Build the suite record for one execution.

    Must be called in trace order: it consumes the next sequencer timestamp.
    Per-assertion case time is the suite time split evenly across the
    assertions. Nothing is measured per assertion, so treat it as an
    approximation.
    """
    if classification is None:
        classification = classify_execution(execution)

    node = trace.tree.get(execution.item)
    parent = node.parent if node is not None else None
    package = resolve_name(trace.tree, parent) or ""
    name = (node.display_name if node is not None else None) or ""
    request_name = join_names(package, name)

    elapsed = suite_time(execution)
    tests = len(execution.assertions)
    per_assertion = elapsed / tests if tests else 0.0

    cases: list[CaseRecord] = []
    for case in classification.cases:
        issue = {}
        if case.issue is not None:
            issue = {
                "type": case.issue.type,
                "message": case.issue.message,
                "body": _issue_body(case.issue, execution, trace, request_name, case.name),
            }
        cases.append(CaseRecord(
            classname=request_name,
            name=case.name,
            time=per_assertion if case.from_assertion else 0.0,
            outcome=case.outcome,
            **issue,
        ))

    return SuiteRecord(
        id=suite_id(execution),
        hostname=suite_hostname(execution),
        package=package,
        name=name,
        tests=tests,
        failures=classification.failures,
        errors=classification.errors,
        timestamp=sequencer.assign(execution.response_time),
        time=elapsed,
        properties=list(properties or []),
        cases=cases,
    )
