"""Classify the sub-results of one execution into pass, failure or error."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from newman_junit_full.models import ErrorInfo, Execution, ScriptResult

PREREQUEST_CASE = "Pre-request Script"
TESTS_CASE = "Tests"

ASSERTION_FAILURE_TYPE = "AssertionFailure"
SCRIPT_ERROR_TYPE = "Error"

ISSUE_SEPARATOR = "\n---\n"


class Outcome(str, Enum):
    PASS = "pass"
    FAILURE = "failure"
    ERROR = "error"


@dataclass(frozen=True)
class CaseIssue:
    """What goes into a <failure> or <error> node."""

    type: str
    message: str
    details: str


@dataclass(frozen=True)
class CaseResult:
    name: str
    outcome: Outcome = Outcome.PASS
    issue: CaseIssue | None = None
    from_assertion: bool = False


@dataclass
class Classification:
    errors: int = 0
    failures: int = 0
    cases: list[CaseResult] = field(default_factory=list)


def _describe(error: ErrorInfo) -> str:
    return error.stack or error.message


def _script_case(
    name: str,
    results: tuple[ScriptResult, ...],
    request_error: ErrorInfo | None = None,
) -> tuple[CaseResult, int]:
    """Fold every result of one script slot into a single case.

    A request error only adds its text to the body; the returned count covers
    script errors alone.
    """
    errored = [r.error for r in results if r.error is not None]
    shown = errored + ([request_error] if request_error is not None else [])
    if not shown:
        return CaseResult(name=name), 0

    details = [_describe(e) for e in errored]
    if request_error is not None:
        details.append(f"RequestError: {_describe(request_error)}")
    first = shown[0]
    issue = CaseIssue(
        type=first.name or SCRIPT_ERROR_TYPE,
        message=first.message,
        details=ISSUE_SEPARATOR.join(details),
    )
    return CaseResult(name=name, outcome=Outcome.ERROR, issue=issue), len(errored)


def classify_execution(execution: Execution) -> Classification:
    """Count errors and failures of one execution and list its cases.

    Assertion problems are failures; script and request problems are
    errors. A request error and failing assertions on the same execution are
    counted independently. The request error text is reported on the
    pre-request slot. Cases come out as the pre-request slot, the test slot,
    then one case per assertion in order.
    """
    result = Classification()

    if execution.request_error is not None:
        result.errors += 1

    for name, scripts, request_error in (
        (PREREQUEST_CASE, execution.prerequest_script, execution.request_error),
        (TESTS_CASE, execution.test_script, None),
    ):
        case, errored = _script_case(name, scripts, request_error)
        result.errors += errored
        result.cases.append(case)

    for assertion in execution.assertions:
        error = assertion.error
        if error is None:
            result.cases.append(CaseResult(name=assertion.assertion, from_assertion=True))
            continue
        result.failures += 1
        result.cases.append(CaseResult(
            name=assertion.assertion,
            outcome=Outcome.FAILURE,
            issue=CaseIssue(
                type=error.name or ASSERTION_FAILURE_TYPE,
                message=error.message,
                details=_describe(error),
            ),
            from_assertion=True,
        ))

    return result
