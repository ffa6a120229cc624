"""End-of-run reporter: turn a finished run summary into the JUnit artifact."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from newman_junit_full.config import ARTIFACT_NAME, DEFAULT_FILENAME, DEFAULT_OPTIONS
from newman_junit_full.exporters.junit import trace_to_junit
from newman_junit_full.models import Trace, load_trace

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportArtifact:
    name: str
    default: str
    path: str | None
    content: str

    def target(self, base_dir: Path | None = None) -> Path:
        """Where the artifact should land: the override path or the default name."""
        target = Path(self.path) if self.path else Path(self.default)
        if base_dir is not None and not target.is_absolute():
            target = base_dir / target
        return target


def generate_report(
    trace: Trace | None,
    export: str | None = None,
    start: datetime | None = None,
) -> ReportArtifact | None:
    """Build the report artifact, or None when there is nothing to report."""
    if trace is None or not trace.executions:
        return None
    return ReportArtifact(
        name=ARTIFACT_NAME,
        default=DEFAULT_FILENAME,
        path=str(export) if export else None,
        content=trace_to_junit(trace, start),
    )


def write_artifact(artifact: ReportArtifact, base_dir: Path | None = None) -> Path:
    """Persist an artifact as UTF-8 text and return its path."""
    target = artifact.target(base_dir)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(artifact.content, encoding="utf-8")
    return target


class JUnitFullReporter:
    """Reacts to the end-of-run notification of a collection run."""

    def __init__(self, options: dict | None = None) -> None:
        self.options = {**DEFAULT_OPTIONS, **(options or {})}

    def before_done(self, summary: dict, exports: list) -> ReportArtifact | None:
        """Append exactly one artifact to exports, or nothing.

        Never raises: a failure while building is logged and no partial
        report is appended.
        """
        try:
            trace = load_trace(summary)
            artifact = generate_report(trace, self.options.get("export"))
        except Exception as exc:
            logger.warning("JUnit report generation failed: %s", exc, exc_info=True)
            return None

        if artifact is None:
            logger.debug("No executions in run summary; no JUnit report produced")
            return None
        exports.append(artifact)
        return artifact
