"""Running suite timestamps."""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta

logger = logging.getLogger(__name__)


def format_timestamp(moment: datetime) -> str:
    """Local time with millisecond precision, e.g. 2024-05-01T09:30:00.250."""
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}"


class TimestampSequencer:
    """Hands out suite timestamps in trace order.

    Each call returns the current cursor and then moves it forward by the
    suite's elapsed time, so suite N+1 starts where suite N ended.
    """

    def __init__(self, start: datetime | None = None) -> None:
        self._cursor = start if start is not None else datetime.now()

    @property
    def current(self) -> datetime:
        return self._cursor

    def assign(self, elapsed_ms: float | None) -> str:
        stamp = format_timestamp(self._cursor)
        if elapsed_ms and math.isfinite(elapsed_ms) and elapsed_ms > 0:
            try:
                self._cursor += timedelta(milliseconds=elapsed_ms)
            except OverflowError:
                logger.warning("Elapsed time %sms is out of range; timestamp not advanced", elapsed_ms)
        return stamp
