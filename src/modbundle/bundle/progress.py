"""
Build progress reporting.

Observers receive BuildProgress updates. They can only watch: nothing in the
build depends on them, and an observer that raises is logged and ignored.
"""

import logging
from typing import Callable, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class BuildProgress(BaseModel):
    """A single progress update."""
    stage: str
    percent: float = Field(ge=0, le=100)
    message: str = ""


ProgressCallback = Callable[[BuildProgress], None]


class ProgressReporter:
    """Forwards updates to an observer, never letting the percentage go backwards."""

    def __init__(self, callback: Optional[ProgressCallback] = None):
        self.callback = callback
        self.percent = 0.0

    def emit(self, stage: str, percent: float, message: str = "") -> BuildProgress:
        self.percent = min(100.0, max(self.percent, float(percent)))
        update = BuildProgress(stage=stage, percent=self.percent, message=message)
        logger.debug(f"[{update.percent:5.1f}%] {stage}: {message}")
        if self.callback is not None:
            try:
                self.callback(update)
            except Exception as e:
                logger.warning(f"Progress observer failed: {e}")
        return update

    def scaled(self, stage: str, start: float, end: float, label: str) -> Callable[[float], None]:
        """
        Sink for a sub-task that reports 0-100, mapped onto [start, end] of the build.
        """
        def sink(sub_percent: float) -> None:
            self.emit(stage, start + (end - start) * sub_percent / 100.0,
                      f"{label}: {round(sub_percent)}%")
        return sink
