"""Phase tracking for the log → compile database pipeline."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any

import structlog

log = structlog.get_logger("buildlog_compdb.progress")


@dataclass
class PhaseProgress:
    phase: str
    status: str = "running"  # "running" | "completed" | "failed" | "skipped"
    start_time: float | None = None
    end_time: float | None = None
    detail: str = ""
    error: str | None = None

    @property
    def duration(self) -> float | None:
        if self.start_time is None or self.end_time is None:
            return None
        return round(self.end_time - self.start_time, 3)


class ProgressTracker:
    """Record each pipeline phase in the order it ran, for the ``--timings`` summary."""

    def __init__(self) -> None:
        self.phases: list[PhaseProgress] = []
        self._by_name: dict[str, PhaseProgress] = {}

    def start_phase(self, phase: str) -> None:
        self._add(PhaseProgress(phase=phase, start_time=time.monotonic()))

    def complete_phase(self, phase: str, detail: str = "") -> None:
        self._finish(phase, "completed", detail=detail)

    def fail_phase(self, phase: str, error: str) -> None:
        self._finish(phase, "failed", error=error)

    def skip_phase(self, phase: str, reason: str) -> None:
        self._add(PhaseProgress(phase=phase, status="skipped", detail=reason))

    def get_summary(self) -> dict[str, Any]:
        return {
            "phases": [
                {
                    "phase": p.phase,
                    "status": p.status,
                    "duration": p.duration,
                    "detail": p.detail,
                    "error": p.error,
                }
                for p in self.phases
            ],
            "total_duration": round(sum(p.duration or 0 for p in self.phases), 3),
        }

    def _add(self, p: PhaseProgress) -> None:
        self.phases.append(p)
        self._by_name[p.phase] = p
        log.debug("progress.phase", phase=p.phase, status=p.status, detail=p.detail)

    def _finish(self, phase: str, status: str, detail: str = "", error: str | None = None) -> None:
        p = self._by_name.get(phase)
        if p is None or p.status != "running":
            return
        p.status = status
        p.end_time = time.monotonic()
        p.detail = detail
        p.error = error
        log.debug(
            "progress.phase",
            phase=phase,
            status=status,
            duration=p.duration,
            error=error,
        )
