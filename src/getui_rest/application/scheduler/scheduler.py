"""Application scheduler – Scheduler Protocol and JobExecutionContext."""
from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Protocol, runtime_checkable

from getui_rest.application.scheduler.job import Job
from getui_rest.observability.logging import get_logger

__all__ = ["JobExecutedEvent", "JobExecutionContext", "Scheduler"]

logger = get_logger(__name__)


@dataclass(frozen=True)
class JobExecutedEvent:
    """Outcome of one job run."""

    job_id: str
    job_name: str
    started_at: datetime
    duration_ms: float
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass
class JobExecutionContext:
    """Run a job handler once and report how it went.

    A failing handler does not propagate: nothing awaits a timer-fired job,
    so the error is logged and carried on the returned event.
    """

    job: Job

    async def run(self) -> JobExecutedEvent:
        started_at = datetime.now(tz=timezone.utc)
        t0 = time.monotonic()
        error: str | None = None
        try:
            await self.job.handler()
        except Exception as exc:  # noqa: BLE001
            error = str(exc) or type(exc).__name__
            logger.warning("scheduler.job_failed", job_id=self.job.id, error=error)
        return JobExecutedEvent(
            job_id=self.job.id,
            job_name=self.job.name,
            started_at=started_at,
            duration_ms=(time.monotonic() - t0) * 1000,
            error=error,
        )


@runtime_checkable
class Scheduler(Protocol):
    """Port: keep interval jobs firing until removed."""

    def add_job(self, job: Job) -> None: ...
    def remove_job(self, job_id: str) -> None: ...
    async def start(self) -> None: ...
    async def stop(self) -> None: ...
    def list_jobs(self) -> list[Job]: ...
