"""Application scheduler – APSchedulerAdapter backed by APScheduler's AsyncIOScheduler."""
from __future__ import annotations

import asyncio

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from getui_rest.application.scheduler.job import Job
from getui_rest.application.scheduler.scheduler import JobExecutedEvent, JobExecutionContext
from getui_rest.observability.logging import get_logger

__all__ = ["APSchedulerAdapter"]

logger = get_logger(__name__)


class APSchedulerAdapter:
    """Runs interval jobs on the caller's event loop through APScheduler.

    Adding a job whose id is already registered replaces it
    (``replace_existing``), so re-signing never stacks refresh timers. A
    late run still fires once instead of being dropped as a misfire.
    """

    def __init__(self) -> None:
        self._jobs: dict[str, Job] = {}
        self._scheduler = AsyncIOScheduler(
            timezone="UTC",
            job_defaults={"coalesce": True, "misfire_grace_time": None, "max_instances": 1},
        )
        self.execution_log: list[JobExecutedEvent] = []

    def add_job(self, job: Job) -> None:
        self._jobs[job.id] = job
        if not job.enabled:
            self._unschedule(job.id)
            return
        self._scheduler.add_job(
            self._run,
            "interval",
            seconds=job.interval_seconds,
            args=[job.id],
            id=job.id,
            name=job.name,
            replace_existing=True,
        )
        logger.debug("scheduler.job_added", job_id=job.id, interval_seconds=job.interval_seconds)

    def remove_job(self, job_id: str) -> None:
        self._jobs.pop(job_id, None)
        self._unschedule(job_id)

    async def start(self) -> None:
        if not self._scheduler.running:
            self._scheduler.start()

    async def stop(self) -> None:
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
            # shutdown is dispatched through the loop
            await asyncio.sleep(0)

    def list_jobs(self) -> list[Job]:
        return list(self._jobs.values())

    @property
    def is_running(self) -> bool:
        return self._scheduler.running

    def _unschedule(self, job_id: str) -> None:
        try:
            self._scheduler.remove_job(job_id)
        except JobLookupError:
            pass

    async def _run(self, job_id: str) -> None:
        job = self._jobs.get(job_id)
        if job is None:
            return
        event = await JobExecutionContext(job=job).run()
        self.execution_log.append(event)
