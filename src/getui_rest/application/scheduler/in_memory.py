"""Application scheduler – InMemoryScheduler, a simulated-time fake for tests."""
from __future__ import annotations

from getui_rest.application.scheduler.job import Job
from getui_rest.application.scheduler.scheduler import JobExecutionContext, JobExecutedEvent

__all__ = ["InMemoryScheduler"]


class InMemoryScheduler:
    """Scheduler whose clock only moves when a test calls :meth:`advance`.

    Each job is due ``interval_seconds`` after it was (re-)added. Advancing
    past a due time runs the job, then it is due again one interval later
    unless its handler re-added it, which resets the countdown the same way
    a real scheduler does.
    """

    def __init__(self) -> None:
        self._jobs: dict[str, Job] = {}
        self._due_at: dict[str, float] = {}
        self._now = 0.0
        self._running = False
        self.execution_log: list[JobExecutedEvent] = []

    def add_job(self, job: Job) -> None:
        self._jobs[job.id] = job
        self._due_at[job.id] = self._now + job.interval_seconds

    def remove_job(self, job_id: str) -> None:
        self._jobs.pop(job_id, None)
        self._due_at.pop(job_id, None)

    async def start(self) -> None:
        self._running = True

    async def stop(self) -> None:
        self._running = False

    def list_jobs(self) -> list[Job]:
        return list(self._jobs.values())

    def get_job(self, job_id: str) -> Job | None:
        return self._jobs.get(job_id)

    def due_in(self, job_id: str) -> float | None:
        """Seconds until ``job_id`` next fires, ``None`` when not scheduled."""
        due = self._due_at.get(job_id)
        return None if due is None else due - self._now

    async def advance(self, seconds: float) -> list[JobExecutedEvent]:
        """Move simulated time forward, running every job that falls due on the way."""
        deadline = self._now + seconds
        fired: list[JobExecutedEvent] = []
        while self._running:
            due = [
                (at, job_id) for job_id, at in self._due_at.items()
                if at <= deadline and self._jobs[job_id].enabled
            ]
            if not due:
                break
            at, job_id = min(due)
            self._now = at
            job = self._jobs[job_id]
            self._due_at[job_id] = at + job.interval_seconds
            fired.append(await self._execute(job))
        self._now = deadline
        return fired

    async def trigger(self, job_id: str) -> JobExecutedEvent:
        """Run ``job_id`` now without moving the clock."""
        return await self._execute(self._jobs[job_id])

    async def _execute(self, job: Job) -> JobExecutedEvent:
        event = await JobExecutionContext(job=job).run()
        self.execution_log.append(event)
        return event

    @property
    def is_running(self) -> bool:
        return self._running
