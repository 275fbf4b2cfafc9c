"""Application scheduler – job scheduling port, APScheduler adapter and in-memory fake."""
from getui_rest.application.scheduler.job import Job
from getui_rest.application.scheduler.scheduler import (
    JobExecutedEvent,
    JobExecutionContext,
    Scheduler,
)
from getui_rest.application.scheduler.apscheduler import APSchedulerAdapter
from getui_rest.application.scheduler.in_memory import InMemoryScheduler

__all__ = [
    "APSchedulerAdapter",
    "InMemoryScheduler",
    "Job",
    "JobExecutedEvent",
    "JobExecutionContext",
    "Scheduler",
]
