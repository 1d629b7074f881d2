"""Domain models for the periodic job runner."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Awaitable, Callable, Optional


Action = Callable[[], Awaitable[Any]]


class JobStatus(Enum):
    """Job lifecycle status values."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"  # Not produced by the registry itself


@dataclass
class Job:
    """A registered periodic action and its live status."""

    id: str
    name: str
    schedule: str  # Interval string, e.g. "5m", "2h", "1d"
    action: Action
    enabled: bool = True
    status: JobStatus = JobStatus.PENDING
    last_run: Optional[datetime] = None
    next_run: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Serialize the observable state of the job."""
        return {
            "id": self.id,
            "name": self.name,
            "schedule": self.schedule,
            "enabled": self.enabled,
            "status": self.status.value,
            "last_run": self.last_run.isoformat() if self.last_run else None,
            "next_run": self.next_run.isoformat() if self.next_run else None,
        }


class DuplicateIdError(ValueError):
    """Raised when a job id is already registered."""

    def __init__(self, job_id: str):
        super().__init__(f"Job already exists: {job_id}")
        self.job_id = job_id
