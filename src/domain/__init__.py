"""Domain models and protocols."""

from .models import (
    Action,
    Job,
    JobStatus,
    DuplicateIdError,
)
from .protocols import (
    Timer,
    FailureReporter,
)

__all__ = [
    "Action",
    "Job",
    "JobStatus",
    "DuplicateIdError",
    "Timer",
    "FailureReporter",
]
