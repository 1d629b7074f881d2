"""API route modules."""

from .jobs import router as jobs_router
from .scheduler import router as scheduler_router

__all__ = ["jobs_router", "scheduler_router"]
