"""Registry lifecycle routes."""

from fastapi import APIRouter
from pydantic import BaseModel

from ...container import get_container

router = APIRouter(prefix="/scheduler", tags=["scheduler"])


class SchedulerStatusResponse(BaseModel):
    """Scheduler status response model."""

    running: bool
    jobs: int
    armed: int


def scheduler_status() -> SchedulerStatusResponse:
    registry = get_container().registry
    jobs = registry.get_all_jobs()
    return SchedulerStatusResponse(
        running=registry.is_running,
        jobs=len(jobs),
        armed=sum(1 for j in jobs if registry.has_timer(j.id)),
    )


@router.get("", response_model=SchedulerStatusResponse)
async def get_status() -> SchedulerStatusResponse:
    """Get registry running state."""
    return scheduler_status()


@router.post("/start", response_model=SchedulerStatusResponse)
async def start() -> SchedulerStatusResponse:
    """Start the registry."""
    get_container().registry.start()
    return scheduler_status()


@router.post("/stop", response_model=SchedulerStatusResponse)
async def stop() -> SchedulerStatusResponse:
    """Stop the registry."""
    get_container().registry.stop()
    return scheduler_status()
