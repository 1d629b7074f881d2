"""Job inspection and control routes."""

from typing import Optional
from datetime import datetime
from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from ...domain.models import Job, JobStatus
from ...scheduler.jobs import JobRegistry
from ...container import get_container

router = APIRouter(prefix="/jobs", tags=["jobs"])


class JobResponse(BaseModel):
    """Job response model."""

    id: str
    name: str
    schedule: str
    enabled: bool
    status: str
    armed: bool
    last_run: Optional[datetime] = None
    next_run: Optional[datetime] = None


class JobListResponse(BaseModel):
    """Job list response model."""

    jobs: list[JobResponse]
    total: int


def get_registry() -> JobRegistry:
    """Get JobRegistry from container."""
    return get_container().registry


def job_to_response(job: Job, registry: JobRegistry) -> JobResponse:
    """Convert Job to JobResponse."""
    return JobResponse(**job.to_dict(), armed=registry.has_timer(job.id))


def get_job_or_404(registry: JobRegistry, job_id: str) -> Job:
    job = registry.get_job(job_id)
    if not job:
        raise HTTPException(404, f"Job not found: {job_id}")
    return job


@router.get("", response_model=JobListResponse)
async def list_jobs(
    status: Optional[str] = Query(
        None, description="Filter by status (pending, running, completed, failed, cancelled)"
    ),
) -> JobListResponse:
    """List jobs, optionally filtered by status."""
    registry = get_registry()

    if status:
        try:
            jobs = registry.get_jobs_by_status(JobStatus(status))
        except ValueError:
            raise HTTPException(400, f"Invalid status: {status}")
    else:
        jobs = registry.get_all_jobs()

    return JobListResponse(
        jobs=[job_to_response(j, registry) for j in jobs],
        total=len(jobs),
    )


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: str) -> JobResponse:
    """Get job by ID."""
    registry = get_registry()
    return job_to_response(get_job_or_404(registry, job_id), registry)


@router.post("/{job_id}/enable", response_model=JobResponse)
async def enable_job(job_id: str) -> JobResponse:
    """Enable a job."""
    registry = get_registry()
    if not registry.enable_job(job_id):
        raise HTTPException(404, f"Job not found: {job_id}")
    return job_to_response(registry.get_job(job_id), registry)


@router.post("/{job_id}/disable", response_model=JobResponse)
async def disable_job(job_id: str) -> JobResponse:
    """Disable a job."""
    registry = get_registry()
    if not registry.disable_job(job_id):
        raise HTTPException(404, f"Job not found: {job_id}")
    return job_to_response(registry.get_job(job_id), registry)


@router.post("/{job_id}/run", response_model=JobResponse)
async def run_job(job_id: str) -> JobResponse:
    """Run a job immediately."""
    registry = get_registry()
    job = get_job_or_404(registry, job_id)
    await registry.run_job_now(job_id)
    return job_to_response(job, registry)


@router.delete("/{job_id}", status_code=204)
async def delete_job(job_id: str) -> None:
    """Remove a job."""
    registry = get_registry()
    if not registry.remove_job(job_id):
        raise HTTPException(404, f"Job not found: {job_id}")
