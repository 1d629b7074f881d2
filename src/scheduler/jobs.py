"""Job registry and per-job timer lifecycle."""

import logging
from datetime import datetime, timedelta
from typing import Any, Callable, Optional, Sequence, Union

from ..domain.models import Action, DuplicateIdError, Job, JobStatus
from ..domain.protocols import FailureReporter, Timer
from .intervals import parse_interval

logger = logging.getLogger(__name__)


class JobRegistry:
    """Registry of periodic jobs that also drives their timers.

    Every enabled job owns one repeating timer while the registry is
    running. All methods are synchronous and expected to be called from
    the event loop thread, so registry mutations never interleave.
    """

    def __init__(
        self,
        timer: Optional[Timer] = None,
        reporters: Optional[Sequence[FailureReporter]] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize registry.

        Args:
            timer: Repeating timer primitive (defaults to AsyncioTimer)
            reporters: Failure reporters (defaults to logging only)
            clock: Current-time source
        """
        if timer is None:
            from .timers import AsyncioTimer

            timer = AsyncioTimer()
        if reporters is None:
            from ..notifications.log_reporter import LoggingFailureReporter

            reporters = [LoggingFailureReporter()]

        self._timer = timer
        self._reporters = list(reporters)
        self._clock = clock
        self._jobs: dict[str, Job] = {}
        self._handles: dict[str, Any] = {}
        self._running = False

    @property
    def is_running(self) -> bool:
        """Check if the registry is running."""
        return self._running

    @property
    def reporters(self) -> list[FailureReporter]:
        """Get list of failure reporters."""
        return self._reporters

    def add_job(self, job_id: str, name: str, schedule: str, action: Action) -> Job:
        """Register a new job.

        Args:
            job_id: Unique job id
            name: Display name
            schedule: Interval string ("5m", "2h", "1d", "10")
            action: Zero-argument coroutine function

        Returns:
            Created Job instance

        Raises:
            DuplicateIdError: If a job with this id already exists
        """
        if job_id in self._jobs:
            raise DuplicateIdError(job_id)

        job = Job(
            id=job_id,
            name=name,
            schedule=schedule,
            action=action,
            next_run=self._clock() + timedelta(milliseconds=parse_interval(schedule)),
        )
        self._jobs[job_id] = job

        if self._running:
            self._arm(job)

        logger.debug(f"Added job: {job_id} with schedule: {schedule}")
        return job

    def remove_job(self, job_id: str) -> bool:
        """Remove a job, disarming its timer first.

        An already running firing is not cancelled.

        Args:
            job_id: Job id to remove

        Returns:
            True if removed, False if not found
        """
        if job_id not in self._jobs:
            return False

        self._disarm(job_id)
        del self._jobs[job_id]
        logger.debug(f"Removed job: {job_id}")
        return True

    def get_job(self, job_id: str) -> Optional[Job]:
        """Get job by id."""
        return self._jobs.get(job_id)

    def get_all_jobs(self) -> list[Job]:
        """List all registered jobs.

        Returns:
            New list of all jobs
        """
        return list(self._jobs.values())

    def get_jobs_by_status(self, status: Union[JobStatus, str]) -> list[Job]:
        """List jobs with the given status.

        Args:
            status: JobStatus or its string value

        Returns:
            List of matching jobs

        Raises:
            ValueError: If status is not a valid status value
        """
        status = JobStatus(status)
        return [job for job in self.get_all_jobs() if job.status == status]

    def has_timer(self, job_id: str) -> bool:
        """Check whether a job currently has an armed timer."""
        return job_id in self._handles

    def start(self) -> None:
        """Start the registry and arm every enabled job.

        Calling start again re-arms enabled jobs without duplicating timers.
        """
        if self._running:
            logger.warning("Registry already running, re-arming jobs")

        self._running = True
        for job in self.get_all_jobs():
            if job.enabled:
                self._arm(job)

        logger.info(f"Registry started with {len(self._handles)} armed job(s)")

    def stop(self) -> None:
        """Stop the registry and disarm every timer.

        Job statuses are left as they are.
        """
        self._running = False
        for job_id in list(self._handles):
            self._disarm(job_id)

        logger.info("Registry stopped")

    def enable_job(self, job_id: str) -> bool:
        """Enable a job, arming it if the registry is running.

        Args:
            job_id: Job id

        Returns:
            True if enabled, False if not found
        """
        job = self._jobs.get(job_id)
        if not job:
            return False

        job.enabled = True
        if self._running:
            self._arm(job)
        return True

    def disable_job(self, job_id: str) -> bool:
        """Disable a job and disarm its timer.

        Args:
            job_id: Job id

        Returns:
            True if disabled, False if not found
        """
        job = self._jobs.get(job_id)
        if not job:
            return False

        job.enabled = False
        self._disarm(job_id)
        return True

    async def run_job_now(self, job_id: str) -> JobStatus:
        """Run one firing of a job immediately, outside its cadence.

        Args:
            job_id: Job id to run

        Returns:
            Terminal status of the run

        Raises:
            KeyError: If job not found
        """
        job = self._jobs.get(job_id)
        if not job:
            raise KeyError(f"Job not found: {job_id}")

        return await self._execute(job)

    def clear(self) -> None:
        """Disarm and remove all jobs."""
        for job_id in list(self._jobs):
            self.remove_job(job_id)

    def _arm(self, job: Job) -> None:
        self._disarm(job.id)

        interval = parse_interval(job.schedule)

        async def fire() -> None:
            await self._fire(job)

        self._handles[job.id] = self._timer.arm(interval, fire)
        job.next_run = self._clock() + timedelta(milliseconds=interval)
        logger.debug(f"Armed job: {job.id} every {interval} ms")

    def _disarm(self, job_id: str) -> None:
        handle = self._handles.pop(job_id, None)
        if handle is not None:
            self._timer.disarm(handle)
            logger.debug(f"Disarmed job: {job_id}")

    async def _fire(self, job: Job) -> None:
        # A disable can race with a firing the timer already scheduled
        if not job.enabled:
            return
        await self._execute(job)

    async def _execute(self, job: Job) -> JobStatus:
        started = self._clock()
        job.status = JobStatus.RUNNING

        try:
            await job.action()
        except Exception as e:
            job.status = JobStatus.FAILED
            await self._report(job.id, e)
            return JobStatus.FAILED

        job.status = JobStatus.COMPLETED
        job.last_run = started
        logger.info(f"Job {job.id} completed successfully")
        return JobStatus.COMPLETED

    async def _report(self, job_id: str, error: Exception) -> None:
        for reporter in self._reporters:
            try:
                await reporter.report(job_id, error)
            except Exception as e:
                logger.error(
                    f"Failure reporter {reporter.channel_name} raised for job {job_id}: {e}"
                )
