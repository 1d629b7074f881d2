"""Protocol definitions for the environment the registry depends on."""

from typing import Any, Awaitable, Callable, Hashable, Protocol, runtime_checkable


@runtime_checkable
class Timer(Protocol):
    """Protocol for a repeating timer primitive."""

    def arm(self, period_ms: int, callback: Callable[[], Awaitable[None]]) -> Hashable:
        """Call ``callback`` every ``period_ms`` milliseconds, return a handle."""
        ...

    def disarm(self, handle: Any) -> None:
        """Stop the timer behind ``handle``. Unknown handles are ignored."""
        ...


@runtime_checkable
class FailureReporter(Protocol):
    """Protocol for reporting failed job firings."""

    async def report(self, job_id: str, error: BaseException) -> None:
        """Report a failure of the given job."""
        ...

    @property
    def channel_name(self) -> str:
        """Return the channel name this reporter handles."""
        ...
