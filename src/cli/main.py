"""CLI commands for the periodic job runner."""

import asyncio
import logging
from typing import Optional

import click

from ..container import get_container, setup_container
from ..domain.models import DuplicateIdError
from ..scheduler.intervals import parse_interval
from ..scheduler.timers import APSchedulerTimer


def run_async(coro):
    """Run async coroutine in sync context."""
    return asyncio.run(coro)


def parse_job_option(value: str) -> tuple[str, str, str]:
    """Split an ``ID=SCHEDULE=COMMAND`` option value.

    Raises:
        click.BadParameter: If the value has fewer than three parts
    """
    parts = value.split("=", 2)
    if len(parts) != 3 or not parts[0] or not parts[2]:
        raise click.BadParameter(
            f"Expected ID=SCHEDULE=COMMAND, got: {value}", param_hint="--job"
        )
    return parts[0], parts[1], parts[2]


def command_action(command: str):
    """Build a job action that runs a shell command.

    A non-zero exit status counts as a failure.
    """

    async def action() -> None:
        process = await asyncio.create_subprocess_shell(command)
        returncode = await process.wait()
        if returncode != 0:
            raise RuntimeError(f"Command exited with status {returncode}: {command}")

    return action


def register_jobs(registry, jobs: tuple[str, ...]) -> None:
    """Register ``--job`` option values as shell command jobs.

    Raises:
        click.BadParameter: If a value is malformed
        click.UsageError: If an id is given twice
    """
    specs = [parse_job_option(value) for value in jobs]
    for job_id, schedule, command in specs:
        try:
            registry.add_job(job_id, job_id, schedule, command_action(command))
        except DuplicateIdError as e:
            raise click.UsageError(str(e))
        click.echo(f"Registered {job_id}: every {parse_interval(schedule)} ms -> {command}")


@click.group()
@click.version_option(version="1.0.0")
def cli():
    """Minimal in-process periodic job runner."""
    container = setup_container()
    settings = container.settings
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command("interval")
@click.argument("schedule")
def interval(schedule: str):
    """Show the interval a schedule string resolves to."""
    ms = parse_interval(schedule)
    click.echo(f"{schedule!r} -> {ms} ms")


@cli.command("run")
@click.option(
    "--job",
    "-j",
    "jobs",
    multiple=True,
    required=True,
    help="Job as ID=SCHEDULE=COMMAND (repeatable)",
)
@click.option(
    "--duration",
    "-d",
    type=float,
    default=None,
    help="Stop after this many seconds (default: run until Ctrl+C)",
)
def run(jobs: tuple[str, ...], duration: Optional[float]):
    """Run shell commands on their own intervals."""
    container = get_container()
    registry = container.registry
    register_jobs(registry, jobs)

    async def main() -> None:
        registry.start()
        try:
            if duration is None:
                await asyncio.Event().wait()
            else:
                await asyncio.sleep(duration)
        finally:
            registry.stop()
            timer = container.timer
            if isinstance(timer, APSchedulerTimer):
                timer.shutdown()

    try:
        run_async(main())
    except KeyboardInterrupt:
        pass

    click.echo("\nJob status:")
    for job in registry.get_all_jobs():
        last_run = job.last_run.strftime("%Y-%m-%d %H:%M:%S") if job.last_run else "never"
        click.echo(f"  {job.id}: {job.status.value} (last run: {last_run})")


@cli.command("serve")
@click.option("--host", "-h", default=None, help="Host to bind to")
@click.option("--port", "-p", default=None, type=int, help="Port to bind to")
@click.option("--reload", is_flag=True, help="Enable auto-reload")
@click.option(
    "--job",
    "-j",
    "jobs",
    multiple=True,
    help="Job as ID=SCHEDULE=COMMAND (repeatable)",
)
def serve(host: Optional[str], port: Optional[int], reload: bool, jobs: tuple[str, ...]):
    """Start the API server, optionally with shell command jobs."""
    import uvicorn

    # The reloader serves from a child process that never sees these jobs
    if reload and jobs:
        raise click.UsageError("--reload cannot be combined with --job")

    container = get_container()
    register_jobs(container.registry, jobs)

    settings = container.settings
    host = host or settings.host
    port = port or settings.port

    click.echo(f"Starting server at http://{host}:{port}")
    click.echo("Press Ctrl+C to stop")

    uvicorn.run(
        "src.api.app:app",
        host=host,
        port=port,
        reload=reload,
    )


def main():
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
