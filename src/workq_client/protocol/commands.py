"""Command verbs and high-level command builders.

Each builder returns the exact bytes of one command: a single line of
space-separated fields, followed by a data block for commands that carry
a payload or result. Ids and names are sent as given; the server is
authoritative on their validity.
"""

from __future__ import annotations

from enum import Enum

from ..models.jobs import BackgroundJob, ForegroundJob, ScheduledJob
from .framing import encode_block, encode_line


class Command(str, Enum):
    """Command verbs."""

    ADD = "add"
    RUN = "run"
    SCHEDULE = "schedule"
    RESULT = "result"
    LEASE = "lease"
    COMPLETE = "complete"
    FAIL = "fail"
    DELETE = "delete"
    INSPECT = "inspect"


# Optional flags in the order they must appear on the wire
FLAG_ORDER = ("priority", "max-attempts", "max-fails")


def build_flags(priority: int = 0, max_attempts: int = 0, max_fails: int = 0) -> list[str]:
    """Render non-zero optional values as ``-name=value`` flags."""
    values = (priority, max_attempts, max_fails)
    return [f"-{name}={value}" for name, value in zip(FLAG_ORDER, values) if value != 0]


def build_command(
    command: Command,
    *fields: str | int,
    flags: list[str] | None = None,
    block: bytes | None = None,
) -> bytes:
    """Build a command line with optional flags and an optional data block."""
    line = encode_line(command.value, *fields, *(flags or ()))
    if block is None:
        return line
    return line + encode_block(block)


def build_add(job: BackgroundJob) -> bytes:
    """Build an ``add`` command for a background job."""
    return build_command(
        Command.ADD,
        job.id,
        job.name,
        job.ttr,
        job.ttl,
        len(job.payload),
        flags=build_flags(job.priority, job.max_attempts, job.max_fails),
        block=job.payload,
    )


def build_run(job: ForegroundJob) -> bytes:
    """Build a ``run`` command. Only ``-priority`` applies to foreground jobs."""
    return build_command(
        Command.RUN,
        job.id,
        job.name,
        job.ttr,
        job.timeout,
        len(job.payload),
        flags=build_flags(priority=job.priority),
        block=job.payload,
    )


def build_schedule(job: ScheduledJob) -> bytes:
    """Build a ``schedule`` command for a job runnable at ``job.time``."""
    return build_command(
        Command.SCHEDULE,
        job.id,
        job.name,
        job.ttr,
        job.ttl,
        job.time,
        len(job.payload),
        flags=build_flags(job.priority, job.max_attempts, job.max_fails),
        block=job.payload,
    )


def build_result(job_id: str, timeout: int) -> bytes:
    """Build a ``result`` command.

    Args:
        job_id: Job to wait on.
        timeout: Milliseconds the server should wait for the result.
    """
    return build_command(Command.RESULT, job_id, timeout)


def build_lease(names: list[str], timeout: int) -> bytes:
    """Build a ``lease`` command for any of ``names``.

    Args:
        names: One or more job names to lease from.
        timeout: Milliseconds the server should wait for an available job.
    """
    if not names:
        raise ValueError("Lease requires at least one job name")
    return build_command(Command.LEASE, *names, timeout)


def build_complete(job_id: str, result: bytes) -> bytes:
    """Build a ``complete`` command carrying the job's result."""
    return build_command(Command.COMPLETE, job_id, len(result), block=result)


def build_fail(job_id: str, result: bytes) -> bytes:
    """Build a ``fail`` command carrying the job's failure result."""
    return build_command(Command.FAIL, job_id, len(result), block=result)


def build_delete(job_id: str) -> bytes:
    return build_command(Command.DELETE, job_id)


def build_inspect_jobs(name: str, cursor_offset: int, limit: int) -> bytes:
    """Build an ``inspect jobs`` command paging through jobs named ``name``."""
    return build_command(Command.INSPECT, "jobs", name, cursor_offset, limit)
