"""Job specifications submitted to the server and records decoded from it.

Specs (``BackgroundJob``, ``ForegroundJob``, ``ScheduledJob``) are built by
the caller and only read by the encoder. ``LeasedJob``, ``JobResult`` and
``InspectedJob`` are built by the decoder; ownership of their byte fields
passes to the caller.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import UTC, datetime

# Wire format for every date time, e.g. ``2016-01-02T15:04:05Z``
TIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
# strptime alone accepts single-digit fields
_TIME_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}Z")


def format_time(value: datetime) -> str:
    """Render ``value`` in UTC using :data:`TIME_FORMAT`.

    Naive datetimes are assumed to already be in UTC.
    """
    if value.tzinfo is not None:
        value = value.astimezone(UTC)
    return value.strftime(TIME_FORMAT)


def parse_time(value: str) -> datetime:
    """Parse a :data:`TIME_FORMAT` string into an aware UTC datetime.

    Raises:
        ValueError: If ``value`` does not match the format.
    """
    if _TIME_RE.fullmatch(value) is None:
        raise ValueError(f"Time must match {TIME_FORMAT}, got {value!r}")
    return datetime.strptime(value, TIME_FORMAT).replace(tzinfo=UTC)


@dataclass
class BackgroundJob:
    """Submitted with ``add``; runs asynchronously."""

    id: str
    name: str
    ttr: int  # time-to-run, seconds
    ttl: int  # time-to-live, seconds
    payload: bytes = b""
    priority: int = 0
    max_attempts: int = 0  # absolute max number of attempts
    max_fails: int = 0  # absolute max number of failures


@dataclass
class ForegroundJob:
    """Submitted with ``run``; the caller blocks until a result or timeout."""

    id: str
    name: str
    ttr: int
    timeout: int  # milliseconds to wait for completion
    payload: bytes = b""
    priority: int = 0


@dataclass
class ScheduledJob:
    """Submitted with ``schedule``; becomes runnable at ``time`` (UTC)."""

    id: str
    name: str
    ttr: int
    ttl: int
    time: str
    payload: bytes = b""
    priority: int = 0
    max_attempts: int = 0
    max_fails: int = 0

    @classmethod
    def at(cls, when: datetime, **kwargs) -> ScheduledJob:
        """Build a scheduled job from a ``datetime`` instead of a string."""
        return cls(time=format_time(when), **kwargs)


@dataclass
class LeasedJob:
    """Returned by ``lease``."""

    id: str
    name: str
    ttr: int
    payload: bytes

    def __repr__(self) -> str:
        return (
            f"LeasedJob(id={self.id!r}, name={self.name!r}, "
            f"ttr={self.ttr}, payload_len={len(self.payload)})"
        )


@dataclass
class JobResult:
    """Returned by ``run`` and ``result``."""

    success: bool
    result: bytes


@dataclass
class InspectedJob(BackgroundJob):
    """Read-only snapshot returned by ``inspect jobs``."""

    attempts: int = 0  # attempts already made
    fails: int = 0  # failures already recorded
    state: int = 0
    created: datetime | None = None
