"""Data models for job specifications and decoded responses."""

from .jobs import (
    TIME_FORMAT,
    BackgroundJob,
    ForegroundJob,
    InspectedJob,
    JobResult,
    LeasedJob,
    ScheduledJob,
    format_time,
    parse_time,
)
