"""Tests for job models and time helpers."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from workq_client.models.jobs import (
    BackgroundJob,
    InspectedJob,
    LeasedJob,
    ScheduledJob,
    format_time,
    parse_time,
)


def test_format_time_converts_to_utc():
    local = datetime(2016, 1, 2, 17, 4, 5, tzinfo=timezone(timedelta(hours=2)))
    assert format_time(local) == "2016-01-02T15:04:05Z"


def test_format_time_naive_is_utc():
    assert format_time(datetime(2016, 1, 2, 15, 4, 5)) == "2016-01-02T15:04:05Z"


def test_parse_time():
    assert parse_time("2016-01-02T15:04:05Z") == datetime(2016, 1, 2, 15, 4, 5, tzinfo=UTC)


@pytest.mark.parametrize(
    "value",
    [
        "2016-01-02 15:04:05",
        "2016-01-02T15:04:05",
        "",
        "2016-8-2T1:5:5Z",
        "2016-01-02T15:04:05Z ",
        "02016-01-02T15:04:05Z",
    ],
)
def test_parse_time_invalid(value):
    with pytest.raises(ValueError):
        parse_time(value)


def test_scheduled_job_at():
    job = ScheduledJob.at(
        datetime(2016, 12, 1, tzinfo=UTC), id="x", name="j1", ttr=1, ttl=2
    )
    assert job.time == "2016-12-01T00:00:00Z"
    assert job.payload == b""


def test_background_job_defaults():
    job = BackgroundJob(id="x", name="j1", ttr=1, ttl=2)
    assert (job.priority, job.max_attempts, job.max_fails) == (0, 0, 0)


def test_inspected_job_extends_background_job():
    job = InspectedJob(id="x", name="j1", ttr=1, ttl=2)
    assert isinstance(job, BackgroundJob)
    assert job.created is None


def test_leased_job_repr_hides_payload():
    job = LeasedJob(id="x", name="j1", ttr=1, payload=b"secret")
    assert "secret" not in repr(job)
    assert "payload_len=6" in repr(job)
