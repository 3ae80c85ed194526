"""Workq client: one method per protocol command.

Each call writes the full command, then reads and validates the complete
response before returning. A client owns exactly one connection and must
not be shared between threads while a call is in flight.

Any :class:`~workq_client.errors.MalformedResponseError` or
:class:`~workq_client.errors.TransportError` leaves the connection at an
undefined read position; close it and reconnect before issuing another
command.
"""

from __future__ import annotations

import logging

from .config import ClientSettings
from .errors import MalformedResponseError, ResponseError, TransportError
from .models.jobs import (
    BackgroundJob,
    ForegroundJob,
    InspectedJob,
    JobResult,
    LeasedJob,
    ScheduledJob,
)
from .protocol.commands import (
    build_add,
    build_complete,
    build_delete,
    build_fail,
    build_inspect_jobs,
    build_lease,
    build_result,
    build_run,
    build_schedule,
)
from .protocol.framing import ResponseReader
from .protocol.parser import (
    parse_ok,
    parse_ok_with_reply,
    read_inspected_jobs,
    read_leased_job,
    read_result,
)
from .transport.tcp_connection import TCPConnection

logger = logging.getLogger(__name__)


def connect(addr: str | None = None, settings: ClientSettings | None = None) -> Client:
    """Open a TCP connection to a Workq server and return a :class:`Client`.

    Args:
        addr: ``host:port``. Takes precedence over ``settings``.
        settings: Connection settings; defaults to :meth:`ClientSettings.from_env`.

    Raises:
        TransportError: If the connection cannot be established.
    """
    if addr is not None:
        settings = ClientSettings.from_addr(addr)
    elif settings is None:
        settings = ClientSettings.from_env()

    conn = TCPConnection(settings.host, settings.port, settings.connect_timeout)
    try:
        conn.open()
    except OSError as e:
        raise TransportError(str(e)) from e
    return Client(conn)


class Client:
    """A single connection to Workq.

    ``conn`` is any object with ``write(data)``, ``readline()``,
    ``read(n)``, ``pending()`` and ``close()``; normally a
    :class:`~workq_client.transport.tcp_connection.TCPConnection`.
    """

    def __init__(self, conn) -> None:
        self._conn = conn
        self._reader = ResponseReader(conn)

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close the connection. A second close raises :class:`TransportError`."""
        try:
            self._conn.close()
        except OSError as e:
            raise TransportError(str(e)) from e

    def add(self, job: BackgroundJob) -> None:
        """Add a background job.

        Raises:
            ResponseError: For server-reported errors.
            TransportError: On any network error.
            MalformedResponseError: If the response can't be parsed.
        """
        self._send("add", build_add(job))
        self._ack()

    def run(self, job: ForegroundJob) -> JobResult:
        """Submit a foreground job and wait up to ``job.timeout`` ms for its result."""
        self._send("run", build_run(job))
        self._expect_single_reply()
        return self._drained(read_result(self._reader))

    def schedule(self, job: ScheduledJob) -> None:
        """Schedule a job to become runnable at ``job.time`` (UTC)."""
        self._send("schedule", build_schedule(job))
        self._ack()

    def result(self, job_id: str, timeout: int) -> JobResult:
        """Fetch a job's result, waiting up to ``timeout`` ms for it."""
        self._send("result", build_result(job_id, timeout))
        self._expect_single_reply()
        return self._drained(read_result(self._reader))

    def lease(self, names: list[str], timeout: int) -> LeasedJob:
        """Lease a job from any of ``names``, waiting up to ``timeout`` ms."""
        self._send("lease", build_lease(names, timeout))
        self._expect_single_reply()
        return self._drained(read_leased_job(self._reader))

    def complete(self, job_id: str, result: bytes) -> None:
        """Mark a leased job as successfully completed with ``result``."""
        self._send("complete", build_complete(job_id, result))
        self._ack()

    def fail(self, job_id: str, result: bytes) -> None:
        """Mark a leased job as failed with ``result``."""
        self._send("fail", build_fail(job_id, result))
        self._ack()

    def delete(self, job_id: str) -> None:
        self._send("delete", build_delete(job_id))
        self._ack()

    def inspect_jobs(self, name: str, cursor_offset: int, limit: int) -> list[InspectedJob]:
        """Inspect up to ``limit`` jobs named ``name`` starting at ``cursor_offset``.

        Raises:
            PayloadOrderError: If a ``payload`` key is not directly preceded
                by ``payload-size`` in a record.
        """
        self._send("inspect jobs", build_inspect_jobs(name, cursor_offset, limit))
        count = self._reply_count()
        return read_inspected_jobs(self._reader, count)

    def _send(self, verb: str, data: bytes) -> None:
        logger.debug("Sending %s (%d bytes)", verb, len(data))
        try:
            self._conn.write(data)
        except OSError as e:
            raise TransportError(str(e)) from e

    def _ack(self) -> None:
        try:
            parse_ok(self._reader)
        except ResponseError as e:
            logger.debug("Server error: code=%s text=%r", e.code, e.text)
            raise

    def _reply_count(self) -> int:
        try:
            return parse_ok_with_reply(self._reader)
        except ResponseError as e:
            logger.debug("Server error: code=%s text=%r", e.code, e.text)
            raise

    def _expect_single_reply(self) -> None:
        if self._reply_count() != 1:
            raise MalformedResponseError()

    def _drained(self, record):
        self._reader.ensure_drained()
        return record
