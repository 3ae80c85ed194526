"""Response parsing for server replies.

Each response shape has its own decoder, all reading incrementally from a
:class:`~workq_client.protocol.framing.ResponseReader`::

    +OK\\r\\n                              parse_ok
    +OK <reply-count>\\r\\n                parse_ok_with_reply
    <id> <0|1> <len>\\r\\n<block>\\r\\n       read_result
    <id> <name> <len>\\r\\n<block>\\r\\n      read_leased_job
    <id> <key-count>\\r\\n<key> <value>...  read_inspected_jobs
    -<CODE>[ <text>]\\r\\n                  any shape, raised as ResponseError
"""

from __future__ import annotations

from functools import partial

from ..errors import MalformedResponseError, PayloadOrderError, ResponseError
from ..models.jobs import InspectedJob, JobResult, LeasedJob, parse_time
from ..utils.validation import (
    id_from_string,
    name_from_string,
    parse_signed,
    parse_unsigned,
)
from .framing import ResponseReader

OK = b"+OK"
ERROR_SIGN = b"-"

# Marker that opens the payload line of an inspected job
PAYLOAD_MARKER = b"payload "

UINT8_MAX = 0xFF
UINT32_MAX = 0xFFFFFFFF
UINT64_MAX = 0xFFFFFFFFFFFFFFFF
INT32_MIN, INT32_MAX = -(2**31), 2**31 - 1


def parse_error_line(line: bytes) -> ResponseError:
    """Parse ``-<CODE>[ <text>]`` into a :class:`ResponseError`.

    Raises:
        MalformedResponseError: If the code is empty, or the text is present
            but empty.
    """
    if not line.startswith(ERROR_SIGN):
        raise MalformedResponseError()
    head, sep, text = _decode(line[1:]).partition(" ")
    if not head or (sep and not text):
        raise MalformedResponseError()
    return ResponseError(head, text)


def parse_ok(reader: ResponseReader) -> None:
    """Parse a simple ``+OK`` acknowledgement.

    Raises:
        ResponseError: If the server replied with an error line.
    """
    line = reader.read_line()
    if line == OK:
        return
    raise _error_or_malformed(line)


def parse_ok_with_reply(reader: ResponseReader) -> int:
    """Parse ``+OK <reply-count>`` and return the count."""
    line = reader.read_line()
    if line.startswith(OK + b" "):
        return parse_unsigned(line[len(OK) + 1 :])
    raise _error_or_malformed(line)


def read_result(reader: ResponseReader) -> JobResult:
    """Read a job result record: ``<id> <0|1> <len>`` plus a result block."""
    fields = _split(reader.read_line())
    if len(fields) != 3:
        raise MalformedResponseError()

    job_id, success, size = fields
    id_from_string(job_id)
    if success not in ("0", "1"):
        raise MalformedResponseError()

    result = reader.read_block(parse_unsigned(size))
    return JobResult(success=success == "1", result=result)


def read_leased_job(reader: ResponseReader) -> LeasedJob:
    """Read a leased job record: ``<id> <name> [<ttr>] <len>`` plus a payload block.

    The ``<ttr>`` field is optional; servers that omit it yield ``ttr=0``.
    """
    fields = _split(reader.read_line())
    if len(fields) == 3:
        job_id, name, size = fields
        ttr = 0
    elif len(fields) == 4:
        job_id, name, raw_ttr, size = fields
        ttr = parse_unsigned(raw_ttr, UINT32_MAX)
    else:
        raise MalformedResponseError()

    job_id = id_from_string(job_id)
    name = name_from_string(name)
    payload = reader.read_block(parse_unsigned(size))
    return LeasedJob(id=job_id, name=name, ttr=ttr, payload=payload)


def read_inspected_jobs(reader: ResponseReader, reply_count: int) -> list[InspectedJob]:
    """Read ``reply_count`` inspected job records and require nothing after them."""
    jobs = [read_inspected_job(reader) for _ in range(reply_count)]
    reader.ensure_drained()
    return jobs


def read_inspected_job(reader: ResponseReader) -> InspectedJob:
    """Read a single ``<id> <key-count>`` record and its key/value lines.

    ``payload-size`` is the one key whose value is not self-contained: the
    ``payload <block>`` line must follow it immediately and is read as part
    of the same step. That line is still a key of its own, so it consumes
    one slot of ``key-count``.
    """
    fields = _split(reader.read_line())
    if len(fields) != 2:
        raise MalformedResponseError()

    job = InspectedJob(id=id_from_string(fields[0]), name="", ttr=0, ttl=0)
    key_count = parse_unsigned(fields[1])

    remaining = key_count
    while remaining > 0:
        key, sep, value = _decode(reader.read_line()).partition(" ")
        remaining -= 1

        if key == "payload":
            # A payload line is only valid when consumed by payload-size
            raise PayloadOrderError()
        if not sep or " " in value:
            raise MalformedResponseError()
        if key == "payload-size":
            # The payload line is counted in key-count
            if remaining == 0:
                raise MalformedResponseError()
            job.payload = _read_payload(reader, parse_unsigned(value))
            remaining -= 1
            continue

        field = _INSPECT_FIELDS.get(key)
        if field is None:
            raise MalformedResponseError()
        attr, parse = field
        setattr(job, attr, parse(value))

    return job


def _read_payload(reader: ResponseReader, size: int) -> bytes:
    if not reader.expect(PAYLOAD_MARKER):
        raise PayloadOrderError()
    return reader.read_block(size)


def _parse_created(value: str):
    try:
        return parse_time(value)
    except ValueError as e:
        raise MalformedResponseError() from e


# key -> (InspectedJob attribute, value parser)
_INSPECT_FIELDS = {
    "name": ("name", name_from_string),
    "ttr": ("ttr", partial(parse_unsigned, max_value=UINT32_MAX)),
    "ttl": ("ttl", partial(parse_unsigned, max_value=UINT64_MAX)),
    "max-attempts": ("max_attempts", partial(parse_unsigned, max_value=UINT8_MAX)),
    "attempts": ("attempts", partial(parse_unsigned, max_value=UINT8_MAX)),
    "max-fails": ("max_fails", partial(parse_unsigned, max_value=UINT8_MAX)),
    "fails": ("fails", partial(parse_unsigned, max_value=UINT8_MAX)),
    "priority": ("priority", partial(parse_signed, min_value=INT32_MIN, max_value=INT32_MAX)),
    "state": ("state", partial(parse_unsigned, max_value=UINT8_MAX)),
    "created": ("created", _parse_created),
}


def _error_or_malformed(line: bytes) -> Exception:
    """Return the exception to raise for a line that is not a success marker."""
    if line.startswith(ERROR_SIGN):
        return parse_error_line(line)
    return MalformedResponseError()


def _split(line: bytes) -> list[str]:
    return _decode(line).split(" ")


def _decode(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedResponseError() from e
