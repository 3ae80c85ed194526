"""Line and block framing for the Workq text protocol.

Every message is a sequence of lines terminated by ``\\r\\n``. Commands and
responses that carry data follow a line with a *block*: exactly ``n`` raw
bytes, where ``n`` was declared earlier on the line, followed by another
``\\r\\n``::

    +-------------------------------+------+----------------+------+
    | field field ... <n>           | CRLF | n raw bytes    | CRLF |
    +-------------------------------+------+----------------+------+

Block bytes are never scanned for delimiters; they may contain CR, LF or NUL.
"""

from __future__ import annotations

from ..errors import MalformedResponseError, TransportError

CRLF = b"\r\n"
TERMINATOR_LEN = len(CRLF)
MAX_DATA_BLOCK = 1048576  # 1 MiB, largest block a response may declare
# Longest response line accepted, terminator included
MAX_LINE_LENGTH = 65536


def encode_line(*fields: str | int) -> bytes:
    """Join ``fields`` with single spaces and terminate the line."""
    return " ".join(str(f) for f in fields).encode("utf-8") + CRLF


def encode_block(data: bytes) -> bytes:
    """Frame raw bytes as a block. The length is declared by the caller's line."""
    return bytes(data) + CRLF


class ResponseReader:
    """Pull-parser primitives over a connection's inbound byte stream.

    ``conn`` must provide ``readline(limit)``, ``read(n)`` and ``pending()``
    (see :class:`~workq_client.transport.tcp_connection.TCPConnection`).
    Nothing is buffered here beyond what the connection itself buffers, and
    nothing is ever pushed back: after a failure the stream position is
    wherever the failing read left it.
    """

    def __init__(self, conn) -> None:
        self._conn = conn

    def read_line(self) -> bytes:
        """Read one ``\\r\\n``-terminated line and return it without the terminator.

        Raises:
            TransportError: On stream errors or if the stream ends mid-line.
            MalformedResponseError: If the line is not ``\\r\\n`` terminated
                or reaches :data:`MAX_LINE_LENGTH` bytes without a terminator.
        """
        try:
            line = self._conn.readline(MAX_LINE_LENGTH)
        except OSError as e:
            raise TransportError(str(e)) from e

        if not line.endswith(b"\n"):
            if len(line) >= MAX_LINE_LENGTH:
                raise MalformedResponseError()
            raise TransportError("EOF")
        if len(line) < TERMINATOR_LEN or line[-TERMINATOR_LEN:] != CRLF:
            raise MalformedResponseError()
        return line[:-TERMINATOR_LEN]

    def read_block(self, size: int) -> bytes:
        """Read exactly ``size`` bytes followed by ``\\r\\n``.

        Raises:
            MalformedResponseError: If ``size`` is outside ``[0, MAX_DATA_BLOCK]``
                (checked before reading), on short reads, or if the trailing
                bytes are not ``\\r\\n``.
            TransportError: On stream errors.
        """
        if not 0 <= size <= MAX_DATA_BLOCK:
            raise MalformedResponseError()

        block = self._read_exact(size)
        # Size must match end of line; trailing garbage is not allowed
        if self._read_exact(TERMINATOR_LEN) != CRLF:
            raise MalformedResponseError()
        return block

    def expect(self, prefix: bytes) -> bool:
        """Consume ``len(prefix)`` bytes and report whether they equal ``prefix``."""
        try:
            return self._read_exact(len(prefix)) == prefix
        except MalformedResponseError:
            return False

    def ensure_drained(self) -> None:
        """Fail if any byte beyond the response is already readable."""
        try:
            pending = self._conn.pending()
        except OSError as e:
            raise TransportError(str(e)) from e
        if pending:
            raise MalformedResponseError()

    def _read_exact(self, size: int) -> bytes:
        try:
            data = self._conn.read(size)
        except OSError as e:
            raise TransportError(str(e)) from e
        if data is None or len(data) != size:
            raise MalformedResponseError()
        return data
