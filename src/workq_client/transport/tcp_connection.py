"""TCP connection to a Workq server.

The connection exposes the blocking byte-stream primitives the client
needs (``write``, ``readline``, ``read``, ``pending``, ``close``) over a
plain socket with a buffered reader on its inbound side.
"""

from __future__ import annotations

import logging
import socket

from ..config import DEFAULT_CONNECT_TIMEOUT, DEFAULT_HOST, DEFAULT_PORT

logger = logging.getLogger(__name__)


class TCPConnection:
    """Manages a single TCP connection to a Workq server.

    Usage::

        conn = TCPConnection("localhost", 9922)
        conn.open()
        conn.write(command_bytes)
        line = conn.readline()
        conn.close()

    Reads block until data arrives or the peer closes; no read timeout is
    applied after the connection is established.
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        connect_timeout: float | None = DEFAULT_CONNECT_TIMEOUT,
    ) -> None:
        self._host = host
        self._port = port
        self._connect_timeout = connect_timeout
        self._sock: socket.socket | None = None
        self._reader = None
        self._connected = False

    @classmethod
    def from_socket(cls, sock: socket.socket) -> TCPConnection:
        """Wrap an already connected socket."""
        conn = cls()
        conn._attach(sock)
        return conn

    @property
    def connected(self) -> bool:
        return self._connected

    @property
    def address(self) -> str:
        return f"{self._host}:{self._port}"

    def open(self) -> None:
        """Connect to the server.

        Raises:
            ConnectionError: If already connected.
            OSError: If the connection cannot be established.
        """
        if self._connected:
            raise ConnectionError(f"Already connected to {self.address}")

        sock = socket.create_connection(
            (self._host, self._port), timeout=self._connect_timeout
        )
        self._attach(sock)
        logger.info("Connected to %s", self.address)

    def _attach(self, sock: socket.socket) -> None:
        sock.settimeout(None)
        self._sock = sock
        self._reader = sock.makefile("rb")
        self._connected = True

    def close(self) -> None:
        """Close the connection.

        Raises:
            ConnectionError: If the connection is not open, including on a
                second close.
        """
        if not self._connected:
            raise ConnectionError("Connection already closed")

        try:
            self._reader.close()
            self._sock.close()
        finally:
            self._sock = None
            self._reader = None
            self._connected = False
            logger.info("Disconnected from %s", self.address)

    def write(self, data: bytes) -> int:
        """Send all of ``data``.

        Returns:
            Number of bytes written.

        Raises:
            ConnectionError: If not connected.
            OSError: If the write fails.
        """
        self._ensure_connected()
        try:
            self._sock.sendall(data)
        except OSError as e:
            logger.debug("Write error: %s", e)
            raise
        return len(data)

    def readline(self, limit: int = -1) -> bytes:
        """Read through the next ``\\n``, at most ``limit`` bytes, or fewer if the peer closed."""
        self._ensure_connected()
        try:
            return self._reader.readline(limit)
        except OSError as e:
            logger.debug("Read error: %s", e)
            raise

    def read(self, size: int) -> bytes:
        """Read ``size`` bytes, or fewer if the peer closed."""
        self._ensure_connected()
        try:
            return self._reader.read(size)
        except OSError as e:
            logger.debug("Read error: %s", e)
            raise

    def pending(self) -> bool:
        """Report whether any inbound byte is readable right now, without blocking."""
        self._ensure_connected()
        self._sock.setblocking(False)
        try:
            return bool(self._reader.peek(1))
        except BlockingIOError:
            return False
        finally:
            self._sock.settimeout(None)

    def _ensure_connected(self) -> None:
        if not self._connected:
            raise ConnectionError("Not connected to server")
