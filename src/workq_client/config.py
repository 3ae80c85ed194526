"""Connection settings for the Workq client."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 9922
DEFAULT_CONNECT_TIMEOUT = 5.0


@dataclass(slots=True)
class ClientSettings:
    """Where and how to connect.

    ``connect_timeout`` only bounds connection establishment; once
    connected, reads block until the server answers or the connection
    is closed.
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"

    @classmethod
    def from_env(cls) -> ClientSettings:
        """Load settings from ``WORKQ_*`` environment variables with local defaults."""
        return cls(
            host=os.getenv("WORKQ_HOST", DEFAULT_HOST),
            port=int(os.getenv("WORKQ_PORT", str(DEFAULT_PORT))),
            connect_timeout=float(
                os.getenv("WORKQ_CONNECT_TIMEOUT", str(DEFAULT_CONNECT_TIMEOUT))
            ),
        )

    @classmethod
    def from_addr(cls, addr: str, connect_timeout: float = DEFAULT_CONNECT_TIMEOUT) -> ClientSettings:
        """Parse a ``host:port`` address.

        Raises:
            ValueError: If the port is missing or not an integer.
        """
        host, sep, port = addr.rpartition(":")
        if not sep or not port:
            raise ValueError(f"Address must be host:port, got {addr!r}")
        try:
            port_number = int(port)
        except ValueError as e:
            raise ValueError(f"Invalid port in address {addr!r}") from e
        return cls(
            host=host.strip("[]") or DEFAULT_HOST,
            port=port_number,
            connect_timeout=connect_timeout,
        )
