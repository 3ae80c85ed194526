"""Shared fakes for client and parser tests."""

from __future__ import annotations

import io

import pytest

from workq_client.client import Client
from workq_client.protocol.framing import ResponseReader


class FakeConnection:
    """In-memory connection: canned response bytes in, recorded writes out."""

    def __init__(self, response: bytes = b"") -> None:
        self._inbound = io.BytesIO(response)
        self.written = bytearray()
        self.closed = False

    def write(self, data: bytes) -> int:
        self.written += data
        return len(data)

    def readline(self, limit: int = -1) -> bytes:
        return self._inbound.readline(limit)

    def read(self, size: int) -> bytes:
        return self._inbound.read(size)

    def pending(self) -> bool:
        return self._inbound.tell() < len(self._inbound.getvalue())

    def close(self) -> None:
        if self.closed:
            raise ConnectionError("Connection already closed")
        self.closed = True


class BadWriteConnection(FakeConnection):
    def write(self, data: bytes) -> int:
        raise BrokenPipeError("A bad time")


class BadReadConnection(FakeConnection):
    def readline(self, limit: int = -1) -> bytes:
        raise ConnectionResetError("Connection reset by peer")

    def read(self, size: int) -> bytes:
        raise ConnectionResetError("Connection reset by peer")


@pytest.fixture
def make_client():
    """Build a client over a FakeConnection returning ``response``."""

    def _make(response: bytes = b"+OK\r\n") -> tuple[Client, FakeConnection]:
        conn = FakeConnection(response)
        return Client(conn), conn

    return _make


@pytest.fixture
def make_reader():
    def _make(data: bytes) -> ResponseReader:
        return ResponseReader(FakeConnection(data))

    return _make


@pytest.fixture
def bad_write_client() -> Client:
    return Client(BadWriteConnection())


@pytest.fixture
def bad_read_client() -> Client:
    return Client(BadReadConnection())
