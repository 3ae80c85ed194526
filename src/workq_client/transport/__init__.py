"""Byte-stream transports."""

from .tcp_connection import TCPConnection
