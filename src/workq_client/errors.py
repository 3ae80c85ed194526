"""Error taxonomy for the Workq client.

Three failure classes are kept apart so callers can react to each:

- :class:`TransportError`: the byte stream itself failed (write, read,
  close, or the stream ended in the middle of a line).
- :class:`ResponseError`: the server answered with a well-formed error
  line. ``code`` is machine-checkable, ``text`` is free-form.
- :class:`MalformedResponseError`: the response violated the protocol
  grammar. The connection's read position is undefined afterwards.
"""

from __future__ import annotations


class WorkqError(Exception):
    """Base class for every error raised by this package."""


class TransportError(WorkqError):
    """Underlying stream write/read/close failure."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Net Error: {text}")
        self.text = text


class ResponseError(WorkqError):
    """Error reported by the server as ``-<code>[ <text>]``."""

    def __init__(self, code: str, text: str = "") -> None:
        super().__init__(f"{code} {text}" if text else code)
        self.code = code
        self.text = text

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResponseError):
            return NotImplemented
        return self.code == other.code and self.text == other.text

    def __hash__(self) -> int:
        return hash((self.code, self.text))


class MalformedResponseError(WorkqError):
    """Response could not be parsed."""

    def __init__(self, message: str = "Malformed response") -> None:
        super().__init__(message)


class PayloadOrderError(MalformedResponseError):
    """``payload`` key found without an immediately preceding ``payload-size``."""

    def __init__(self) -> None:
        super().__init__(
            "Payload must immediately follow payload size when inspecting jobs"
        )
