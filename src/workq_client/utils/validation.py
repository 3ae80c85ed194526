"""Validators for values arriving from the server.

Every helper returns the validated value or raises
:class:`~workq_client.errors.MalformedResponseError`.
"""

from __future__ import annotations

import re
import uuid

from ..errors import MalformedResponseError

NAME_MAX_LENGTH = 128
# Widest numeric field on the wire is a uint64 (20 digits)
MAX_DIGITS = 20

_NAME_RE = re.compile(r"[A-Za-z0-9_.-]{1,%d}" % NAME_MAX_LENGTH)
_UNSIGNED_RE = re.compile(r"[0-9]{1,%d}" % MAX_DIGITS)
_SIGNED_RE = re.compile(r"[+-]?[0-9]{1,%d}" % MAX_DIGITS)


def id_from_string(value: str) -> str:
    """Return ``value`` if it is a canonical 36-character UUID."""
    if len(value) != 36:
        raise MalformedResponseError()
    try:
        parsed = uuid.UUID(value)
    except ValueError as e:
        raise MalformedResponseError() from e
    # uuid.UUID also accepts braces, urn: prefixes and missing hyphens
    if str(parsed) != value.lower():
        raise MalformedResponseError()
    return value


def name_from_string(value: str) -> str:
    """Return ``value`` if it is 1-128 chars of ``[A-Za-z0-9_.-]``."""
    if _NAME_RE.fullmatch(value) is None:
        raise MalformedResponseError()
    return value


def parse_unsigned(value: str | bytes, max_value: int | None = None) -> int:
    """Parse a decimal, digits-only, non-negative integer of at most 20 digits.

    Args:
        value: Text as read from the wire.
        max_value: Inclusive upper bound, or ``None`` for no bound.
    """
    if isinstance(value, bytes):
        value = value.decode("ascii", errors="replace")
    if _UNSIGNED_RE.fullmatch(value) is None:
        raise MalformedResponseError()
    number = int(value)
    if max_value is not None and number > max_value:
        raise MalformedResponseError()
    return number


def parse_signed(value: str, min_value: int, max_value: int) -> int:
    """Parse a decimal integer with an optional sign within ``[min, max]``."""
    if _SIGNED_RE.fullmatch(value) is None:
        raise MalformedResponseError()
    number = int(value)
    if not min_value <= number <= max_value:
        raise MalformedResponseError()
    return number
