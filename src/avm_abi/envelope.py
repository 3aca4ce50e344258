"""Return-value envelope.

A method's ABI return value is the last log entry of the call, prefixed by the
4-byte return marker. Offsets inside the returned value are relative to the
bytes after the marker.
"""

from __future__ import annotations

from typing import Sequence

from .config import RETURN_MARKER, RETURN_MARKER_SIZE
from .errors import InvalidMarkerError


def has_return_marker(entry: bytes) -> bool:
    return len(entry) >= RETURN_MARKER_SIZE and bytes(entry[:RETURN_MARKER_SIZE]) == RETURN_MARKER


def strip_return_marker(entry: bytes) -> bytes:
    if len(entry) < RETURN_MARKER_SIZE:
        raise InvalidMarkerError(
            f"log entry of {len(entry)} bytes is shorter than the return marker"
        )
    if not has_return_marker(entry):
        raise InvalidMarkerError(
            f"log entry starts with {bytes(entry[:RETURN_MARKER_SIZE]).hex()}, "
            f"expected return marker {RETURN_MARKER.hex()}"
        )
    return bytes(entry[RETURN_MARKER_SIZE:])


def extract_return_value(logs: Sequence[bytes]) -> bytes:
    """Take the last log entry as the return value and strip its marker."""
    if not logs:
        raise InvalidMarkerError("call produced no logs to read a return value from")
    return strip_return_marker(logs[-1])


def add_return_marker(payload: bytes) -> bytes:
    return RETURN_MARKER + bytes(payload)
