"""ABI codec error codes and exceptions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class ErrorCategory(IntEnum):
    SUCCESS = 0x00
    CODEC = 0x01
    TYPE = 0x02
    CALL = 0x03
    INTERNAL = 0xFF


class ErrorCode(IntEnum):
    # Success
    SUCCESS = 0x0000

    # Codec
    INSUFFICIENT_DATA = 0x0100
    INVALID_MARKER = 0x0101
    OVERFLOW = 0x0102
    OFFSET_OUT_OF_RANGE = 0x0103

    # Type
    UNSUPPORTED_TYPE = 0x0200
    INVALID_VALUE = 0x0201

    # Call
    METHOD_CALL_FAILED = 0x0300

    # Internal
    INTERNAL_ERROR = 0xFF00
    UNKNOWN = 0xFFFF

    @property
    def category(self) -> ErrorCategory:
        return ErrorCategory(self.value >> 8)


@dataclass(frozen=True)
class AbiError(Exception):
    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.name}({self.code:#06x}): {self.message}"


# Allow Python's Exception machinery to set __traceback__/__context__/__cause__
# while keeping dataclass fields frozen (Python 3.13 contextlib compat).
_EXCEPTION_ATTRS = frozenset(("__traceback__", "__context__", "__cause__", "__suppress_context__", "__notes__"))
_frozen_setattr = AbiError.__setattr__


def _abi_error_setattr(self: AbiError, name: str, value: object) -> None:
    if name in _EXCEPTION_ATTRS:
        object.__setattr__(self, name, value)
    else:
        _frozen_setattr(self, name, value)


AbiError.__setattr__ = _abi_error_setattr  # type: ignore[method-assign]


class InsufficientDataError(AbiError):
    """Decoding ran out of input before a value was complete."""

    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.INSUFFICIENT_DATA, message)


class InvalidMarkerError(AbiError):
    """A logged return value is missing the 4-byte return marker."""

    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.INVALID_MARKER, message)


class AbiOverflowError(AbiError, OverflowError):
    """A native value, header or offset does not fit its declared width."""

    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.OVERFLOW, message)


class OffsetOutOfRangeError(AbiError):
    """A dynamic record field points past the end of its origin buffer."""

    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.OFFSET_OUT_OF_RANGE, message)


class UnsupportedTypeError(AbiError):
    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.UNSUPPORTED_TYPE, message)


class InvalidValueError(AbiError):
    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.INVALID_VALUE, message)


class MethodCallError(AbiError):
    """A codec failure raised while calling a contract method."""

    method: str
    cause_code: ErrorCode

    def __init__(self, method: str, cause: AbiError) -> None:
        super().__init__(ErrorCode.METHOD_CALL_FAILED, cause.message)
        object.__setattr__(self, "method", method)
        object.__setattr__(self, "cause_code", cause.code)

    def __str__(self) -> str:
        return (
            f"{self.code.name}({self.code:#06x}): {self.method}: "
            f"{self.cause_code.name}: {self.message}"
        )
