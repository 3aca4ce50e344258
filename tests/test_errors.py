from __future__ import annotations

import dataclasses

import pytest

from avm_abi.errors import (
    AbiError,
    AbiOverflowError,
    ErrorCategory,
    ErrorCode,
    InsufficientDataError,
    MethodCallError,
    OffsetOutOfRangeError,
)


def test_str_format() -> None:
    err = InsufficientDataError("need 8 bytes")
    assert str(err) == "INSUFFICIENT_DATA(0x0100): need 8 bytes"
    assert err.code.category == ErrorCategory.CODEC


def test_overflow_is_builtin_overflow() -> None:
    err = AbiOverflowError("too big")
    assert isinstance(err, OverflowError)
    assert isinstance(err, AbiError)
    assert err.code == ErrorCode.OVERFLOW


def test_fields_are_frozen() -> None:
    err = OffsetOutOfRangeError("past end")
    with pytest.raises(dataclasses.FrozenInstanceError):
        err.message = "changed"


def test_method_call_error_keeps_cause_code() -> None:
    cause = OffsetOutOfRangeError("past end")
    err = MethodCallError("get_point", cause)
    assert err.code.category == ErrorCategory.CALL
    assert err.cause_code == ErrorCode.OFFSET_OUT_OF_RANGE
    assert err.message == "past end"
    assert str(err) == "METHOD_CALL_FAILED(0x0300): get_point: OFFSET_OUT_OF_RANGE: past end"


def test_chaining_sets_cause() -> None:
    with pytest.raises(MethodCallError) as exc_info:
        try:
            raise InsufficientDataError("short")
        except AbiError as e:
            raise MethodCallError("m", e) from e
    assert isinstance(exc_info.value.__cause__, InsufficientDataError)
