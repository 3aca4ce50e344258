"""Byte strings, variable arrays and fixed arrays."""

from __future__ import annotations

import pytest

from avm_abi.codec import decode, decode_prefix, encode
from avm_abi.errors import AbiOverflowError, InsufficientDataError, InvalidValueError
from avm_abi.native import from_native
from avm_abi.types import (
    BOOL,
    BYTE,
    BYTE_STRING,
    UINT64,
    fixed_array,
    parse_abi_type,
    record,
    variable_array,
)
from avm_abi.values import Bool, Byte, ByteString, FixedArray, UInt64, VariableArray
from avm_abi.vectors import decode_vector, encode_vector

REL = "abi/sequences.json"


def test_byte_string_header() -> None:
    assert encode(ByteString(b"abc")) == bytes.fromhex("0003616263")
    assert encode(ByteString(b"")) == bytes.fromhex("0000")


def test_byte_string_max_length() -> None:
    assert len(encode(ByteString(bytes(0xFFFF)))) == 0xFFFF + 2
    with pytest.raises(AbiOverflowError):
        ByteString(bytes(0x10000))


def test_empty_variable_array() -> None:
    assert encode(VariableArray(BYTE)) == bytes.fromhex("0000")
    assert decode(bytes.fromhex("0000"), variable_array(BYTE)) == VariableArray(BYTE)


def test_variable_array_count_header() -> None:
    arr = VariableArray(UINT64, (UInt64(1), UInt64(2)))
    out = encode(arr)
    assert out[:2] == b"\x00\x02"
    assert out[2:] == bytes.fromhex("0000000000000001" "0000000000000002")
    assert decode(out, variable_array(UINT64)) == arr


def test_variable_array_of_byte_strings() -> None:
    arr = VariableArray(BYTE_STRING, (ByteString(b"a"), ByteString(b"bc")))
    out = encode(arr)
    assert out == bytes.fromhex("0002" "000161" "00026263")
    value, consumed = decode_prefix(out, variable_array(BYTE_STRING))
    assert value == arr
    assert consumed == len(out)


def test_fixed_array_has_no_header() -> None:
    arr = FixedArray(BOOL, (Bool(True), Bool(False), Bool(True)))
    assert encode(arr) == bytes.fromhex("010001")
    assert decode(bytes.fromhex("010001"), fixed_array(BOOL, 3)) == arr


def test_fixed_array_dynamic_element() -> None:
    t = fixed_array(BYTE_STRING, 2)
    assert t.is_dynamic
    assert not fixed_array(UINT64, 2).is_dynamic
    value = from_native(t, ["a", "b"])
    assert encode(value) == bytes.fromhex("000161" "000162")


def test_empty_fixed_array() -> None:
    assert encode(FixedArray(UINT64, ())) == b""
    assert decode(b"", fixed_array(UINT64, 0)) == FixedArray(UINT64, ())


def test_array_item_type_checked() -> None:
    with pytest.raises(InvalidValueError):
        VariableArray(UINT64, (Byte(1),))


def test_truncated_byte_string() -> None:
    with pytest.raises(InsufficientDataError):
        decode(bytes.fromhex("00056162"), BYTE_STRING)


def test_truncated_array_element() -> None:
    with pytest.raises(InsufficientDataError):
        decode(bytes.fromhex("0002") + bytes(8) + bytes(3), variable_array(UINT64))


def test_nested_arrays_roundtrip() -> None:
    t = parse_abi_type("uint64[2][]")
    value = from_native(t, [[1, 2], [3, 4]])
    out = encode(value)
    assert out[:2] == b"\x00\x02"
    assert len(out) == 2 + 4 * 8
    assert decode(out, t) == value


def test_sequence_vectors(vector_test_group) -> None:
    vectors = [
        encode_vector("bytes_empty", variable_array(BYTE), []),
        encode_vector("bytes_abc", variable_array(BYTE), [0x61, 0x62, 0x63]),
        encode_vector("string_hello", BYTE_STRING, "hello"),
        encode_vector("bool_fixed_2", fixed_array(BOOL, 2), [True, False]),
        decode_vector("string_truncated", BYTE_STRING, bytes.fromhex("00056162")),
        decode_vector("uint64_list", variable_array(UINT64), bytes.fromhex("0001" "0000000000000009")),
    ]
    for vec in vectors:
        vector_test_group(REL, vec)

    by_name = {v["name"]: v["expected"] for v in vectors}
    assert by_name["bytes_empty"]["hex"] == "0000"
    assert by_name["bytes_abc"]["hex"] == "0003616263"
    assert by_name["string_hello"]["hex"] == "000568656c6c6f"
    assert by_name["string_truncated"]["error"] == "INSUFFICIENT_DATA"
    assert by_name["uint64_list"]["value"] == [9]


def test_arrays_of_records_compare_by_content() -> None:
    point = record("Point", [("x", UINT64)])
    pair = record("Pair", [("a", UINT64)])
    left = VariableArray(point, (from_native(point, [1]),))
    right = VariableArray(pair, (from_native(pair, [1]),))
    assert left.items[0] == right.items[0]
    assert left == right
    assert hash(left) == hash(right)
    assert left != VariableArray(pair, (from_native(pair, [2]),))
    assert FixedArray(point, left.items) != left
