"""Fixed-width scalar encoding: uint64, uint256, byte, bool, address."""

from __future__ import annotations

import pytest

from avm_abi.codec import decode, decode_prefix, encode
from avm_abi.encoding import Reader, Writer, decode_primitive, encode_primitive
from avm_abi.errors import AbiOverflowError, InsufficientDataError, InvalidValueError
from avm_abi.types import ADDRESS, BOOL, BYTE, UINT64, UINT256
from avm_abi.values import Address, Bool, Byte, UInt64, UInt256
from avm_abi.vectors import decode_vector, encode_vector

REL = "abi/primitives.json"


def test_uint64_big_endian() -> None:
    assert encode(UInt64(1)) == bytes.fromhex("0000000000000001")
    assert encode(UInt64(0x0102030405060708)) == bytes.fromhex("0102030405060708")


def test_uint64_bounds() -> None:
    assert encode(UInt64(2**64 - 1)) == b"\xff" * 8
    with pytest.raises(AbiOverflowError):
        UInt64(2**64)
    with pytest.raises(AbiOverflowError):
        UInt64(-1)


def test_uint_rejects_non_int() -> None:
    with pytest.raises(InvalidValueError):
        UInt64("1")
    with pytest.raises(InvalidValueError):
        UInt64(True)


def test_uint256_width() -> None:
    out = encode(UInt256(1))
    assert len(out) == 32
    assert out == bytes(31) + b"\x01"
    with pytest.raises(AbiOverflowError):
        UInt256(2**256)


def test_byte_range() -> None:
    assert encode(Byte(0xAB)) == b"\xab"
    with pytest.raises(AbiOverflowError):
        Byte(256)


def test_bool_encoding() -> None:
    assert encode(Bool(True)) == b"\x01"
    assert encode(Bool(False)) == b"\x00"


def test_bool_decodes_only_zero_or_one() -> None:
    assert decode(b"\x01", BOOL) == Bool(True)
    assert decode(b"\x00", BOOL) == Bool(False)
    with pytest.raises(InvalidValueError):
        decode(b"\x02", BOOL)
    with pytest.raises(InvalidValueError):
        decode(b"\xff", BOOL)


def test_address_width() -> None:
    pk = bytes(range(32))
    assert encode(Address(pk)) == pk
    with pytest.raises(AbiOverflowError):
        Address(bytes(33))
    with pytest.raises(InvalidValueError):
        Address(bytes(31))


def test_decode_consumes_exact_width() -> None:
    data = bytes.fromhex("00000000000000ff") + b"\xee"
    value, consumed = decode_primitive(data, UINT64)
    assert value == UInt64(255)
    assert consumed == 8
    assert decode_prefix(data, UINT64) == (UInt64(255), 8)


@pytest.mark.parametrize(
    "abi_type, size",
    [(UINT64, 8), (UINT256, 32), (BYTE, 1), (BOOL, 1), (ADDRESS, 32)],
)
def test_short_input_is_insufficient(abi_type, size) -> None:
    with pytest.raises(InsufficientDataError):
        decode(bytes(size - 1), abi_type)


def test_encode_primitive_matches_writer() -> None:
    w = Writer()
    w.write_u64(7)
    w.write_bool(True)
    assert w.getvalue() == encode_primitive(UInt64(7)) + encode_primitive(Bool(True))


def test_reader_tracks_position() -> None:
    r = Reader(bytes.fromhex("0001ff"))
    assert r.read_u16() == 1
    assert r.remaining() == 1
    assert r.read_u8() == 0xFF
    with pytest.raises(InsufficientDataError):
        r.read_u8()


def test_primitive_vectors(vector_test_group) -> None:
    vectors = [
        encode_vector("uint64_one", UINT64, 1),
        encode_vector("uint64_max", UINT64, 2**64 - 1),
        encode_vector("uint64_overflow", UINT64, 2**64),
        encode_vector("uint256_one", UINT256, 1),
        encode_vector("byte_max", BYTE, 255),
        encode_vector("bool_true", BOOL, True),
        decode_vector("uint64_truncated", UINT64, bytes(7)),
        decode_vector("bool_invalid_byte", BOOL, b"\x02"),
    ]
    for vec in vectors:
        vector_test_group(REL, vec)

    by_name = {v["name"]: v["expected"] for v in vectors}
    assert by_name["uint64_max"] == {"success": True, "hex": "ff" * 8}
    assert by_name["uint64_overflow"] == {"success": False, "error": "OVERFLOW"}
    assert by_name["uint64_truncated"] == {"success": False, "error": "INSUFFICIENT_DATA"}
    assert by_name["bool_invalid_byte"] == {"success": False, "error": "INVALID_VALUE"}
