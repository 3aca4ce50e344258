from __future__ import annotations

import pytest

from avm_abi.address import decode_address, encode_address, is_valid_address
from avm_abi.errors import InvalidValueError

ZERO_ADDRESS = "AAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAY5HFKQ"
ONES_ADDRESS = "AEAQCAIBAEAQCAIBAEAQCAIBAEAQCAIBAEAQCAIBAEAQCAIBAEA5RCDXMI"


def test_encode_zero_key() -> None:
    assert encode_address(bytes(32)) == ZERO_ADDRESS


def test_encode_decode() -> None:
    pk = b"\x01" * 32
    assert encode_address(pk) == ONES_ADDRESS
    assert decode_address(ONES_ADDRESS) == pk
    assert len(ONES_ADDRESS) == 58


def test_bad_checksum() -> None:
    broken = ZERO_ADDRESS[:-1] + "A"
    assert not is_valid_address(broken)
    with pytest.raises(InvalidValueError):
        decode_address(broken)


def test_bad_length_and_alphabet() -> None:
    with pytest.raises(InvalidValueError):
        decode_address(ZERO_ADDRESS[:-1])
    with pytest.raises(InvalidValueError):
        decode_address("1" * 58)
    with pytest.raises(InvalidValueError):
        encode_address(bytes(31))


def test_is_valid() -> None:
    assert is_valid_address(ZERO_ADDRESS)
    assert not is_valid_address("")
