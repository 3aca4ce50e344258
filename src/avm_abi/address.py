"""Algorand address strings.

An address string is the unpadded base32 encoding of the 32-byte public key
followed by the last 4 bytes of its SHA-512/256 digest.
"""

from __future__ import annotations

import base64
import binascii

from .config import ADDRESS_CHECKSUM_SIZE, ADDRESS_SIZE, ADDRESS_STRING_LENGTH
from .errors import InvalidValueError
from .hashing import sha512_256


def _checksum(public_key: bytes) -> bytes:
    return sha512_256(public_key)[-ADDRESS_CHECKSUM_SIZE:]


def encode_address(public_key: bytes) -> str:
    if len(public_key) != ADDRESS_SIZE:
        raise InvalidValueError(f"public key must be {ADDRESS_SIZE} bytes")
    raw = bytes(public_key) + _checksum(bytes(public_key))
    return base64.b32encode(raw).decode("ascii").rstrip("=")


def decode_address(text: str) -> bytes:
    if len(text) != ADDRESS_STRING_LENGTH:
        raise InvalidValueError(f"address string must be {ADDRESS_STRING_LENGTH} characters")
    padded = text + "=" * (-len(text) % 8)
    try:
        raw = base64.b32decode(padded)
    except (binascii.Error, ValueError):
        raise InvalidValueError(f"address {text!r} is not valid base32") from None
    public_key, checksum = raw[:ADDRESS_SIZE], raw[ADDRESS_SIZE:]
    if checksum != _checksum(public_key):
        raise InvalidValueError(f"address {text!r} has a bad checksum")
    return public_key


def is_valid_address(text: str) -> bool:
    try:
        decode_address(text)
    except InvalidValueError:
        return False
    return True
