"""Byte-level writer/reader and the fixed-width primitive codec."""

from __future__ import annotations

from dataclasses import dataclass, field

from .config import ADDRESS_SIZE, MAX_UINT16
from .errors import AbiOverflowError, InsufficientDataError, InvalidValueError, UnsupportedTypeError
from .types import AbiKind, AbiType
from .values import Address, AbiValue, Bool, Byte, UInt64, UInt256


@dataclass
class Writer:
    buf: bytearray = field(default_factory=bytearray)

    def __len__(self) -> int:
        return len(self.buf)

    def write_u8(self, v: int) -> None:
        self.buf.extend(int(v).to_bytes(1, "big", signed=False))

    def write_u16(self, v: int) -> None:
        if v > MAX_UINT16:
            raise AbiOverflowError(f"{v} does not fit in u16")
        self.buf.extend(int(v).to_bytes(2, "big", signed=False))

    def write_u64(self, v: int) -> None:
        self.buf.extend(int(v).to_bytes(8, "big", signed=False))

    def write_u256(self, v: int) -> None:
        self.buf.extend(int(v).to_bytes(32, "big", signed=False))

    def write_bytes(self, b: bytes) -> None:
        self.buf.extend(b)

    def write_bool(self, v: bool) -> None:
        self.write_u8(1 if v else 0)

    def patch_u16(self, pos: int, v: int) -> None:
        if v > MAX_UINT16:
            raise AbiOverflowError(f"offset {v} does not fit in u16")
        self.buf[pos : pos + 2] = int(v).to_bytes(2, "big", signed=False)

    def getvalue(self) -> bytes:
        return bytes(self.buf)


@dataclass
class Reader:
    """Bounds-checked cursor over an immutable buffer."""

    data: bytes
    pos: int = 0

    def remaining(self) -> int:
        return len(self.data) - self.pos

    def read_bytes(self, n: int, what: str = "value") -> bytes:
        if self.remaining() < n:
            raise InsufficientDataError(
                f"{what} needs {n} bytes at offset {self.pos}, {max(self.remaining(), 0)} available"
            )
        out = self.data[self.pos : self.pos + n]
        self.pos += n
        return bytes(out)

    def read_uint(self, size: int, what: str = "uint") -> int:
        return int.from_bytes(self.read_bytes(size, what), "big", signed=False)

    def read_u8(self, what: str = "u8") -> int:
        return self.read_uint(1, what)

    def read_u16(self, what: str = "u16") -> int:
        return self.read_uint(2, what)

    def read_u64(self, what: str = "u64") -> int:
        return self.read_uint(8, what)

    def read_u256(self, what: str = "u256") -> int:
        return self.read_uint(32, what)

    def read_bool(self, what: str = "bool") -> bool:
        pos = self.pos
        v = self.read_u8(what)
        if v > 1:
            raise InvalidValueError(f"{what} byte at offset {pos} is {v:#04x}, expected 0x00 or 0x01")
        return v == 1


def write_primitive(w: Writer, value: AbiValue) -> None:
    kind = value.abi_type.kind
    if kind == AbiKind.UINT64:
        w.write_u64(value.value)
    elif kind == AbiKind.UINT256:
        w.write_u256(value.value)
    elif kind == AbiKind.BYTE:
        w.write_u8(value.value)
    elif kind == AbiKind.BOOL:
        w.write_bool(value.value)
    elif kind == AbiKind.ADDRESS:
        w.write_bytes(value.public_key)
    else:
        raise UnsupportedTypeError(f"{value.abi_type} is not a primitive type")


def read_primitive(r: Reader, abi_type: AbiType) -> AbiValue:
    kind = abi_type.kind
    if kind == AbiKind.UINT64:
        return UInt64(r.read_u64("uint64"))
    if kind == AbiKind.UINT256:
        return UInt256(r.read_u256("uint256"))
    if kind == AbiKind.BYTE:
        return Byte(r.read_u8("byte"))
    if kind == AbiKind.BOOL:
        return Bool(r.read_bool("bool"))
    if kind == AbiKind.ADDRESS:
        return Address(r.read_bytes(ADDRESS_SIZE, "address"))
    raise UnsupportedTypeError(f"{abi_type} is not a primitive type")


def encode_primitive(value: AbiValue) -> bytes:
    w = Writer()
    write_primitive(w, value)
    return w.getvalue()


def decode_primitive(data: bytes, abi_type: AbiType) -> tuple[AbiValue, int]:
    """Decode one scalar from the front of ``data``; returns (value, consumed)."""
    r = Reader(data)
    value = read_primitive(r, abi_type)
    return value, r.pos
