"""ABI codec: sequences, records and the public encode/decode surface.

Scalars are delegated to ``encoding``. Byte strings and variable arrays carry
a u16 length/count header; fixed arrays are plain concatenations. Records use
head/tail framing: static fields are written inline, each dynamic field gets a
u16 slot in the head holding the offset (from the start of the record) of its
payload in the tail.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from .config import MAX_UINT16
from .encoding import Reader, Writer, read_primitive, write_primitive
from .envelope import add_return_marker, extract_return_value, strip_return_marker
from .errors import AbiOverflowError, InvalidValueError, OffsetOutOfRangeError, UnsupportedTypeError
from .types import AbiKind, AbiType, RecordDescriptor
from .values import AbiValue, ByteString, FixedArray, Record, VariableArray


# --- encode ---


@dataclass(frozen=True)
class PatchSite:
    position: int
    payload: bytes


@dataclass
class RecordBuilder:
    """Accumulates a record head and the dynamic payloads owed to its tail."""

    writer: Writer = field(default_factory=Writer)
    patch_sites: List[PatchSite] = field(default_factory=list)

    def add_static(self, encoded: bytes) -> None:
        self.writer.write_bytes(encoded)

    def add_dynamic(self, payload: bytes) -> None:
        self.patch_sites.append(PatchSite(len(self.writer), payload))
        self.writer.write_u16(0)

    def finalize(self) -> bytes:
        for site in self.patch_sites:
            offset = len(self.writer)
            if offset > MAX_UINT16:
                raise AbiOverflowError(
                    f"dynamic payload would start at offset {offset}, beyond the u16 offset range"
                )
            self.writer.patch_u16(site.position, offset)
            self.writer.write_bytes(site.payload)
        self.patch_sites = []
        return self.writer.getvalue()


def _write_value(w: Writer, value: AbiValue) -> None:
    t = value.abi_type
    if t.is_primitive:
        write_primitive(w, value)
    elif t.kind == AbiKind.BYTE_STRING:
        w.write_u16(len(value.data))
        w.write_bytes(value.data)
    elif t.kind == AbiKind.VARIABLE_ARRAY:
        w.write_u16(len(value.items))
        for item in value.items:
            _write_value(w, item)
    elif t.kind == AbiKind.FIXED_ARRAY:
        for item in value.items:
            _write_value(w, item)
    elif t.kind == AbiKind.RECORD:
        w.write_bytes(value.to_bytes())
    else:
        raise UnsupportedTypeError(f"cannot encode {t}")


def encode_record(value: Record) -> bytes:
    """Head/tail encoding of a record's fields; raises on u16 offset overflow."""
    builder = RecordBuilder()
    for f, v in zip(value.descriptor.fields, value.values):
        if f.abi_type.is_dynamic:
            builder.add_dynamic(encode(v))
        else:
            builder.add_static(encode(v))
    return builder.finalize()


def encode(value: AbiValue) -> bytes:
    if not isinstance(value, AbiValue):
        raise InvalidValueError(f"cannot encode {type(value).__name__}, expected an ABI value")
    w = Writer()
    _write_value(w, value)
    return w.getvalue()


def to_bytes(value: Record) -> bytes:
    if not isinstance(value, Record):
        raise InvalidValueError("to_bytes expects a record")
    return value.to_bytes()


def encode_return(value: AbiValue) -> bytes:
    """Encode ``value`` as a logged return value (marker-prefixed)."""
    return add_return_marker(encode(value))


# --- decode ---


def _read_value(r: Reader, abi_type: AbiType) -> AbiValue:
    kind = abi_type.kind
    if abi_type.is_primitive:
        return read_primitive(r, abi_type)
    if kind == AbiKind.BYTE_STRING:
        size = r.read_u16("byte string length")
        return ByteString(r.read_bytes(size, "byte string"))
    if kind == AbiKind.VARIABLE_ARRAY:
        count = r.read_u16("array count")
        items = [_read_value(r, abi_type.element) for _ in range(count)]
        return VariableArray(abi_type.element, tuple(items))
    if kind == AbiKind.FIXED_ARRAY:
        items = [_read_value(r, abi_type.element) for _ in range(abi_type.length)]
        return FixedArray(abi_type.element, tuple(items))
    if kind == AbiKind.RECORD:
        return _read_record(r, abi_type.record)
    raise UnsupportedTypeError(f"cannot decode {abi_type}")


def _read_record(r: Reader, descriptor: RecordDescriptor) -> Record:
    origin = r.data
    start = r.pos
    tail_end = start
    values: List[AbiValue] = []
    for f in descriptor.fields:
        if not f.abi_type.is_dynamic:
            values.append(_read_value(r, f.abi_type))
            continue
        offset = r.read_u16(f"offset of field {f.name!r}")
        if start + offset > len(origin):
            raise OffsetOutOfRangeError(
                f"field {f.name!r} offset {offset} points past the end of a "
                f"{len(origin) - start}-byte buffer"
            )
        # The cursor only moves past the offset slot; the payload lives in the tail.
        tail = Reader(origin, start + offset)
        values.append(_read_value(tail, f.abi_type))
        tail_end = max(tail_end, tail.pos)
    r.pos = max(r.pos, tail_end)
    return Record(descriptor, tuple(values))


def decode_prefix(data: bytes, abi_type: AbiType) -> Tuple[AbiValue, int]:
    """Decode one value from the front of ``data``; returns (value, consumed)."""
    r = Reader(bytes(data))
    value = _read_value(r, abi_type)
    return value, r.pos


def decode(data: bytes, abi_type: AbiType, *, return_value: bool = False) -> AbiValue:
    """Decode ``data`` as ``abi_type``.

    With ``return_value`` the 4-byte return marker is verified and stripped
    first. Bytes after a complete value are ignored.
    """
    if return_value:
        data = strip_return_marker(data)
    value, _ = decode_prefix(data, abi_type)
    return value


def parse(data: bytes, descriptor: RecordDescriptor, *, return_value: bool = False) -> Record:
    return decode(data, descriptor.abi_type, return_value=return_value)


def decode_return(logs: Sequence[bytes], abi_type: AbiType) -> AbiValue:
    """Decode a method's return value from the logs of its call."""
    return decode(extract_return_value(logs), abi_type)
