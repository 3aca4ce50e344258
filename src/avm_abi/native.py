"""Conversion between plain Python / JSON values and ABI values."""

from __future__ import annotations

from typing import Any, Dict, Mapping

from .address import decode_address, encode_address
from .config import ADDRESS_STRING_LENGTH
from .errors import InvalidValueError, UnsupportedTypeError
from .types import AbiKind, AbiType, RecordDescriptor
from .values import (
    Address,
    AbiValue,
    Bool,
    Byte,
    ByteString,
    FixedArray,
    Record,
    UInt64,
    UInt256,
    VariableArray,
)


def _hex_to_bytes(v: str) -> bytes:
    text = v[2:] if v.startswith("0x") else v
    try:
        return bytes.fromhex(text)
    except ValueError:
        raise InvalidValueError(f"{v!r} is not a hex string") from None


def _as_int(abi_type: AbiType, obj: Any) -> int:
    if isinstance(obj, bool) or not isinstance(obj, (int, str)):
        raise InvalidValueError(f"{abi_type} expects an int, got {type(obj).__name__}")
    if isinstance(obj, str):
        try:
            return int(obj, 0)
        except ValueError:
            raise InvalidValueError(f"{obj!r} is not an integer") from None
    return obj


def _address_bytes(obj: Any) -> bytes:
    if isinstance(obj, Address):
        return obj.public_key
    if isinstance(obj, (bytes, bytearray)):
        return bytes(obj)
    if isinstance(obj, str):
        if len(obj) == ADDRESS_STRING_LENGTH:
            return decode_address(obj)
        return _hex_to_bytes(obj)
    raise InvalidValueError(f"address expects bytes or a string, got {type(obj).__name__}")


def _byte_string_bytes(obj: Any) -> bytes:
    if isinstance(obj, (bytes, bytearray)):
        return bytes(obj)
    if isinstance(obj, str):
        return obj.encode("utf-8")
    if isinstance(obj, dict) and set(obj) == {"hex"}:
        return _hex_to_bytes(obj["hex"])
    raise InvalidValueError(f"byte string expects bytes or str, got {type(obj).__name__}")


def _record_from_native(descriptor: RecordDescriptor, obj: Any) -> Record:
    if isinstance(obj, Mapping):
        unknown = set(obj) - set(descriptor.field_names)
        if unknown:
            raise InvalidValueError(f"record {descriptor.name!r} has no fields {sorted(unknown)}")
        missing = [n for n in descriptor.field_names if n not in obj]
        if missing:
            raise InvalidValueError(f"record {descriptor.name!r} is missing fields {missing}")
        raw = [obj[n] for n in descriptor.field_names]
    elif isinstance(obj, (list, tuple)):
        if len(obj) != len(descriptor.fields):
            raise InvalidValueError(
                f"record {descriptor.name!r} expects {len(descriptor.fields)} values, got {len(obj)}"
            )
        raw = list(obj)
    else:
        raise InvalidValueError(f"record expects a dict or list, got {type(obj).__name__}")
    return Record(descriptor, tuple(from_native(f.abi_type, v) for f, v in zip(descriptor.fields, raw)))


def from_native(abi_type: AbiType, obj: Any) -> AbiValue:
    """Build an ``AbiValue`` of ``abi_type`` from a native value.

    Values that already are ``AbiValue``s of the right type pass through.
    """
    if isinstance(obj, AbiValue):
        if obj.abi_type != abi_type:
            raise InvalidValueError(f"expected {abi_type}, got {obj.abi_type}")
        return obj

    kind = abi_type.kind
    if kind == AbiKind.UINT64:
        return UInt64(_as_int(abi_type, obj))
    if kind == AbiKind.UINT256:
        return UInt256(_as_int(abi_type, obj))
    if kind == AbiKind.BYTE:
        return Byte(_as_int(abi_type, obj))
    if kind == AbiKind.BOOL:
        if not isinstance(obj, bool):
            raise InvalidValueError(f"bool expects a bool, got {type(obj).__name__}")
        return Bool(obj)
    if kind == AbiKind.ADDRESS:
        return Address(_address_bytes(obj))
    if kind == AbiKind.BYTE_STRING:
        return ByteString(_byte_string_bytes(obj))
    if kind in (AbiKind.FIXED_ARRAY, AbiKind.VARIABLE_ARRAY):
        if isinstance(obj, (bytes, bytearray)) and abi_type.element.kind == AbiKind.BYTE:
            obj = list(obj)
        if not isinstance(obj, (list, tuple)):
            raise InvalidValueError(f"{abi_type} expects a list, got {type(obj).__name__}")
        if kind == AbiKind.FIXED_ARRAY and len(obj) != abi_type.length:
            raise InvalidValueError(f"{abi_type} expects {abi_type.length} items, got {len(obj)}")
        items = tuple(from_native(abi_type.element, v) for v in obj)
        if kind == AbiKind.FIXED_ARRAY:
            return FixedArray(abi_type.element, items)
        return VariableArray(abi_type.element, items)
    if kind == AbiKind.RECORD:
        return _record_from_native(abi_type.record, obj)
    raise UnsupportedTypeError(f"cannot build {abi_type} from a native value")


def to_native(value: AbiValue) -> Any:
    """Plain Python form: ints, bools, bytes, lists and dicts."""
    kind = value.abi_type.kind
    if kind in (AbiKind.UINT64, AbiKind.UINT256, AbiKind.BYTE, AbiKind.BOOL):
        return value.value
    if kind == AbiKind.ADDRESS:
        return value.public_key
    if kind == AbiKind.BYTE_STRING:
        return value.data
    if kind in (AbiKind.FIXED_ARRAY, AbiKind.VARIABLE_ARRAY):
        return [to_native(v) for v in value.items]
    if kind == AbiKind.RECORD:
        return {name: to_native(v) for name, v in value.items()}
    raise UnsupportedTypeError(f"cannot convert {value.abi_type} to a native value")


def to_json(value: AbiValue, records_as_lists: bool = False) -> Any:
    """JSON-safe form: byte strings as ``{"hex": ...}``, addresses as address strings.

    ``records_as_lists`` renders records positionally, which is how records
    built from bare tuple types round-trip through ``from_native``.
    """
    kind = value.abi_type.kind
    if kind == AbiKind.ADDRESS:
        return encode_address(value.public_key)
    if kind == AbiKind.BYTE_STRING:
        return {"hex": value.data.hex()}
    if kind in (AbiKind.FIXED_ARRAY, AbiKind.VARIABLE_ARRAY):
        return [to_json(v, records_as_lists) for v in value.items]
    if kind == AbiKind.RECORD:
        if records_as_lists:
            return [to_json(v, records_as_lists) for v in value.values]
        out: Dict[str, Any] = {}
        for name, v in value.items():
            out[name] = to_json(v)
        return out
    return to_native(value)
