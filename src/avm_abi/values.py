"""ABI value model.

Each value is immutable and carries its own ``AbiType``. Constructors check
that the native payload fits the declared width.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Sequence, Tuple

from .config import ADDRESS_SIZE, MAX_BYTE, MAX_UINT16, MAX_UINT64, MAX_UINT256
from .errors import AbiOverflowError, InvalidValueError
from .types import (
    ADDRESS,
    BOOL,
    BYTE,
    BYTE_STRING,
    UINT64,
    UINT256,
    AbiType,
    RecordDescriptor,
    fixed_array,
    variable_array,
)


def _check_uint(name: str, value: int, maximum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidValueError(f"{name} must be an int")
    if value < 0 or value > maximum:
        raise AbiOverflowError(f"{name} value {value} does not fit")


class AbiValue:
    """Base of all ABI values."""

    @property
    def abi_type(self) -> AbiType:
        raise NotImplementedError

    @property
    def is_dynamic(self) -> bool:
        return self.abi_type.is_dynamic


@dataclass(frozen=True)
class UInt64(AbiValue):
    value: int

    def __post_init__(self) -> None:
        _check_uint("uint64", self.value, MAX_UINT64)

    @property
    def abi_type(self) -> AbiType:
        return UINT64

    def __int__(self) -> int:
        return self.value


@dataclass(frozen=True)
class UInt256(AbiValue):
    value: int

    def __post_init__(self) -> None:
        _check_uint("uint256", self.value, MAX_UINT256)

    @property
    def abi_type(self) -> AbiType:
        return UINT256

    def __int__(self) -> int:
        return self.value


@dataclass(frozen=True)
class Byte(AbiValue):
    value: int

    def __post_init__(self) -> None:
        _check_uint("byte", self.value, MAX_BYTE)

    @property
    def abi_type(self) -> AbiType:
        return BYTE

    def __int__(self) -> int:
        return self.value


@dataclass(frozen=True)
class Bool(AbiValue):
    value: bool

    def __post_init__(self) -> None:
        if not isinstance(self.value, bool):
            raise InvalidValueError("bool must be a bool")

    @property
    def abi_type(self) -> AbiType:
        return BOOL

    def __bool__(self) -> bool:
        return self.value


@dataclass(frozen=True)
class Address(AbiValue):
    """32-byte account public key."""

    public_key: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.public_key, (bytes, bytearray)):
            raise InvalidValueError("address must be bytes")
        if len(self.public_key) > ADDRESS_SIZE:
            raise AbiOverflowError(f"address is {len(self.public_key)} bytes, max {ADDRESS_SIZE}")
        if len(self.public_key) != ADDRESS_SIZE:
            raise InvalidValueError(f"address must be {ADDRESS_SIZE} bytes")
        object.__setattr__(self, "public_key", bytes(self.public_key))

    @property
    def abi_type(self) -> AbiType:
        return ADDRESS

    def __bytes__(self) -> bytes:
        return self.public_key


@dataclass(frozen=True)
class ByteString(AbiValue):
    data: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.data, (bytes, bytearray)):
            raise InvalidValueError("byte string must be bytes")
        if len(self.data) > MAX_UINT16:
            raise AbiOverflowError(f"byte string of {len(self.data)} bytes exceeds u16 length header")
        object.__setattr__(self, "data", bytes(self.data))

    @property
    def abi_type(self) -> AbiType:
        return BYTE_STRING

    def __bytes__(self) -> bytes:
        return self.data

    def __len__(self) -> int:
        return len(self.data)


def _check_items(element_type: AbiType, items: Sequence[AbiValue]) -> Tuple[AbiValue, ...]:
    items = tuple(items)
    for i, item in enumerate(items):
        if not isinstance(item, AbiValue):
            raise InvalidValueError(f"array item {i} is not an ABI value")
        if item.abi_type != element_type:
            raise InvalidValueError(f"array item {i} is {item.abi_type}, expected {element_type}")
    return items


class _Array(AbiValue):
    """Arrays compare by element type string and items.

    Record element descriptors differ only in names, which never reach the
    encoding, so they do not take part in equality.
    """

    element_type: AbiType
    items: Tuple[AbiValue, ...]

    def _key(self) -> Tuple[str, Tuple[AbiValue, ...]]:
        return str(self.element_type), self.items

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash((type(self).__name__,) + self._key())

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[AbiValue]:
        return iter(self.items)

    def __getitem__(self, index: int) -> AbiValue:
        return self.items[index]


@dataclass(frozen=True, eq=False)
class FixedArray(_Array):
    element_type: AbiType
    items: Tuple[AbiValue, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", _check_items(self.element_type, self.items))

    @property
    def abi_type(self) -> AbiType:
        return fixed_array(self.element_type, len(self.items))


@dataclass(frozen=True, eq=False)
class VariableArray(_Array):
    element_type: AbiType
    items: Tuple[AbiValue, ...] = ()

    def __post_init__(self) -> None:
        items = _check_items(self.element_type, self.items)
        if len(items) > MAX_UINT16:
            raise AbiOverflowError(f"array of {len(items)} items exceeds u16 count header")
        object.__setattr__(self, "items", items)

    @property
    def abi_type(self) -> AbiType:
        return variable_array(self.element_type)


@dataclass(frozen=True, eq=False)
class Record(AbiValue):
    """Struct/tuple value.

    The encoding is built on construction, so a record whose tail offsets
    do not fit in u16 cannot exist. Two records are equal when their
    encodings are byte-for-byte identical, and the hash is taken over those
    bytes.
    """

    descriptor: RecordDescriptor
    values: Tuple[AbiValue, ...]
    _encoded: bytes = field(init=False, repr=False)

    def __post_init__(self) -> None:
        values = tuple(self.values)
        if len(values) != len(self.descriptor.fields):
            raise InvalidValueError(
                f"record {self.descriptor.name!r} expects {len(self.descriptor.fields)} values, got {len(values)}"
            )
        for f, v in zip(self.descriptor.fields, values):
            if not isinstance(v, AbiValue):
                raise InvalidValueError(f"field {f.name!r} is not an ABI value")
            if v.abi_type != f.abi_type:
                raise InvalidValueError(f"field {f.name!r} is {v.abi_type}, expected {f.abi_type}")
        object.__setattr__(self, "values", values)

        from .codec import encode_record

        object.__setattr__(self, "_encoded", encode_record(self))

    @property
    def abi_type(self) -> AbiType:
        return self.descriptor.abi_type

    def __getitem__(self, name: str) -> AbiValue:
        return self.values[self.descriptor.index_of(name)]

    def items(self) -> Iterator[Tuple[str, AbiValue]]:
        return zip(self.descriptor.field_names, self.values)

    def to_bytes(self) -> bytes:
        return self._encoded

    @classmethod
    def parse(cls, descriptor: RecordDescriptor, data: bytes, return_value: bool = False) -> Record:
        from .codec import parse

        return parse(data, descriptor, return_value=return_value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self._encoded == other._encoded

    def __hash__(self) -> int:
        return hash(self._encoded)
