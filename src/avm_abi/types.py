"""ABI type model.

Every value handled by the codec is described by an ``AbiType``: a kind tag
plus, for composite kinds, the element type / fixed length / record layout.
``parse_abi_type`` turns ARC-4 type strings (``uint64``, ``byte[]``,
``(address,bool,byte[])``, ``uint64[4]``) into this model.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from .config import (
    ADDRESS_SIZE,
    BOOL_SIZE,
    BYTE_SIZE,
    OFFSET_SIZE,
    UINT64_SIZE,
    UINT256_SIZE,
)
from .errors import InvalidValueError, UnsupportedTypeError


class AbiKind(Enum):
    UINT64 = "uint64"
    UINT256 = "uint256"
    BYTE = "byte"
    BOOL = "bool"
    ADDRESS = "address"
    BYTE_STRING = "string"
    FIXED_ARRAY = "fixed_array"
    VARIABLE_ARRAY = "variable_array"
    RECORD = "record"


PRIMITIVE_SIZES = {
    AbiKind.UINT64: UINT64_SIZE,
    AbiKind.UINT256: UINT256_SIZE,
    AbiKind.BYTE: BYTE_SIZE,
    AbiKind.BOOL: BOOL_SIZE,
    AbiKind.ADDRESS: ADDRESS_SIZE,
}


@dataclass(frozen=True)
class AbiType:
    kind: AbiKind
    element: Optional[AbiType] = None
    length: Optional[int] = None
    record: Optional[RecordDescriptor] = None

    @property
    def is_primitive(self) -> bool:
        return self.kind in PRIMITIVE_SIZES

    @property
    def is_dynamic(self) -> bool:
        if self.kind in PRIMITIVE_SIZES:
            return False
        if self.kind in (AbiKind.BYTE_STRING, AbiKind.VARIABLE_ARRAY):
            return True
        if self.kind == AbiKind.FIXED_ARRAY:
            return self.element.is_dynamic
        return any(f.abi_type.is_dynamic for f in self.record.fields)

    def static_size(self) -> int:
        """Encoded width of a static type."""
        if self.is_dynamic:
            raise UnsupportedTypeError(f"{self} is dynamic and has no static size")
        if self.kind in PRIMITIVE_SIZES:
            return PRIMITIVE_SIZES[self.kind]
        if self.kind == AbiKind.FIXED_ARRAY:
            return self.length * self.element.static_size()
        return sum(f.abi_type.static_size() for f in self.record.fields)

    def head_size(self) -> int:
        """Width this type occupies in the head of an enclosing record."""
        return OFFSET_SIZE if self.is_dynamic else self.static_size()

    def __str__(self) -> str:
        if self.kind == AbiKind.FIXED_ARRAY:
            return f"{self.element}[{self.length}]"
        if self.kind == AbiKind.VARIABLE_ARRAY:
            return f"{self.element}[]"
        if self.kind == AbiKind.RECORD:
            return "(" + ",".join(str(f.abi_type) for f in self.record.fields) + ")"
        return self.kind.value


@dataclass(frozen=True)
class RecordField:
    name: str
    abi_type: AbiType


@dataclass(frozen=True)
class RecordDescriptor:
    """Ordered, named field layout of a struct/tuple.

    Field order is fixed here and is the only order used while encoding and
    decoding; names exist for construction and inspection.
    """

    name: str
    fields: Tuple[RecordField, ...]

    def __post_init__(self) -> None:
        names = [f.name for f in self.fields]
        if len(set(names)) != len(names):
            raise InvalidValueError(f"duplicate field name in record {self.name!r}")

    @classmethod
    def of(cls, name: str, fields: Iterable[Tuple[str, AbiType]]) -> RecordDescriptor:
        return cls(name=name, fields=tuple(RecordField(n, t) for n, t in fields))

    @property
    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]

    def index_of(self, name: str) -> int:
        for i, f in enumerate(self.fields):
            if f.name == name:
                return i
        raise InvalidValueError(f"record {self.name!r} has no field {name!r}")

    @property
    def abi_type(self) -> AbiType:
        return AbiType(AbiKind.RECORD, record=self)

    def __len__(self) -> int:
        return len(self.fields)


UINT64 = AbiType(AbiKind.UINT64)
UINT256 = AbiType(AbiKind.UINT256)
BYTE = AbiType(AbiKind.BYTE)
BOOL = AbiType(AbiKind.BOOL)
ADDRESS = AbiType(AbiKind.ADDRESS)
BYTE_STRING = AbiType(AbiKind.BYTE_STRING)


def fixed_array(element: AbiType, length: int) -> AbiType:
    if length < 0:
        raise InvalidValueError("fixed array length must be non-negative")
    return AbiType(AbiKind.FIXED_ARRAY, element=element, length=length)


def variable_array(element: AbiType) -> AbiType:
    return AbiType(AbiKind.VARIABLE_ARRAY, element=element)


def record(name: str, fields: Iterable[Tuple[str, AbiType]]) -> AbiType:
    return RecordDescriptor.of(name, fields).abi_type


_PRIMITIVE_NAMES = {
    "uint64": UINT64,
    "uint256": UINT256,
    "byte": BYTE,
    "bool": BOOL,
    "address": ADDRESS,
    "string": BYTE_STRING,
}


def _split_tuple(inner: str) -> List[str]:
    parts: List[str] = []
    depth = 0
    start = 0
    for i, ch in enumerate(inner):
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth < 0:
                raise UnsupportedTypeError(f"unbalanced parentheses in {inner!r}")
        elif ch == "," and depth == 0:
            parts.append(inner[start:i])
            start = i + 1
    if depth != 0:
        raise UnsupportedTypeError(f"unbalanced parentheses in {inner!r}")
    parts.append(inner[start:])
    return parts


def parse_abi_type(text: str, name: str = "") -> AbiType:
    """Parse an ARC-4 type string.

    Tuples become records whose fields are named ``field0``..``fieldN``;
    ``name`` labels the outermost record.
    """
    s = "".join(text.split())
    if not s:
        raise UnsupportedTypeError("empty ABI type")

    if s.endswith("]"):
        idx = s.rfind("[")
        if idx <= 0:
            raise UnsupportedTypeError(f"malformed array type {text!r}")
        element = parse_abi_type(s[:idx])
        size = s[idx + 1 : -1]
        if size == "":
            return variable_array(element)
        if not size.isdigit():
            raise UnsupportedTypeError(f"malformed array length in {text!r}")
        return fixed_array(element, int(size))

    if s.startswith("("):
        if not s.endswith(")"):
            raise UnsupportedTypeError(f"malformed tuple type {text!r}")
        inner = s[1:-1]
        parts = _split_tuple(inner) if inner else []
        if any(p == "" for p in parts):
            raise UnsupportedTypeError(f"empty tuple element in {text!r}")
        return record(name, ((f"field{i}", parse_abi_type(p)) for i, p in enumerate(parts)))

    try:
        return _PRIMITIVE_NAMES[s]
    except KeyError:
        raise UnsupportedTypeError(f"unsupported ABI type {text!r}") from None
