"""Contract interface descriptions, method signatures and selectors.

The JSON layout follows ARC-4 (``name``, ``methods[].args[]``,
``methods[].returns``) with optional ARC-56 style ``structs`` giving named
field layouts to tuple arguments and return values.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .codec import encode
from .config import MAX_APP_ARGS, MAX_DIRECT_ARGS, SELECTOR_SIZE
from .errors import InvalidValueError, UnsupportedTypeError
from .hashing import sha512_256
from .types import AbiType, RecordDescriptor, parse_abi_type, record
from .values import AbiValue, Record

VOID = "void"


def method_selector(signature: str) -> bytes:
    """First 4 bytes of SHA-512/256 over the method signature."""
    return sha512_256(signature.encode("utf-8"))[:SELECTOR_SIZE]


@dataclass(frozen=True)
class Argument:
    name: str
    abi_type: AbiType
    description: str = ""


@dataclass(frozen=True)
class Method:
    name: str
    args: Tuple[Argument, ...] = ()
    returns: Optional[AbiType] = None
    description: str = ""

    @property
    def signature(self) -> str:
        ret = VOID if self.returns is None else str(self.returns)
        return f"{self.name}({','.join(str(a.abi_type) for a in self.args)}){ret}"

    @property
    def selector(self) -> bytes:
        return method_selector(self.signature)

    def encode_args(self, values: Sequence[AbiValue]) -> List[bytes]:
        """Selector followed by one encoded blob per argument.

        Past 15 arguments, the first 14 stay separate and the rest are packed
        into one trailing tuple.
        """
        if len(values) != len(self.args):
            raise InvalidValueError(
                f"{self.name} takes {len(self.args)} arguments, got {len(values)}"
            )
        for arg, value in zip(self.args, values):
            if value.abi_type != arg.abi_type:
                raise InvalidValueError(
                    f"argument {arg.name!r} of {self.name} is {value.abi_type}, expected {arg.abi_type}"
                )

        blobs = [self.selector]
        if len(values) < MAX_APP_ARGS:
            blobs.extend(encode(v) for v in values)
            return blobs

        blobs.extend(encode(v) for v in values[:MAX_DIRECT_ARGS])
        rest = self.args[MAX_DIRECT_ARGS:]
        tail = RecordDescriptor.of("", ((a.name, a.abi_type) for a in rest))
        blobs.append(encode(Record(tail, tuple(values[MAX_DIRECT_ARGS:]))))
        return blobs


def _struct_type(name: str, structs: Dict[str, Any], seen: Tuple[str, ...] = ()) -> AbiType:
    if name not in structs:
        raise UnsupportedTypeError(f"unknown struct {name!r}")
    if name in seen:
        raise UnsupportedTypeError(f"struct {name!r} is recursive")
    fields = []
    for f in structs[name]:
        ftype = f["type"]
        if isinstance(ftype, str) and ftype in structs:
            fields.append((f["name"], _struct_type(ftype, structs, seen + (name,))))
        else:
            fields.append((f["name"], parse_abi_type(ftype)))
    return record(name, fields)


def _resolve_type(entry: Dict[str, Any], structs: Dict[str, Any]) -> AbiType:
    struct_name = entry.get("struct")
    if struct_name:
        abi_type = _struct_type(struct_name, structs)
        declared = entry.get("type")
        if declared and str(parse_abi_type(declared)) != str(abi_type):
            raise UnsupportedTypeError(
                f"struct {struct_name!r} does not match declared type {declared!r}"
            )
        return abi_type
    type_name = entry["type"]
    if type_name in structs:
        return _struct_type(type_name, structs)
    return parse_abi_type(type_name)


def _method_from_json(obj: Dict[str, Any], structs: Dict[str, Any]) -> Method:
    args = tuple(
        Argument(
            name=a.get("name") or f"arg{i}",
            abi_type=_resolve_type(a, structs),
            description=a.get("desc", ""),
        )
        for i, a in enumerate(obj.get("args", []))
    )
    ret = obj.get("returns") or {"type": VOID}
    returns = None if ret.get("type") == VOID else _resolve_type(ret, structs)
    return Method(name=obj["name"], args=args, returns=returns, description=obj.get("desc", ""))


@dataclass(frozen=True)
class Contract:
    name: str
    methods: Tuple[Method, ...] = ()
    description: str = ""
    structs: Dict[str, AbiType] = field(default_factory=dict, compare=False, hash=False)

    @classmethod
    def from_json(cls, obj: Dict[str, Any]) -> Contract:
        raw_structs = obj.get("structs") or {}
        methods = tuple(_method_from_json(m, raw_structs) for m in obj.get("methods", []))
        structs = {name: _struct_type(name, raw_structs) for name in raw_structs}
        return cls(
            name=obj.get("name", ""),
            methods=methods,
            description=obj.get("desc", ""),
            structs=structs,
        )

    @classmethod
    def load(cls, path: Path) -> Contract:
        return cls.from_json(json.loads(Path(path).read_text()))

    def get_method(self, name_or_signature: str) -> Method:
        if "(" in name_or_signature:
            for m in self.methods:
                if m.signature == name_or_signature:
                    return m
            raise UnsupportedTypeError(f"{self.name} has no method {name_or_signature!r}")
        matches = [m for m in self.methods if m.name == name_or_signature]
        if not matches:
            raise UnsupportedTypeError(f"{self.name} has no method {name_or_signature!r}")
        if len(matches) > 1:
            raise InvalidValueError(
                f"{name_or_signature!r} is overloaded in {self.name}; use the full signature"
            )
        return matches[0]

    def method_by_selector(self, selector: bytes) -> Method:
        for m in self.methods:
            if m.selector == selector:
                return m
        raise UnsupportedTypeError(f"{self.name} has no method with selector {selector.hex()}")

    def struct(self, name: str) -> RecordDescriptor:
        try:
            return self.structs[name].record
        except KeyError:
            raise UnsupportedTypeError(f"{self.name} has no struct {name!r}") from None
