"""ABI conformance vectors.

A vector is a plain dict::

    {"name": ..., "description": ...,
     "input": {"kind": "encode", "type": "(address,bool,byte[])", "value": [...], "return_value": false},
     "expected": {"success": true, "hex": "..."}}

Decode vectors carry ``"hex"`` in the input and ``"value"`` in the expected
result. Failures are reported by error code name. Values use the JSON form of
``native.to_json`` with records rendered positionally.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from .codec import decode, encode, encode_return
from .errors import AbiError
from .native import from_native, to_json
from .types import AbiType, parse_abi_type
from .values import AbiValue


def run_vector(vector: Dict[str, Any]) -> Dict[str, Any]:
    """Evaluate a vector's input with this codec."""
    inp = vector["input"]
    kind = inp["kind"]
    if kind not in ("encode", "decode"):
        raise ValueError(f"unknown vector kind {kind!r}")
    return_value = bool(inp.get("return_value", False))
    try:
        abi_type = parse_abi_type(inp["type"])
        if kind == "encode":
            value = from_native(abi_type, inp["value"])
            out = encode_return(value) if return_value else encode(value)
            return {"success": True, "hex": out.hex()}
        value = decode(bytes.fromhex(inp["hex"]), abi_type, return_value=return_value)
        return {"success": True, "value": to_json(value, records_as_lists=True)}
    except AbiError as e:
        return {"success": False, "error": e.code.name}


def _vector(name: str, description: Optional[str], inp: Dict[str, Any]) -> Dict[str, Any]:
    vector: Dict[str, Any] = {"name": name}
    if description:
        vector["description"] = description
    vector["input"] = inp
    vector["expected"] = run_vector(vector)
    return vector


def encode_vector(
    name: str,
    abi_type: AbiType,
    value: Any,
    *,
    return_value: bool = False,
    description: Optional[str] = None,
) -> Dict[str, Any]:
    if isinstance(value, AbiValue):
        value = to_json(value, records_as_lists=True)
    return _vector(
        name,
        description,
        {"kind": "encode", "type": str(abi_type), "value": value, "return_value": return_value},
    )


def decode_vector(
    name: str,
    abi_type: AbiType,
    data: bytes,
    *,
    return_value: bool = False,
    description: Optional[str] = None,
) -> Dict[str, Any]:
    return _vector(
        name,
        description,
        {"kind": "decode", "type": str(abi_type), "hex": bytes(data).hex(), "return_value": return_value},
    )
