"""avm-abi command line: encode, decode and inspect ABI values."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from .codec import decode, encode, encode_return
from .contract import Contract, method_selector
from .errors import AbiError
from .native import from_native, to_json
from .types import parse_abi_type


def _fail(e: AbiError) -> None:
    click.echo(f"ERROR: {e}", err=True)
    sys.exit(1)


@click.group()
def main() -> None:
    """ARC-4 ABI codec tools."""


@main.command("encode")
@click.argument("abi_type")
@click.argument("value")
@click.option("--return-value", is_flag=True, help="Prefix the output with the return marker")
def encode_cmd(abi_type: str, value: str, return_value: bool) -> None:
    """Encode VALUE (JSON) as ABI_TYPE and print hex."""
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="VALUE") from e
    try:
        abi_value = from_native(parse_abi_type(abi_type), parsed)
        out = encode_return(abi_value) if return_value else encode(abi_value)
    except AbiError as e:
        _fail(e)
    click.echo(out.hex())


@main.command("decode")
@click.argument("abi_type")
@click.argument("data")
@click.option("--return-value", is_flag=True, help="Input starts with the return marker")
def decode_cmd(abi_type: str, data: str, return_value: bool) -> None:
    """Decode hex DATA as ABI_TYPE and print JSON."""
    try:
        raw = bytes.fromhex(data[2:] if data.startswith("0x") else data)
    except ValueError as e:
        raise click.BadParameter(f"not valid hex: {e}", param_hint="DATA") from e
    try:
        value = decode(raw, parse_abi_type(abi_type), return_value=return_value)
    except AbiError as e:
        _fail(e)
    click.echo(json.dumps(to_json(value)))


@main.command("selector")
@click.argument("signature")
def selector_cmd(signature: str) -> None:
    """Print the 4-byte selector of a method SIGNATURE."""
    click.echo(method_selector(signature).hex())


@main.command("signature")
@click.argument("contract_json", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("method")
def signature_cmd(contract_json: Path, method: str) -> None:
    """Print signature and selector of METHOD in CONTRACT_JSON."""
    try:
        m = Contract.load(contract_json).get_method(method)
    except AbiError as e:
        _fail(e)
    click.echo(f"{m.signature} {m.selector.hex()}")


if __name__ == "__main__":
    main()
