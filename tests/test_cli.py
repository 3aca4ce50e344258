from __future__ import annotations

import json

from click.testing import CliRunner

from avm_abi.cli import main


def test_encode() -> None:
    result = CliRunner().invoke(main, ["encode", "uint64", "5"])
    assert result.exit_code == 0
    assert result.output.strip() == "0000000000000005"


def test_encode_record_with_return_marker() -> None:
    result = CliRunner().invoke(
        main, ["encode", "(bool,string)", '[true, "hi"]', "--return-value"]
    )
    assert result.exit_code == 0
    assert result.output.strip() == "151f7c75" + "01" + "0003" + "00026869"


def test_encode_overflow() -> None:
    result = CliRunner().invoke(main, ["encode", "byte", "256"])
    assert result.exit_code == 1
    assert "ERROR: OVERFLOW(0x0102)" in result.output


def test_encode_bad_json() -> None:
    result = CliRunner().invoke(main, ["encode", "uint64", "{oops"])
    assert result.exit_code == 2


def test_encode_unsupported_type() -> None:
    result = CliRunner().invoke(main, ["encode", "uint8", "1"])
    assert result.exit_code == 1
    assert "UNSUPPORTED_TYPE" in result.output


def test_decode() -> None:
    result = CliRunner().invoke(main, ["decode", "(uint64,string)", "0x" + "0000000000000005" "000a" "00026869"])
    assert result.exit_code == 0
    assert json.loads(result.output) == {"field0": 5, "field1": {"hex": "6869"}}


def test_decode_return_value() -> None:
    result = CliRunner().invoke(main, ["decode", "bool", "151f7c7501", "--return-value"])
    assert result.exit_code == 0
    assert json.loads(result.output) is True


def test_decode_errors() -> None:
    runner = CliRunner()
    result = runner.invoke(main, ["decode", "bool", "0001", "--return-value"])
    assert result.exit_code == 1
    assert "INVALID_MARKER" in result.output

    result = runner.invoke(main, ["decode", "bool", "zz"])
    assert result.exit_code == 2


def test_selector() -> None:
    result = CliRunner().invoke(main, ["selector", "add(uint64,uint64)uint128"])
    assert result.exit_code == 0
    assert result.output.strip() == "8aa3b61f"


def test_signature(tmp_path, calculator_json) -> None:
    path = tmp_path / "calculator.json"
    path.write_text(json.dumps(calculator_json))
    runner = CliRunner()

    result = runner.invoke(main, ["signature", str(path), "hello"])
    assert result.exit_code == 0
    assert result.output.strip() == "hello(string)string 02bece11"

    result = runner.invoke(main, ["signature", str(path), "add"])
    assert result.exit_code == 1
    assert "INVALID_VALUE" in result.output
