"""Consume fixtures and re-check them against the codec."""

from __future__ import annotations

import json
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT / "src"))

from avm_abi.vectors import run_vector  # noqa: E402


def _check_vectors(path: Path) -> list[str]:
    failures: list[str] = []
    data = json.loads(path.read_text())
    for vec in data.get("test_vectors", []):
        if run_vector(vec) != vec["expected"]:
            failures.append(f"{path.name}: {vec['name']}: result_mismatch")
    return failures


def main() -> None:
    fixtures = ROOT / "fixtures"

    failures: list[str] = []
    for path in sorted(fixtures.rglob("*.json")):
        failures.extend(_check_vectors(path))

    if failures:
        for f in failures:
            print("FAIL", f)
        raise SystemExit(1)

    print("All fixtures passed")


if __name__ == "__main__":
    main()
