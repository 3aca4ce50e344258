#!/usr/bin/env python3
"""Convert JSON fixtures written by ``fill.py`` into YAML vector suites.

The conformance runner consumes either form; YAML suites are what gets
shipped to other codec implementations.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT / "tools"))

from yaml_dump import write_yaml  # noqa: E402


def convert(fixtures: Path, vectors: Path) -> int:
    count = 0
    for src in sorted(fixtures.rglob("*.json")):
        data = json.loads(src.read_text())
        if not data.get("test_vectors"):
            continue
        dest = vectors / src.relative_to(fixtures).with_suffix(".yaml")
        write_yaml(dest, data)
        count += len(data["test_vectors"])
        print(f"{src.relative_to(fixtures)} -> {dest.relative_to(vectors)}")
    return count


def main() -> None:
    parser = argparse.ArgumentParser(description="Convert fixtures to vectors")
    parser.add_argument("--fixtures", default=str(ROOT / "fixtures"))
    parser.add_argument("--vectors", default=str(ROOT / "vectors"))
    args = parser.parse_args()

    total = convert(Path(args.fixtures), Path(args.vectors))
    print(f"Wrote {total} vectors")


if __name__ == "__main__":
    main()
