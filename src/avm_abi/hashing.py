"""Hash helpers (SHA-512/256 for selectors and address checksums)."""

from __future__ import annotations

from Cryptodome.Hash import SHA512


def sha512_256(data: bytes) -> bytes:
    return SHA512.new(data, truncate="256").digest()
