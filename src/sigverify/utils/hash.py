# src/sigverify/utils/hash.py
"""Fixed-width encodings shared by the digest schemes."""

from __future__ import annotations

from typing import Final

WORD_BYTES: Final[int] = 32
UINT256_MAX: Final[int] = 2**256 - 1


def to_word(value: int) -> bytes:
    """Encode an unsigned integer as a 32-byte big-endian word.

    Raises:
        ValueError: If the value does not fit in 256 bits.
    """
    if not 0 <= value <= UINT256_MAX:
        raise ValueError(f"Value {value} is outside the uint256 range")
    return value.to_bytes(WORD_BYTES, "big")
