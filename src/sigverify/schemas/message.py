# src/sigverify/schemas/message.py
"""Pydantic schemas for signed messages and signature triples."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from sigverify.utils.hash import UINT256_MAX, WORD_BYTES

Uint256 = Annotated[int, Field(ge=0, le=UINT256_MAX)]

_SIGNATURE_BYTES = 2 * WORD_BYTES + 1


class Message(BaseModel):
    """Structured EIP-712 record ``Message(uint256 number)``."""

    model_config = ConfigDict(frozen=True)

    number: Uint256


class ReplayResistantMessage(BaseModel):
    """Structured record bound to a deadline and a per-signer nonce."""

    model_config = ConfigDict(frozen=True)

    number: Uint256
    deadline: Uint256 = Field(..., description="Unix timestamp after which the signature is void")
    nonce: Uint256 = Field(..., description="Must equal the signer's latest nonce plus one")


class SignatureTriple(BaseModel):
    """ECDSA signature split into its recovery id and scalar components.

    ``v`` is kept in the 27/28 convention. Range checks on ``v``, ``r`` and
    ``s`` belong to recovery, so malformed triples can still be represented and
    rejected there.
    """

    model_config = ConfigDict(frozen=True)

    v: Annotated[int, Field(ge=0, le=255)]
    r: Uint256
    s: Uint256

    @classmethod
    def from_bytes(cls, raw: bytes) -> SignatureTriple:
        """Split a 65-byte ``r || s || v`` signature.

        Raises:
            ValueError: If the blob is not exactly 65 bytes.
        """
        if len(raw) != _SIGNATURE_BYTES:
            raise ValueError(f"Signatures must be {_SIGNATURE_BYTES} bytes, got {len(raw)}")
        v = raw[64]
        if v < 27:
            v += 27
        return cls(
            v=v,
            r=int.from_bytes(raw[:WORD_BYTES], "big"),
            s=int.from_bytes(raw[WORD_BYTES:2 * WORD_BYTES], "big"),
        )

    @classmethod
    def from_hex(cls, signature_hex: str) -> SignatureTriple:
        """Parse a hex-encoded 65-byte signature, with or without ``0x``."""
        cleaned = signature_hex.strip().removeprefix("0x")
        try:
            raw = bytes.fromhex(cleaned)
        except ValueError as err:
            raise ValueError(f"Invalid hex encoding: {err}") from err
        return cls.from_bytes(raw)

    def to_bytes(self) -> bytes:
        """Return the 65-byte ``r || s || v`` encoding."""
        return (
            self.r.to_bytes(WORD_BYTES, "big")
            + self.s.to_bytes(WORD_BYTES, "big")
            + bytes([self.v])
        )

    def to_hex(self) -> str:
        """Return the ``0x``-prefixed hex encoding."""
        return "0x" + self.to_bytes().hex()
