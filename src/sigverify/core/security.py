"""Signer recovery built on secp256k1 ECDSA primitives."""
from __future__ import annotations

import logging
from typing import Final

from eth_keys import keys
from eth_keys.exceptions import BadSignature
from eth_utils import ValidationError, to_canonical_address, to_checksum_address

from sigverify.core.errors import InvalidSignatureError

logger = logging.getLogger(__name__)

SECP256K1_N: Final[int] = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
SECP256K1_HALF_N: Final[int] = SECP256K1_N // 2
_V_OFFSET: Final[int] = 27
_DIGEST_BYTES: Final[int] = 32


def _check_components(v: int, r: int, s: int, *, enforce_low_s: bool) -> None:
    if v not in (_V_OFFSET, _V_OFFSET + 1):
        raise InvalidSignatureError(f"recovery id must be 27 or 28, got {v}")
    if not 0 < r < SECP256K1_N:
        raise InvalidSignatureError("r is outside the curve order")
    if not 0 < s < SECP256K1_N:
        raise InvalidSignatureError("s is outside the curve order")
    if enforce_low_s and s > SECP256K1_HALF_N:
        raise InvalidSignatureError("s is in the upper half of the curve order")


def _recover(digest: bytes, v: int, r: int, s: int) -> str:
    if len(digest) != _DIGEST_BYTES:
        raise ValueError(f"Digests must be {_DIGEST_BYTES} bytes, got {len(digest)}")
    try:
        signature = keys.Signature(vrs=(v - _V_OFFSET, r, s))
        public_key = signature.recover_public_key_from_msg_hash(digest)
    except (BadSignature, ValidationError) as err:
        raise InvalidSignatureError(f"recovery failed: {err}") from err
    return public_key.to_checksum_address()


def recover_signer(digest: bytes, v: int, r: int, s: int) -> str:
    """Recover the address that produced a signature, rejecting malleable forms.

    Args:
        digest: 32-byte message digest that was signed.
        v: Recovery id in the 27/28 convention.
        r: First signature scalar.
        s: Second signature scalar; must lie in the lower half of the curve order.

    Returns:
        The EIP-55 checksum address of the signer.

    Raises:
        InvalidSignatureError: If any component is out of range or recovery fails.
    """
    _check_components(v, r, s, enforce_low_s=True)
    return _recover(digest, v, r, s)


def try_recover_signer(digest: bytes, v: int, r: int, s: int) -> str | None:
    """Recover a signer the way a bare ``ecrecover`` does.

    High ``s`` values are accepted. Any malformed triple yields ``None``
    instead of an error.
    """
    try:
        _check_components(v, r, s, enforce_low_s=False)
        return _recover(digest, v, r, s)
    except InvalidSignatureError as err:
        logger.debug("Lenient recovery returned no signer: %s", err.reason)
        return None


def normalize_address(address: str | bytes) -> str:
    """Return the checksum form of an address, raising ``ValueError`` if malformed."""
    try:
        return to_checksum_address(address)
    except (TypeError, ValueError) as err:
        raise ValueError(f"Invalid address: {address!r}") from err


def canonical_address(address: str | bytes) -> bytes:
    """Return the 20-byte form of an address, raising ``ValueError`` if malformed."""
    try:
        return to_canonical_address(address)
    except (TypeError, ValueError) as err:
        raise ValueError(f"Invalid address: {address!r}") from err


def same_address(left: str | None, right: str | bytes) -> bool:
    """Return True if two addresses are the same identity, ignoring case."""
    expected = canonical_address(right)
    return left is not None and canonical_address(left) == expected
