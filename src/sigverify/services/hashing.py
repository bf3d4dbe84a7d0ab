"""Digest schemes for the four signing disciplines.

Each scheme maps a message to the 32-byte digest that gets signed:

- ``SIMPLE``: the number itself as a 32-byte word. No hash, no domain.
- ``EIP191``: version ``0x00`` envelope bound to an intended validator address.
- ``EIP712``: version ``0x01`` envelope over ``Message(uint256 number)``.
- ``EIP712_REPLAY_RESISTANT``: version ``0x01`` envelope over
  ``ReplayResistantMessage(uint256 number,uint256 deadline,uint256 nonce)``.

The functions here are pure; the domain separator is passed in by the caller.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Final

from eth_account._utils.encode_typed_data.encoding_and_hashing import (
    encode_type,
    hash_struct,
    hash_type,
)
from eth_account.messages import SignableMessage, _hash_eip191_message, encode_intended_validator
from hexbytes import HexBytes

from sigverify.core.security import canonical_address
from sigverify.schemas.message import Message, ReplayResistantMessage
from sigverify.utils.hash import to_word

logger = logging.getLogger(__name__)

EIP191_VERSION_STRUCTURED: Final[bytes] = b"\x01"

MESSAGE_TYPES: Final[dict[str, list[dict[str, str]]]] = {
    "Message": [
        {"name": "number", "type": "uint256"},
    ]
}
REPLAY_RESISTANT_MESSAGE_TYPES: Final[dict[str, list[dict[str, str]]]] = {
    "ReplayResistantMessage": [
        {"name": "number", "type": "uint256"},
        {"name": "deadline", "type": "uint256"},
        {"name": "nonce", "type": "uint256"},
    ]
}

MESSAGE_TYPE: Final[str] = encode_type("Message", MESSAGE_TYPES)
REPLAY_RESISTANT_MESSAGE_TYPE: Final[str] = encode_type(
    "ReplayResistantMessage", REPLAY_RESISTANT_MESSAGE_TYPES
)
MESSAGE_TYPEHASH: Final[bytes] = hash_type("Message", MESSAGE_TYPES)
REPLAY_RESISTANT_MESSAGE_TYPEHASH: Final[bytes] = hash_type(
    "ReplayResistantMessage", REPLAY_RESISTANT_MESSAGE_TYPES
)


class DigestScheme(Enum):
    """Hashing discipline used to turn a message into a signable digest."""

    SIMPLE = "simple"
    EIP191 = "eip191"
    EIP712 = "eip712"
    EIP712_REPLAY_RESISTANT = "eip712-replay-resistant"


def hash_simple(message: int) -> bytes:
    """Reinterpret the number as a 32-byte word without hashing it."""
    return to_word(message)


def hash_eip191(message: int, validator: str) -> bytes:
    """Return ``keccak(0x19 || 0x00 || validator || message)``."""
    signable = encode_intended_validator(canonical_address(validator), to_word(message))
    return bytes(_hash_eip191_message(signable))


def struct_hash_message(message: Message) -> bytes:
    """Hash a ``Message`` record under its type descriptor."""
    return hash_struct("Message", MESSAGE_TYPES, message.model_dump())


def struct_hash_replay_resistant(message: ReplayResistantMessage) -> bytes:
    """Hash a ``ReplayResistantMessage`` record under its type descriptor."""
    return hash_struct(
        "ReplayResistantMessage", REPLAY_RESISTANT_MESSAGE_TYPES, message.model_dump()
    )


def typed_data_digest(domain_separator: bytes, struct_hash: bytes) -> bytes:
    """Return ``keccak(0x19 || 0x01 || domainSeparator || structHash)``."""
    signable = SignableMessage(
        HexBytes(EIP191_VERSION_STRUCTURED), HexBytes(domain_separator), HexBytes(struct_hash)
    )
    return bytes(_hash_eip191_message(signable))


def hash_eip712(message: Message, domain_separator: bytes) -> bytes:
    """Digest a ``Message`` record under the given domain."""
    digest = typed_data_digest(domain_separator, struct_hash_message(message))
    logger.debug("EIP-712 digest for number=%d: 0x%s", message.number, digest.hex())
    return digest


def hash_replay_resistant(message: ReplayResistantMessage, domain_separator: bytes) -> bytes:
    """Digest a ``ReplayResistantMessage`` record under the given domain."""
    digest = typed_data_digest(domain_separator, struct_hash_replay_resistant(message))
    logger.debug(
        "Replay-resistant digest for number=%d nonce=%d deadline=%d: 0x%s",
        message.number,
        message.nonce,
        message.deadline,
        digest.hex(),
    )
    return digest
