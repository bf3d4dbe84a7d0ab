# mypy: ignore-errors
"""Tests for the digest schemes and domain separator."""

from __future__ import annotations

import pytest
from eth_abi import encode
from eth_account.messages import _hash_eip191_message, encode_typed_data
from eth_utils import keccak, to_checksum_address

from sigverify.schemas import Message, ReplayResistantMessage
from sigverify.services.domain import (
    EIP712_DOMAIN_TYPEHASH,
    Domain,
    compute_domain_separator,
)
from sigverify.services.hashing import (
    MESSAGE_TYPE,
    MESSAGE_TYPEHASH,
    REPLAY_RESISTANT_MESSAGE_TYPE,
    REPLAY_RESISTANT_MESSAGE_TYPEHASH,
    REPLAY_RESISTANT_MESSAGE_TYPES,
    DigestScheme,
    hash_eip191,
    hash_eip712,
    hash_replay_resistant,
    hash_simple,
    struct_hash_message,
)
from sigverify.utils.hash import to_word
from tests.conftest import CHAIN_ID, DOMAIN_NAME, DOMAIN_VERSION, VERIFYING_CONTRACT

DOMAIN_TYPEHASH_HEX = "8b73c3c69bb8fe3d512ecc4cf759cc79239f7b179b0ffacaa9a75d522b39400f"
OTHER_CONTRACT = "0xe7f1725E7734CE288F8367e1Bb143E90bb3F0512"
SAMPLE_VALUES = [0, 1, 26, 2**64, 2**255, 2**256 - 1]


def test_to_word_bounds() -> None:
    """Words are 32 bytes and reject values outside uint256."""
    assert to_word(26) == b"\x00" * 31 + b"\x1a"
    with pytest.raises(ValueError):
        to_word(-1)
    with pytest.raises(ValueError):
        to_word(2**256)


def test_typehash_constants() -> None:
    """Type descriptors hash the canonical struct signatures."""
    assert EIP712_DOMAIN_TYPEHASH.hex() == DOMAIN_TYPEHASH_HEX
    assert MESSAGE_TYPEHASH == keccak(text="Message(uint256 number)")
    assert REPLAY_RESISTANT_MESSAGE_TYPEHASH == keccak(
        text="ReplayResistantMessage(uint256 number,uint256 deadline,uint256 nonce)"
    )
    assert MESSAGE_TYPE == "Message(uint256 number)"
    assert REPLAY_RESISTANT_MESSAGE_TYPE == (
        "ReplayResistantMessage(uint256 number,uint256 deadline,uint256 nonce)"
    )
    assert MESSAGE_TYPEHASH != REPLAY_RESISTANT_MESSAGE_TYPEHASH


def test_hash_simple_is_raw_word() -> None:
    """The simple scheme applies no hash at all."""
    assert hash_simple(26) == to_word(26)


def test_hash_eip191_layout() -> None:
    """EIP-191 version 0x00 binds the digest to the validator address."""
    expected = keccak(
        b"\x19\x00" + bytes.fromhex(VERIFYING_CONTRACT[2:]) + to_word(26)
    )
    assert hash_eip191(26, VERIFYING_CONTRACT) == expected
    assert hash_eip191(26, VERIFYING_CONTRACT) != hash_eip191(26, OTHER_CONTRACT)


def test_hash_eip712_layout() -> None:
    """EIP-712 digests wrap the struct hash in the 0x1901 envelope."""
    separator = compute_domain_separator(DOMAIN_NAME, DOMAIN_VERSION, CHAIN_ID, VERIFYING_CONTRACT)
    struct_hash = keccak(encode(["bytes32", "uint256"], [MESSAGE_TYPEHASH, 26]))
    assert struct_hash_message(Message(number=26)) == struct_hash
    assert hash_eip712(Message(number=26), separator) == keccak(
        b"\x19\x01" + separator + struct_hash
    )


def test_domain_separator_layout() -> None:
    """The separator is the hash of the ABI-encoded domain fields."""
    expected = keccak(
        encode(
            ["bytes32", "bytes32", "bytes32", "uint256", "address"],
            [
                EIP712_DOMAIN_TYPEHASH,
                keccak(text=DOMAIN_NAME),
                keccak(text=DOMAIN_VERSION),
                CHAIN_ID,
                bytes.fromhex(VERIFYING_CONTRACT[2:]),
            ],
        )
    )
    domain = Domain(DOMAIN_NAME, DOMAIN_VERSION, CHAIN_ID, VERIFYING_CONTRACT.lower())
    assert domain.separator == expected
    assert domain.verifying_contract == to_checksum_address(VERIFYING_CONTRACT)


@pytest.mark.parametrize(
    "variant",
    [
        ("OtherName", DOMAIN_VERSION, CHAIN_ID, VERIFYING_CONTRACT),
        (DOMAIN_NAME, "2", CHAIN_ID, VERIFYING_CONTRACT),
        (DOMAIN_NAME, DOMAIN_VERSION, 1, VERIFYING_CONTRACT),
        (DOMAIN_NAME, DOMAIN_VERSION, CHAIN_ID, OTHER_CONTRACT),
    ],
)
def test_domain_separator_binds_every_field(variant) -> None:
    """Changing any domain field changes the separator."""
    base = compute_domain_separator(DOMAIN_NAME, DOMAIN_VERSION, CHAIN_ID, VERIFYING_CONTRACT)
    assert compute_domain_separator(*variant) != base


def test_domain_rejects_bad_contract() -> None:
    with pytest.raises(ValueError):
        Domain(DOMAIN_NAME, DOMAIN_VERSION, CHAIN_ID, "0xdead")


@pytest.mark.parametrize("value", SAMPLE_VALUES)
def test_cross_scheme_isolation(value: int) -> None:
    """The four schemes never produce the same digest for one number."""
    separator = compute_domain_separator(DOMAIN_NAME, DOMAIN_VERSION, CHAIN_ID, VERIFYING_CONTRACT)
    digests = {
        DigestScheme.SIMPLE: hash_simple(value),
        DigestScheme.EIP191: hash_eip191(value, VERIFYING_CONTRACT),
        DigestScheme.EIP712: hash_eip712(Message(number=value), separator),
        DigestScheme.EIP712_REPLAY_RESISTANT: hash_replay_resistant(
            ReplayResistantMessage(number=value, deadline=0, nonce=0), separator
        ),
    }
    assert len(set(digests.values())) == len(DigestScheme)


def test_replay_resistant_digest_binds_every_field() -> None:
    """Deadline and nonce are part of the hashed record."""
    separator = compute_domain_separator(DOMAIN_NAME, DOMAIN_VERSION, CHAIN_ID, VERIFYING_CONTRACT)
    base = ReplayResistantMessage(number=26, deadline=100, nonce=1)
    digest = hash_replay_resistant(base, separator)
    for changed in (
        base.model_copy(update={"number": 27}),
        base.model_copy(update={"deadline": 101}),
        base.model_copy(update={"nonce": 2}),
    ):
        assert hash_replay_resistant(changed, separator) != digest


def test_replay_resistant_digest_matches_typed_data_encoding() -> None:
    """The digest equals a full EIP-712 encoding of the same record."""
    separator = compute_domain_separator(DOMAIN_NAME, DOMAIN_VERSION, CHAIN_ID, VERIFYING_CONTRACT)
    message = ReplayResistantMessage(number=26, deadline=1_700_000_100, nonce=1)
    signable = encode_typed_data(
        {
            "name": DOMAIN_NAME,
            "version": DOMAIN_VERSION,
            "chainId": CHAIN_ID,
            "verifyingContract": to_checksum_address(VERIFYING_CONTRACT),
        },
        REPLAY_RESISTANT_MESSAGE_TYPES,
        {"number": 26, "deadline": 1_700_000_100, "nonce": 1},
    )
    assert bytes(signable.header) == separator
    assert hash_replay_resistant(message, separator) == bytes(_hash_eip191_message(signable))
