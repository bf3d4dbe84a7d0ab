#!/usr/bin/env python3
"""Demonstration of replayable and replay-resistant signatures.

This script shows how to:
1. Sign the same number under each digest scheme
2. Replay a weak-scheme signature as often as you like
3. Watch the replay-resistant scheme accept a signature exactly once

Usage:
    python examples/replay_demo.py
"""

from eth_keys import keys

from sigverify import (
    DigestScheme,
    Message,
    NonceMismatchError,
    ReplayResistantMessage,
    SignatureTriple,
    SignatureVerifier,
)
from sigverify.core.log import configure_logging
from sigverify.db.time import unix_now


def sign(private_key: keys.PrivateKey, digest: bytes) -> SignatureTriple:
    signature = private_key.sign_msg_hash(digest)
    return SignatureTriple(v=signature.v + 27, r=signature.r, s=signature.s)


def demonstrate_replay() -> None:
    """Walk through every scheme with a single signer."""
    configure_logging()
    print("🔐 Signature Replay Demonstration")
    print("=" * 50)

    verifier = SignatureVerifier(
        "SignatureVerifier", "1", 31337, "0x5FbDB2315678afecb367f032d93F642f64180aa3"
    )
    private_key = keys.PrivateKey(b"\x42" * 32)
    signer = private_key.public_key.to_checksum_address()

    print(f"Signer: {signer}")
    print(f"Domain separator: 0x{verifier.domain_separator.hex()}")
    print()

    weak = [
        (DigestScheme.SIMPLE, 26),
        (DigestScheme.EIP191, 26),
        (DigestScheme.EIP712, Message(number=26)),
    ]
    for scheme, message in weak:
        triple = sign(private_key, verifier.digest(scheme, message))
        results = [verifier.verify(scheme, message, triple, signer) for _ in range(3)]
        print(f"{scheme.value:>24}: three calls -> {results}")

    message = ReplayResistantMessage(
        number=26,
        deadline=unix_now() + 100,
        nonce=verifier.latest_nonce(signer) + 1,
    )
    triple = sign(private_key, verifier.hash_replay_resistant(message))
    scheme = DigestScheme.EIP712_REPLAY_RESISTANT
    print(f"{scheme.value:>24}: first call -> {verifier.verify(scheme, message, triple, signer)}")
    try:
        verifier.verify(scheme, message, triple, signer)
    except NonceMismatchError as err:
        print(f"{scheme.value:>24}: second call -> {err}")


if __name__ == "__main__":
    demonstrate_replay()
