"""Verification failures surfaced by the replay-resistant path and nonce ledgers."""

from __future__ import annotations


class SignatureVerificationError(RuntimeError):
    """Base exception for rejected signature material.

    Raised by the replay-resistant verifier and, for out-of-sequence nonces,
    by the nonce ledgers. The weak schemes report a plain boolean instead.
    """


class InvalidSignatureError(SignatureVerificationError):
    """Raised when recovery yields no identity or the wrong identity.

    Covers out-of-range components (including a high ``s`` value), an
    unrecoverable point, and a recovered signer that differs from the claimed
    one.
    """

    def __init__(self, reason: str, *, recovered: str | None = None) -> None:
        super().__init__(f"Invalid signature: {reason}")
        self.reason = reason
        self.recovered = recovered


class DeadlineExpiredError(SignatureVerificationError):
    """Raised when a message's deadline is strictly before the current time."""

    def __init__(self, deadline: int, now: int) -> None:
        super().__init__(f"Deadline {deadline} expired (now={now})")
        self.deadline = deadline
        self.now = now


class NonceMismatchError(SignatureVerificationError):
    """Raised when a nonce is not exactly one past the signer's latest nonce.

    This covers both an already consumed nonce and a skipped one.
    """

    def __init__(self, signer: str, expected: int, got: int) -> None:
        super().__init__(f"Nonce mismatch for {signer}: expected {expected}, got {got}")
        self.signer = signer
        self.expected = expected
        self.got = got
