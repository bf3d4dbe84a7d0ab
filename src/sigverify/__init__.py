"""Domain-separated ECDSA signature verification with replay resistance."""

from sigverify.core.errors import (
    DeadlineExpiredError,
    InvalidSignatureError,
    NonceMismatchError,
    SignatureVerificationError,
)
from sigverify.schemas import Message, ReplayResistantMessage, SignatureTriple
from sigverify.services import DigestScheme, SignatureVerifier, get_verifier

__all__ = [
    "DeadlineExpiredError",
    "DigestScheme",
    "InvalidSignatureError",
    "Message",
    "NonceMismatchError",
    "ReplayResistantMessage",
    "SignatureTriple",
    "SignatureVerificationError",
    "SignatureVerifier",
    "get_verifier",
]
