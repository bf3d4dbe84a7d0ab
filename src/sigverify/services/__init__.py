# src/sigverify/services/__init__.py
"""Hashing, nonce and verification services."""

from .domain import Domain, compute_domain_separator
from .hashing import DigestScheme
from .nonces import InMemoryNonceLedger, NonceLedger, SqlNonceLedger
from .verifier import SignatureVerifier, get_verifier

__all__ = [
    "DigestScheme",
    "Domain",
    "compute_domain_separator",
    "InMemoryNonceLedger",
    "NonceLedger",
    "SqlNonceLedger",
    "SignatureVerifier",
    "get_verifier",
]
