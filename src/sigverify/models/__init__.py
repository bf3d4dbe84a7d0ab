# src/sigverify/models/__init__.py
"""SQLAlchemy models for the nonce ledger."""

from .signer_nonce import SignerNonce

__all__ = ["SignerNonce"]
