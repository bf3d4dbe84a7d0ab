# src/sigverify/schemas/__init__.py
"""
Pydantic schemas for signed payloads.

These schemas validate message fields and signature components before hashing.
"""

from .message import Message, ReplayResistantMessage, SignatureTriple, Uint256

__all__ = [
    "Message",
    "ReplayResistantMessage",
    "SignatureTriple",
    "Uint256",
]
