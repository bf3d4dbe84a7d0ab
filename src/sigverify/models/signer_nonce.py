# src/sigverify/models/signer_nonce.py
"""Persistent per-signer nonce counter."""


from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from sigverify.db.session import Base

# A uint256 has at most 78 decimal digits.
UINT256_DECIMAL_DIGITS = 78


class SignerNonce(Base):
    """Latest consumed nonce for a signer address.

    The counter is stored as a decimal string so a full uint256 survives
    backends without 256-bit integer columns. A missing row means zero.
    """

    __tablename__ = "signer_nonce"

    signer: Mapped[str] = mapped_column(String(42), primary_key=True)
    latest_nonce: Mapped[str] = mapped_column(
        String(UINT256_DECIMAL_DIGITS), nullable=False, default="0"
    )
