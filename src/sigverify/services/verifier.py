"""Signature verification across the four digest schemes.

The simple, EIP-191 and EIP-712 verifiers are stateless predicates: the same
(message, signature) pair verifies any number of times. Only the
replay-resistant verifier touches the nonce ledger, and only after every check
has passed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from sigverify.core.errors import (
    DeadlineExpiredError,
    InvalidSignatureError,
    NonceMismatchError,
)
from sigverify.core.security import (
    normalize_address,
    recover_signer,
    same_address,
    try_recover_signer,
)
from sigverify.core.settings import Settings, settings
from sigverify.db.time import Clock, unix_now
from sigverify.schemas.message import Message, ReplayResistantMessage, SignatureTriple
from sigverify.services.domain import Domain
from sigverify.services.hashing import (
    MESSAGE_TYPEHASH,
    REPLAY_RESISTANT_MESSAGE_TYPEHASH,
    DigestScheme,
    hash_eip191,
    hash_eip712,
    hash_replay_resistant,
    hash_simple,
)
from sigverify.services.nonces import InMemoryNonceLedger, NonceLedger

logger = logging.getLogger(__name__)


class SignatureVerifier:
    """Verifies that a message was signed by a claimed address.

    The domain separator is computed once from the constructor arguments and
    never changes. The verifier's own address is ``verifying_contract``; it is
    also the intended validator for EIP-191 digests.
    """

    def __init__(
        self,
        name: str,
        version: str,
        chain_id: int,
        verifying_contract: str,
        *,
        nonces: NonceLedger | None = None,
        clock: Clock = unix_now,
    ) -> None:
        self._domain = Domain(name, version, chain_id, verifying_contract)
        self._nonces: NonceLedger = nonces if nonces is not None else InMemoryNonceLedger()
        self._clock = clock
        self._digesters: dict[DigestScheme, Callable[[Any], bytes]] = {
            DigestScheme.SIMPLE: self.hash_simple,
            DigestScheme.EIP191: self.hash_191,
            DigestScheme.EIP712: self.hash_712,
            DigestScheme.EIP712_REPLAY_RESISTANT: self.hash_replay_resistant,
        }
        self._verifiers: dict[DigestScheme, Callable[..., bool]] = {
            DigestScheme.SIMPLE: self.verify_simple,
            DigestScheme.EIP191: self.verify_191,
            DigestScheme.EIP712: self.verify_712,
            DigestScheme.EIP712_REPLAY_RESISTANT: self.verify_replay_resistant,
        }

    @classmethod
    def from_settings(
        cls,
        config: Settings | None = None,
        *,
        nonces: NonceLedger | None = None,
        clock: Clock = unix_now,
    ) -> SignatureVerifier:
        """Build a verifier from the configured EIP-712 domain."""
        return cls(*(config or settings).domain, nonces=nonces, clock=clock)

    # --- Read accessors -----------------------------------------------------------
    @property
    def domain(self) -> Domain:
        return self._domain

    @property
    def address(self) -> str:
        """Checksum address identifying this verifier."""
        return self._domain.verifying_contract

    @property
    def domain_separator(self) -> bytes:
        return self._domain.separator

    @property
    def message_typehash(self) -> bytes:
        return MESSAGE_TYPEHASH

    @property
    def replay_resistant_message_typehash(self) -> bytes:
        return REPLAY_RESISTANT_MESSAGE_TYPEHASH

    def latest_nonce(self, signer: str) -> int:
        """Return the last nonce consumed for ``signer`` (0 if unseen)."""
        return self._nonces.latest_nonce(signer)

    # --- Digests ------------------------------------------------------------------
    def hash_simple(self, message: int) -> bytes:
        return hash_simple(message)

    def hash_191(self, message: int) -> bytes:
        return hash_eip191(message, self.address)

    def hash_712(self, message: Message) -> bytes:
        return hash_eip712(message, self.domain_separator)

    def hash_replay_resistant(self, message: ReplayResistantMessage) -> bytes:
        return hash_replay_resistant(message, self.domain_separator)

    def digest(self, scheme: DigestScheme, message: Any) -> bytes:
        """Compute the digest of ``message`` under ``scheme``."""
        return self._digesters[scheme](message)

    # --- Recovery -----------------------------------------------------------------
    def get_signer_simple(self, message: int, v: int, r: int, s: int) -> str | None:
        return try_recover_signer(self.hash_simple(message), v, r, s)

    def get_signer_191(self, message: int, v: int, r: int, s: int) -> str | None:
        return try_recover_signer(self.hash_191(message), v, r, s)

    def get_signer_712(self, message: Message, v: int, r: int, s: int) -> str | None:
        return try_recover_signer(self.hash_712(message), v, r, s)

    def get_signer_replay_resistant(
        self, message: ReplayResistantMessage, v: int, r: int, s: int
    ) -> str:
        """Recover the signer of a replay-resistant message.

        Raises:
            InvalidSignatureError: If the triple is malformed or malleable.
        """
        return recover_signer(self.hash_replay_resistant(message), v, r, s)

    # --- Verification -------------------------------------------------------------
    def verify_simple(self, message: int, v: int, r: int, s: int, signer: str) -> bool:
        """Return True if ``signer`` signed the raw 32-byte word of ``message``."""
        return same_address(self.get_signer_simple(message, v, r, s), signer)

    def verify_191(self, message: int, v: int, r: int, s: int, signer: str) -> bool:
        """Return True if ``signer`` signed the EIP-191 digest bound to this verifier."""
        return same_address(self.get_signer_191(message, v, r, s), signer)

    def verify_712(self, message: Message, v: int, r: int, s: int, signer: str) -> bool:
        """Return True if ``signer`` signed the EIP-712 digest of ``message``."""
        return same_address(self.get_signer_712(message, v, r, s), signer)

    def verify_replay_resistant(
        self,
        message: ReplayResistantMessage,
        v: int,
        r: int,
        s: int,
        signer: str,
    ) -> bool:
        """Verify a single-use signature and consume its nonce.

        Checks run in order: deadline, nonce, recovery, signer match. The nonce
        is consumed only after all of them pass, so a rejected call leaves the
        ledger untouched and a repeated call fails on the nonce check.

        Returns:
            True when the signature is accepted.

        Raises:
            DeadlineExpiredError: If ``message.deadline`` is before the current time.
            NonceMismatchError: If ``message.nonce`` is not the signer's next nonce.
            InvalidSignatureError: If recovery fails or yields another address.
        """
        claimed = normalize_address(signer)
        try:
            now = self._clock()
            if message.deadline < now:
                raise DeadlineExpiredError(message.deadline, now)

            expected = self._nonces.latest_nonce(claimed) + 1
            if message.nonce != expected:
                raise NonceMismatchError(claimed, expected, message.nonce)

            recovered = self.get_signer_replay_resistant(message, v, r, s)
            if not same_address(recovered, claimed):
                raise InvalidSignatureError("signer mismatch", recovered=recovered)
        except (DeadlineExpiredError, NonceMismatchError, InvalidSignatureError) as err:
            logger.warning("Rejected replay-resistant signature for %s: %s", claimed, err)
            raise

        self._nonces.consume(claimed, message.nonce)
        return True

    def verify(
        self,
        scheme: DigestScheme,
        message: Any,
        signature: SignatureTriple,
        signer: str,
    ) -> bool:
        """Dispatch to the verifier for ``scheme``."""
        return self._verifiers[scheme](message, signature.v, signature.r, signature.s, signer)


# Shared by every verifier handed out by get_verifier(); never reset.
_NONCE_LEDGER: NonceLedger = InMemoryNonceLedger()


def get_verifier() -> SignatureVerifier:
    """Return a verifier for the configured domain.

    All returned instances share the process-wide nonce ledger, so a signature
    consumed through one of them is rejected by the next.
    """
    return SignatureVerifier.from_settings(nonces=_NONCE_LEDGER)
