"""Per-signer nonce ledgers backing replay resistance."""

from __future__ import annotations

import logging
from typing import Protocol

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from sigverify.core.errors import NonceMismatchError
from sigverify.core.security import normalize_address
from sigverify.db.session import SessionLocal
from sigverify.models import SignerNonce

logger = logging.getLogger(__name__)


class NonceLedger(Protocol):
    """Keyed counter store mapping a signer to its last consumed nonce."""

    def latest_nonce(self, signer: str) -> int: ...

    def consume(self, signer: str, nonce: int) -> None: ...


def _check_next(signer: str, latest: int, nonce: int) -> None:
    if nonce != latest + 1:
        raise NonceMismatchError(signer, latest + 1, nonce)


class InMemoryNonceLedger:
    """Process-local ledger; every signer implicitly starts at zero."""

    def __init__(self) -> None:
        self._latest: dict[str, int] = {}

    def latest_nonce(self, signer: str) -> int:
        """Return the last consumed nonce for ``signer``, or 0 if unseen."""
        return self._latest.get(normalize_address(signer), 0)

    def consume(self, signer: str, nonce: int) -> None:
        """Advance ``signer`` to ``nonce``, which must be exactly one past the latest.

        Raises:
            NonceMismatchError: If ``nonce`` is not the next nonce.
        """
        key = normalize_address(signer)
        _check_next(key, self._latest.get(key, 0), nonce)
        self._latest[key] = nonce
        logger.info("Consumed nonce %d for %s", nonce, key)


class SqlNonceLedger:
    """Ledger persisted in the ``signer_nonce`` table."""

    def __init__(self, session_factory: sessionmaker[Session] | None = None) -> None:
        self._session_factory = session_factory or SessionLocal

    def latest_nonce(self, signer: str) -> int:
        """Return the stored nonce for ``signer``, or 0 if no row exists."""
        key = normalize_address(signer)
        with self._session_factory() as session:
            record = session.get(SignerNonce, key)
            return int(record.latest_nonce) if record is not None else 0

    def consume(self, signer: str, nonce: int) -> None:
        """Persist ``nonce`` as the latest for ``signer`` in one transaction.

        Raises:
            NonceMismatchError: If ``nonce`` is not the next nonce. Nothing is written.
        """
        key = normalize_address(signer)
        try:
            with self._session_factory() as session, session.begin():
                record = session.get(SignerNonce, key)
                latest = int(record.latest_nonce) if record is not None else 0
                _check_next(key, latest, nonce)
                if record is None:
                    session.add(SignerNonce(signer=key, latest_nonce=str(nonce)))
                else:
                    record.latest_nonce = str(nonce)
        except IntegrityError as err:
            # Another writer created the row first and took this nonce.
            raise NonceMismatchError(key, nonce + 1, nonce) from err
        logger.info("Persisted nonce %d for %s", nonce, key)
