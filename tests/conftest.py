# tests/conftest.py
from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

import pytest
from eth_keys import keys
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from sigverify.db import create_tables, drop_tables
from sigverify.schemas import SignatureTriple
from sigverify.services import SignatureVerifier, SqlNonceLedger

TEST_DB_URL = "sqlite://"
DOMAIN_NAME = "SignatureVerifier"
DOMAIN_VERSION = "1"
CHAIN_ID = 31337
VERIFYING_CONTRACT = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
NOW = 1_700_000_000


class FixedClock:
    """Clock returning a settable timestamp."""

    def __init__(self, now: int = NOW) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


def _generate_identity(seed: int) -> dict[str, Any]:
    private_key = keys.PrivateKey(seed.to_bytes(32, "big"))
    return {
        "private_key": private_key,
        "address": private_key.public_key.to_checksum_address(),
    }


def sign_digest(private_key: keys.PrivateKey, digest: bytes) -> SignatureTriple:
    """Sign a 32-byte digest and return the triple in the 27/28 convention."""
    signature = private_key.sign_msg_hash(digest)
    return SignatureTriple(v=signature.v + 27, r=signature.r, s=signature.s)


@pytest.fixture()
def signer() -> dict[str, Any]:
    """Return identity data for the primary signer."""
    return _generate_identity(0xA11CE)


@pytest.fixture()
def other_signer() -> dict[str, Any]:
    """Return identity data for a second, unrelated signer."""
    return _generate_identity(0xB0B)


@pytest.fixture()
def sign() -> Callable[[dict[str, Any], bytes], SignatureTriple]:
    """Return a helper that signs a digest as the given identity."""

    def _sign(identity: dict[str, Any], digest: bytes) -> SignatureTriple:
        return sign_digest(identity["private_key"], digest)

    return _sign


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture()
def verifier(clock: FixedClock) -> SignatureVerifier:
    """Verifier over the test domain with an in-memory ledger and fixed clock."""
    return SignatureVerifier(
        DOMAIN_NAME,
        DOMAIN_VERSION,
        CHAIN_ID,
        VERIFYING_CONTRACT,
        clock=clock,
    )


@pytest.fixture()
def engine() -> Iterator[Engine]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(engine)
    try:
        yield engine
    finally:
        drop_tables(engine)
        engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def sql_ledger(session_factory: sessionmaker[Session]) -> SqlNonceLedger:
    return SqlNonceLedger(session_factory)
