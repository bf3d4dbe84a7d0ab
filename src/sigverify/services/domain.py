"""EIP-712 domain separator computation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Final

from eth_account._utils.encode_typed_data.encoding_and_hashing import hash_domain, hash_type

from sigverify.core.security import normalize_address

EIP712_DOMAIN_TYPES: Final[dict[str, list[dict[str, str]]]] = {
    "EIP712Domain": [
        {"name": "name", "type": "string"},
        {"name": "version", "type": "string"},
        {"name": "chainId", "type": "uint256"},
        {"name": "verifyingContract", "type": "address"},
    ]
}
EIP712_DOMAIN_TYPEHASH: Final[bytes] = hash_type("EIP712Domain", EIP712_DOMAIN_TYPES)


def domain_data(
    name: str,
    version: str,
    chain_id: int,
    verifying_contract: str,
) -> dict[str, Any]:
    """Return the domain fields keyed the way EIP-712 typed data expects."""
    return {
        "name": name,
        "version": version,
        "chainId": chain_id,
        "verifyingContract": normalize_address(verifying_contract),
    }


def compute_domain_separator(
    name: str,
    version: str,
    chain_id: int,
    verifying_contract: str,
) -> bytes:
    """Hash the four domain fields into a 32-byte separator.

    Raises:
        ValueError: If ``verifying_contract`` is not a valid address.
    """
    return hash_domain(domain_data(name, version, chain_id, verifying_contract))


@dataclass(frozen=True)
class Domain:
    """Immutable domain context with its separator fixed at construction."""

    name: str
    version: str
    chain_id: int
    verifying_contract: str
    separator: bytes = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "verifying_contract", normalize_address(self.verifying_contract))
        object.__setattr__(
            self,
            "separator",
            compute_domain_separator(
                self.name, self.version, self.chain_id, self.verifying_contract
            ),
        )
