"""Verifier settings and configuration.

This module defines the configuration options for the signature verifier.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Verifier settings loaded from environment variables.

    The EIP-712 domain fields are folded into the domain separator once, when a
    verifier is constructed. Changing them afterwards has no effect on an
    existing verifier instance.
    """

    # EIP-712 domain
    domain_name: str = Field(default="SignatureVerifier", alias="DOMAIN_NAME")
    domain_version: str = Field(default="1", alias="DOMAIN_VERSION")
    chain_id: int = Field(default=1, ge=0, alias="CHAIN_ID")
    verifying_contract: str = Field(
        default="0x5FbDB2315678afecb367f032d93F642f64180aa3",
        alias="VERIFYING_CONTRACT",
    )

    # Nonce ledger persistence
    database_url: str = Field(default="sqlite:///./sigverify.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def domain(self) -> tuple[str, str, int, str]:
        """Return the EIP-712 domain fields in declaration order."""
        return (
            self.domain_name,
            self.domain_version,
            self.chain_id,
            self.verifying_contract,
        )


settings = Settings()
