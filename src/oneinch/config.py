"""Application configuration using pydantic-settings.

Values come from ``ONEINCH_*`` environment variables or a local ``.env``
file. Settings are built once at process start and passed explicitly to
the client and the wallet signer.
"""

from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from oneinch.chains import chain_name, resolve_chain_id


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ONEINCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Chain / Wallet
    # ======================
    chain: str = Field(
        default="mainnet", description="Chain name or numeric chain ID"
    )
    rpc_url: Optional[str] = Field(
        default=None, description="JSON-RPC endpoint used to submit transactions"
    )
    private_key: Optional[SecretStr] = Field(
        default=None, description="Hex private key of the signing wallet"
    )

    # ======================
    # Aggregation API
    # ======================
    api_url: str = Field(
        default="https://api.1inch.exchange", description="API root URL"
    )
    api_key: Optional[SecretStr] = Field(
        default=None, description="Optional bearer token for the API"
    )
    timeout: float = Field(
        default=30.0, gt=0, description="Per-request timeout in seconds"
    )
    default_slippage: float = Field(
        default=0.5, ge=0, le=50, description="Default swap slippage (percent)"
    )

    # ======================
    # Environment
    # ======================
    debug: bool = Field(default=False, description="Enable debug logging")

    @property
    def chain_id(self) -> int:
        """Numeric chain ID for the configured chain."""
        return resolve_chain_id(self.chain)

    @property
    def has_wallet(self) -> bool:
        """Check if both an RPC endpoint and a private key are configured."""
        return bool(self.rpc_url and self.private_key and self.private_key.get_secret_value())

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "chain": chain_name(self.chain_id),
            "chain_id": self.chain_id,
            "api_url": self.api_url,
            "api_key": "***" if self.api_key else "(not set)",
            "timeout": self.timeout,
            "default_slippage": self.default_slippage,
            "rpc_url": self.rpc_url or "(not set)",
            "private_key": "***" if self.private_key else "(not set)",
            "wallet_configured": self.has_wallet,
            "debug": self.debug,
        }
