"""Application configuration using pydantic-settings.

Endpoints, relay protocol and signing key for the swap pipeline.
"""

from functools import lru_cache
from typing import Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Query parameters that carry credentials in relay / provider URLs
SECRET_QUERY_PARAMS = {"api-key", "api_key", "apikey", "token"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Environment
    # ======================
    debug: bool = Field(default=False, description="Enable debug logging")

    # ======================
    # Swap providers
    # ======================
    swap_endpoint: str = Field(
        default="https://metaagg.velvetdao.xyz/api/v1/route/solana/swap",
        description="Endpoint returning a swap transaction",
    )
    provider_kind: Optional[str] = Field(
        default=None,
        description="Force a provider (aggregator, quote_api, direct); inferred from endpoint if unset",
    )
    provider_api_key: str = Field(default="", description="Bearer token sent to swap providers")
    jupiter_swap_url: str = Field(
        default="https://quote-api.jup.ag/v6/swap",
        description="Swap-construction URL for the two-step quote protocol",
    )
    default_slippage_bps: int = Field(
        default=50, ge=0, le=10_000, description="Default slippage tolerance (50 bps = 0.5%)"
    )

    # ======================
    # Relay
    # ======================
    relay_endpoint: str = Field(
        default="https://de1.0slot.trade/", description="Low-latency relay endpoint"
    )
    relay_api_key: str = Field(default="", description="Relay API key (sent as api-key query param)")
    relay_protocol: str = Field(
        default="json_rpc", description="Relay submission protocol (json_rpc or broadcast)"
    )
    sol_rpc_url: str = Field(
        default="https://api.mainnet-beta.solana.com", description="Solana RPC URL"
    )

    # ======================
    # HTTP / deadlines
    # ======================
    http_timeout: float = Field(default=30.0, gt=0, description="Per-request HTTP timeout in seconds")
    request_deadline: Optional[float] = Field(
        default=None, gt=0, description="Overall deadline for one swap attempt (None = unbounded)"
    )
    reject_duplicate_swaps: bool = Field(
        default=False, description="Reject identical swaps while one is in flight"
    )

    # ======================
    # Wallet
    # ======================
    wallet_private_key: Optional[str] = Field(
        default=None, description="Base58-encoded Solana keypair used by the CLI signer"
    )

    @property
    def has_wallet(self) -> bool:
        """Check if a signing key is configured."""
        return bool(self.wallet_private_key)

    @property
    def relay_url(self) -> str:
        """Relay endpoint with the API key attached."""
        if not self.relay_api_key:
            return self.relay_endpoint
        parts = urlsplit(self.relay_endpoint)
        query = parse_qsl(parts.query, keep_blank_values=True)
        query.append(("api-key", self.relay_api_key))
        return urlunsplit(parts._replace(query=urlencode(query)))

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "debug": self.debug,
            "swap": {
                "endpoint": redact_url(self.swap_endpoint),
                "provider_kind": self.provider_kind or "(inferred)",
                "api_key": "***" if self.provider_api_key else "(not set)",
                "jupiter_swap_url": self.jupiter_swap_url,
                "slippage_bps": self.default_slippage_bps,
            },
            "relay": {
                "endpoint": redact_url(self.relay_url),
                "protocol": self.relay_protocol,
                "rpc": redact_url(self.sol_rpc_url),
            },
            "http_timeout": self.http_timeout,
            "request_deadline": self.request_deadline,
            "reject_duplicate_swaps": self.reject_duplicate_swaps,
            "wallet_configured": self.has_wallet,
        }


def redact_url(url: str) -> str:
    """Redact credentials (userinfo password, API key params) from a URL."""
    parts = urlsplit(url)
    netloc = parts.netloc
    if "@" in netloc:
        creds, host = netloc.rsplit("@", 1)
        if ":" in creds:
            user, _ = creds.split(":", 1)
            netloc = f"{user}:***@{host}"
    if parts.query:
        query = [
            (key, "***" if key.lower() in SECRET_QUERY_PARAMS else value)
            for key, value in parse_qsl(parts.query, keep_blank_values=True)
        ]
        return urlunsplit(parts._replace(netloc=netloc, query=urlencode(query, safe="*")))
    return urlunsplit(parts._replace(netloc=netloc))


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
