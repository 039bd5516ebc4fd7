"""Configuration for the Order Signer Gateway.

Settings are read once at startup from the environment (or a .env file) and
frozen for the lifetime of the process. The settings object is passed
explicitly to the auth gate, the signer and the relay client; nothing reads
the environment ad hoc after startup.

Usage:
    from apps.order_signer.config import load_settings

    settings = load_settings()
    if settings.relay_configured:
        logger.info("Relay target configured")
"""

from __future__ import annotations

import re

from pydantic import AnyHttpUrl, Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from libs.common.exceptions import ConfigurationError
from libs.common.logging import get_logger

logger = get_logger(__name__)

PRIVATE_KEY_PATTERN = re.compile(r"0x[0-9a-fA-F]{64}")

DEFAULT_CLOB_HOST = "https://clob.polymarket.com"
DEFAULT_CHAIN_ID = 137
# 1 MiB request body limit.
DEFAULT_MAX_BODY_BYTES = 1024 * 1024


class SignerSettings(BaseSettings):
    """
    Process-wide configuration for the signer.

    Secrets are SecretStr so they never show up in repr(), logs or error
    messages. Use ``get_secret_value()`` only at the point of use.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Signing network
    clob_host: str = Field(
        default=DEFAULT_CLOB_HOST,
        description="Signing network (CLOB) host",
    )
    chain_id: int = Field(
        default=DEFAULT_CHAIN_ID,
        description="Chain identifier used for order signatures",
    )
    private_key: SecretStr = Field(
        description="Signing key, 0x + 64 hex chars",
    )

    # Inbound auth
    signer_token: SecretStr = Field(
        description="Shared bearer secret required on every route except /health",
    )

    # Relay target (optional)
    worker_url: AnyHttpUrl | None = Field(
        default=None,
        description="URL of the worker that accepts signed orders",
    )
    worker_token: SecretStr | None = Field(
        default=None,
        description="Bearer credential presented to the worker",
    )
    relay_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout for the relay HTTP call",
    )

    # Server
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=3000, ge=1, le=65535, description="Listen port")
    log_level: str = Field(default="INFO", description="Logging level")
    max_body_bytes: int = Field(
        default=DEFAULT_MAX_BODY_BYTES,
        gt=0,
        description="Maximum accepted request body size",
    )

    @field_validator("private_key")
    @classmethod
    def _validate_private_key(cls, value: SecretStr) -> SecretStr:
        if not PRIVATE_KEY_PATTERN.fullmatch(value.get_secret_value()):
            raise ValueError("PRIVATE_KEY must be 0x + 64 hex chars (no spaces).")
        return value

    @field_validator("signer_token")
    @classmethod
    def _validate_signer_token(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value():
            raise ValueError("SIGNER_TOKEN must not be empty")
        return value

    @field_validator("worker_url", "worker_token", mode="before")
    @classmethod
    def _empty_as_unset(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def relay_configured(self) -> bool:
        """True when both the worker URL and its token are set."""
        return bool(self.worker_url) and self.worker_token is not None


def load_settings(**overrides: object) -> SignerSettings:
    """Load and validate settings, failing fast on bad configuration.

    Args:
        **overrides: Explicit values taking precedence over the environment

    Returns:
        SignerSettings: Frozen, validated settings

    Raises:
        ConfigurationError: If a required value is missing or malformed. The
            message names the offending fields but never echoes their values.
    """
    try:
        settings = SignerSettings(**overrides)  # type: ignore[arg-type]
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']).upper()}: {error['msg']}"
            for error in exc.errors(include_input=False, include_url=False)
        )
        raise ConfigurationError(f"Invalid signer configuration: {problems}") from None

    if not settings.relay_configured:
        logger.warning(
            "WORKER_URL/WORKER_TOKEN not set; /place will return signed orders without relaying"
        )
    return settings
