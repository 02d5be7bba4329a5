"""Configuration via environment variables with cloud-native secret support.

Supports:
  - Environment variables or a .env file (local dev)
  - AWS Secrets Manager (aws-secret://name#key) for the access token
  - GCP Secret Manager (gcp-secret://name) for the access token
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from scripts.carta_connector.errors import ConfigError
from scripts.carta_connector.secrets import resolve_secret

DEFAULT_API_BASE_URL = "https://mock-api.carta.com/v1alpha1/"


@dataclass(frozen=True)
class CartaConfig:
    access_token: str
    api_base_url: str = DEFAULT_API_BASE_URL
    page_size: int = 50
    portfolio_issuers_page_size: int = 100
    request_timeout: float = 30.0


@dataclass(frozen=True)
class SchedulerConfig:
    sync_interval_min: int = 60
    misfire_grace_time: int = 300


@dataclass(frozen=True)
class ConnectorConfig:
    carta: CartaConfig
    scheduler: SchedulerConfig = field(default_factory=SchedulerConfig)
    output: str = "sync.json"
    log_level: str = "INFO"


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


def load_config() -> ConnectorConfig:
    """Load configuration from environment variables.

    The access token may be a secret reference; it is resolved through
    AWS Secrets Manager or GCP Secret Manager before use.
    """
    load_dotenv()

    token_raw = os.environ.get("CARTA_ACCESS_TOKEN", "")
    if not token_raw:
        raise ConfigError("CARTA_ACCESS_TOKEN environment variable is required")

    page_size = _int_env("CARTA_PAGE_SIZE", 50)
    if page_size < 0:
        raise ConfigError("CARTA_PAGE_SIZE must not be negative")

    timeout_raw = os.environ.get("CARTA_REQUEST_TIMEOUT", "30")
    try:
        timeout = float(timeout_raw)
    except ValueError:
        raise ConfigError(
            f"CARTA_REQUEST_TIMEOUT must be a number, got {timeout_raw!r}"
        ) from None

    carta = CartaConfig(
        access_token=resolve_secret(token_raw),
        api_base_url=os.environ.get("CARTA_API_BASE_URL", DEFAULT_API_BASE_URL),
        page_size=page_size,
        portfolio_issuers_page_size=_int_env("CARTA_PORTFOLIO_ISSUERS_PAGE_SIZE", 100),
        request_timeout=timeout,
    )

    scheduler = SchedulerConfig(
        sync_interval_min=_int_env("SYNC_INTERVAL_MIN", 60),
        misfire_grace_time=_int_env("SYNC_MISFIRE_GRACE_TIME", 300),
    )

    return ConnectorConfig(
        carta=carta,
        scheduler=scheduler,
        output=os.environ.get("SYNC_OUTPUT", "sync.json"),
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
    )
