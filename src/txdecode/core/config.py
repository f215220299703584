from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_BASE_URL = "https://api.covalenthq.com/v1"


@dataclass(frozen=True)
class DecoderConfig:
    """Runtime configuration for the decoder service and CLI."""

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout_s: int = 20
    max_connections: int = 16
    raw_logs: bool = False
    log_level: str = "INFO"


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def load_config() -> DecoderConfig:
    """Load configuration from environment variables."""
    api_key = os.getenv("COVALENT_API_KEY")
    if not api_key:
        raise ValueError("COVALENT_API_KEY is required but not set.")

    return DecoderConfig(
        api_key=api_key,
        base_url=os.getenv("COVALENT_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
        timeout_s=int(os.getenv("TXDECODE_TIMEOUT_S", "20")),
        max_connections=int(os.getenv("TXDECODE_MAX_CONNECTIONS", "16")),
        raw_logs=_env_flag("TXDECODE_RAW_LOGS"),
        log_level=os.getenv("TXDECODE_LOG_LEVEL", "INFO").upper(),
    )
