"""Environment-driven configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

TRANSPORTS = ("stdio", "sse", "streamable-http")


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Runtime settings loaded from environment variables."""

    data_path: Optional[Path] = None
    data_url: Optional[str] = None
    strict_load: bool = False
    http_timeout: float = 30.0
    transport: str = "streamable-http"
    host: str = "127.0.0.1"
    port: int = 3002
    log_level: str = "INFO"

    @classmethod
    def load(cls) -> "Settings":
        data_path = os.environ.get("ISSUERS_DATA_PATH")
        transport = os.environ.get("MCP_TRANSPORT", "streamable-http")
        if transport not in TRANSPORTS:
            raise ValueError(f"MCP_TRANSPORT must be one of {', '.join(TRANSPORTS)}, got {transport!r}")
        return cls(
            data_path=Path(data_path) if data_path else None,
            data_url=os.environ.get("ISSUERS_DATA_URL") or None,
            strict_load=_env_flag("ISSUERS_STRICT_LOAD"),
            http_timeout=float(os.environ.get("ISSUERS_HTTP_TIMEOUT", "30")),
            transport=transport,
            host=os.environ.get("HOST", "127.0.0.1"),
            port=int(os.environ.get("PORT", "3002")),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )
