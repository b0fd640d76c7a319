"""
Centralized configuration for the EEU Complaints Proxy.

All settings come from environment variables for 12-factor deployment.
``ProxySettings.from_env()`` reads them once at startup; the resulting
object is passed to ``create_app`` and lives on ``app.state.proxy``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from complaints_proxy.core.constants import (
    DEFAULT_CORS_ORIGINS,
    DEFAULT_GAS_TIMEOUT_SECONDS,
    DEFAULT_GAS_URL,
    DEFAULT_HOST,
    DEFAULT_PORT,
)


def _env_bool(env: Mapping[str, str], name: str, default: bool = False) -> bool:
    val = env.get(name)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(env: Mapping[str, str], name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    val = env.get(name)
    if val is None or not val.strip():
        return default
    return tuple(s.strip() for s in val.split(",") if s.strip())


@dataclass(frozen=True)
class ProxySettings:
    """Runtime configuration for one proxy process."""

    gas_url: str = DEFAULT_GAS_URL
    # None disables the upstream timeout entirely.
    gas_timeout_seconds: Optional[float] = DEFAULT_GAS_TIMEOUT_SECONDS
    cors_origins: Tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)

    # Serve the static sample data when complaints/activities reads fail.
    fallback_enabled: bool = True
    # Rewrite complaint/attachment/user reads into canonical keys.
    normalize_records: bool = False

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "ProxySettings":
        env = os.environ if env is None else env

        timeout_raw = env.get("GAS_TIMEOUT_SECONDS")
        timeout: Optional[float] = DEFAULT_GAS_TIMEOUT_SECONDS
        if timeout_raw is not None and timeout_raw.strip():
            timeout = float(timeout_raw)
            if timeout <= 0:
                timeout = None

        return cls(
            gas_url=(env.get("GAS_URL") or "").strip() or DEFAULT_GAS_URL,
            gas_timeout_seconds=timeout,
            cors_origins=_env_list(env, "CORS_ORIGINS", DEFAULT_CORS_ORIGINS),
            fallback_enabled=_env_bool(env, "FALLBACK_ENABLED", True),
            normalize_records=_env_bool(env, "NORMALIZE_RECORDS", False),
            host=env.get("HOST", DEFAULT_HOST),
            port=int(env.get("PORT", str(DEFAULT_PORT))),
            log_level=env.get("LOG_LEVEL", "INFO").strip().upper(),
        )
