"""
Configuration helpers and defaults.

All values come from the function app environment and are read once per process.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


def _env(name: str, default: str | None = None) -> str | None:
    v = os.getenv(name)
    return v if v is not None else default


def _int(name: str, default: int, minimum: int, invalid: list[str]) -> int:
    raw = (_env(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        invalid.append(name)
        return default
    if value < minimum:
        invalid.append(name)
        return default
    return value


@dataclass(frozen=True)
class Settings:
    environments: tuple[str, ...]
    storage_bucket: str | None
    storage_url_expires_seconds: int
    arm_client_id: str | None
    arm_client_secret: str | None
    tenant_id: str | None
    subscription_id: str | None
    app_password: str | None
    http_timeout_seconds: int
    # Names of set-but-unusable values; their defaults are used in the fields.
    invalid: tuple[str, ...] = ()

    def missing(self) -> list[str]:
        """Names of required settings that are unset or empty."""
        required = {
            "GAMEATRON_ENVIRONMENTS": self.environments,
            "GAMEATRON_STORAGE_BUCKET": self.storage_bucket,
            "GAMEATRON_ARM_CLIENT_ID": self.arm_client_id,
            "GAMEATRON_ARM_CLIENT_SECRET": self.arm_client_secret,
            "GAMEATRON_TENANT_ID": self.tenant_id,
            "GAMEATRON_SUBSCRIPTION_ID": self.subscription_id,
            "GAMEATRON_APP_PASSWORD": self.app_password,
        }
        return [name for name, value in required.items() if not value]


def load_settings() -> Settings:
    """Load settings from environment with safe defaults for local tests."""

    invalid: list[str] = []
    environments = tuple(
        e.strip() for e in ((_env("GAMEATRON_ENVIRONMENTS", "") or "").split(";")) if e.strip()
    )

    return Settings(
        environments=environments,
        storage_bucket=_env("GAMEATRON_STORAGE_BUCKET"),
        storage_url_expires_seconds=_int(
            "GAMEATRON_STORAGE_URL_EXPIRES_SECONDS", 3600, 0, invalid
        ),
        arm_client_id=_env("GAMEATRON_ARM_CLIENT_ID"),
        arm_client_secret=_env("GAMEATRON_ARM_CLIENT_SECRET"),
        tenant_id=_env("GAMEATRON_TENANT_ID"),
        subscription_id=_env("GAMEATRON_SUBSCRIPTION_ID"),
        app_password=_env("GAMEATRON_APP_PASSWORD"),
        http_timeout_seconds=_int("GAMEATRON_HTTP_TIMEOUT_SECONDS", 30, 1, invalid),
        invalid=tuple(invalid),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
