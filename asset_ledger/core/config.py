from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from asset_ledger.core.types import PRINCIPAL_MAX_LEN


class Settings(BaseSettings):
    """
    Runtime configuration. Every field can be overridden with an
    ASSET_LEDGER_-prefixed environment variable or a .env entry.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="ASSET_LEDGER_",
        extra="ignore",
    )

    # ─────────── APP ───────────
    app_name: str = "Asset Ledger"
    environment: str = "dev"
    log_level: str = "INFO"

    # ─────────── API ───────────
    api_prefix: str = "/api/v1"
    request_id_header: str = "X-Request-Id"

    # ─────────── DATABASE ───────────
    database_url: str = "sqlite:///./asset_ledger.db"
    database_echo: bool = False

    # ─────────── LEDGER ───────────
    # Deploying identity: manages reviewers, may decommission any asset.
    administrator: str = "deployer"

    # ─────────── JWT / AUTH ───────────
    jwt_secret_key: str = "dev-secret-change-me"
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "asset-ledger"
    jwt_access_token_minutes: int = 1440  # 24 hours

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        v = v.upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level {v!r}")
        return v

    @field_validator("administrator")
    @classmethod
    def _administrator_bounded(cls, v: str) -> str:
        if not v or len(v) > PRINCIPAL_MAX_LEN:
            raise ValueError(f"administrator must be 1..{PRINCIPAL_MAX_LEN} characters")
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
