from decimal import Decimal
from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Server Settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=3000, description="Server port")
    log_level: str = Field(default="INFO", description="Logging level")
    cors_allow_origins: str = Field(
        default="*",
        description="Comma-separated origins allowed by the CORS middleware",
    )

    # LI.FI upstream
    lifi_base_url: str = Field(default="https://li.quest/v1", description="LI.FI API base URL")
    lifi_api_key: str = Field(default="", description="Optional LI.FI API key (x-lifi-api-key header)")
    lifi_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout applied to every LI.FI request",
    )
    lifi_log_level: str = Field(
        default="",
        description="Log level for LI.FI call logs; empty inherits LOG_LEVEL",
    )

    # Swap defaults
    default_from_token: str = Field(
        default="wbtc",
        description="Registry alias used when the caller omits fromToken",
    )
    default_slippage: Decimal = Field(
        default=Decimal("0.003"),
        ge=0,
        le=1,
        description="Slippage fraction sent upstream when the caller omits it",
    )

    @field_validator("default_from_token")
    @classmethod
    def _normalize_alias(cls, value: str) -> str:
        return value.strip().lower()

    @property
    def has_lifi_key(self) -> bool:
        return bool(self.lifi_api_key)

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.cors_allow_origins.split(",") if origin.strip()]


# Global settings instance
settings = Settings()
