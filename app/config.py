from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
import logging
import os


class Settings(BaseSettings):
    APP_NAME: str = "Meet Scheduling API"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    DOCS_ENABLED: bool = True

    # Tokens are issued by the external sign-in provider; only verification happens here
    SECRET_KEY: str = Field(description="Shared secret used to verify access tokens")
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=30, gt=0)

    DATABASE_URL: str = Field(description="Async SQLAlchemy database URL")
    DB_ECHO: bool = False

    CORS_ORIGINS: str = Field(
        default="http://localhost:3000,http://127.0.0.1:3000",
        description="Comma-separated list of allowed origins",
    )
    RATE_LIMIT_PER_MINUTE: int = Field(default=60, gt=0)

    LOG_LEVEL: str = "INFO"
    SENTRY_DSN: str | None = None

    EVENT_MAX_DURATION_MINUTES: int = Field(default=720, gt=0)

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=True, env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("CORS_ORIGINS")
    @classmethod
    def validate_cors_origins(cls, v: str) -> str:
        origins = [origin.strip() for origin in v.split(",") if origin.strip()]
        if not origins:
            raise ValueError("CORS_ORIGINS cannot be empty")

        bad = [origin for origin in origins if not origin.startswith(("http://", "https://"))]
        if bad:
            raise ValueError(
                f"Invalid CORS origin format: {', '.join(bad)}. Must start with http:// or https://"
            )
        return ",".join(origins)

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown LOG_LEVEL: {v}")
        return level

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    @property
    def cors_origins_list(self) -> list[str]:
        return self.CORS_ORIGINS.split(",")

    @property
    def schedule_save_rate_limit(self) -> str:
        return f"{self.RATE_LIMIT_PER_MINUTE}/minute"


settings = Settings()  # type: ignore[call-arg]


def _validate_settings() -> None:
    if not os.getenv("SKIP_CONFIG_VALIDATION"):
        from .core.config_validator import EnvironmentValidator

        EnvironmentValidator.validate_or_exit(settings)


_validate_settings()
