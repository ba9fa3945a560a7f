import pytest
from pydantic import ValidationError

from app.config import Settings
from app.core.config_validator import EnvironmentValidator

STRONG_SECRET = "x" * 40


def _settings(**overrides) -> Settings:
    values: dict[str, object] = {
        "SECRET_KEY": STRONG_SECRET,
        "DATABASE_URL": "sqlite+aiosqlite:///./dev.db",
        "ENVIRONMENT": "development",
        "DEBUG": False,
        "DOCS_ENABLED": True,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)  # type: ignore[arg-type]


class TestSettings:

    def test_cors_origins_are_trimmed(self):
        settings = _settings(CORS_ORIGINS=" https://app.example.com , http://localhost:3000 ")

        assert settings.cors_origins_list == ["https://app.example.com", "http://localhost:3000"]

    def test_cors_origin_needs_scheme(self):
        with pytest.raises(ValidationError):
            _settings(CORS_ORIGINS="app.example.com")

    def test_log_level_is_normalised(self):
        assert _settings(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    def test_unknown_log_level(self):
        with pytest.raises(ValidationError):
            _settings(LOG_LEVEL="chatty")

    def test_event_duration_must_be_positive(self):
        with pytest.raises(ValidationError):
            _settings(EVENT_MAX_DURATION_MINUTES=0)

    def test_rate_limit_string(self):
        assert _settings(RATE_LIMIT_PER_MINUTE=12).schedule_save_rate_limit == "12/minute"


class TestEnvironmentValidator:

    def test_development_sqlite_is_valid(self):
        result = EnvironmentValidator.validate_environment(_settings())

        assert result["valid"] is True
        assert result["errors"] == []

    def test_short_secret_is_an_error(self):
        result = EnvironmentValidator.validate_environment(_settings(SECRET_KEY="short"))

        assert result["valid"] is False
        assert any("SECRET_KEY" in error for error in result["errors"])

    def test_unsupported_database_is_an_error(self):
        result = EnvironmentValidator.validate_environment(
            _settings(DATABASE_URL="mysql+aiomysql://user@localhost/meet")
        )

        assert any("DATABASE_URL" in error for error in result["errors"])

    def test_production_rejects_debug_and_docs(self):
        result = EnvironmentValidator.validate_environment(
            _settings(
                ENVIRONMENT="production",
                DEBUG=True,
                DATABASE_URL="postgresql+asyncpg://meet@db/meet",
                SENTRY_DSN="https://key@sentry.example.com/1",
            )
        )

        assert result["valid"] is False
        failed = " ".join(result["errors"])
        assert "DEBUG" in failed
        assert "DOCS_ENABLED" in failed

    def test_production_without_sentry_only_warns(self):
        result = EnvironmentValidator.validate_environment(
            _settings(
                ENVIRONMENT="production",
                DOCS_ENABLED=False,
                DATABASE_URL="postgresql+asyncpg://meet@db/meet",
            )
        )

        assert result["valid"] is True
        assert any("SENTRY_DSN" in warning for warning in result["warnings"])

    def test_sqlite_is_refused_in_production(self):
        result = EnvironmentValidator.validate_environment(
            _settings(ENVIRONMENT="production", DOCS_ENABLED=False)
        )

        assert any("SQLite" in error for error in result["errors"])
