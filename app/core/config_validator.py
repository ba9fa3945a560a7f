import sys
from collections.abc import Callable
from typing import TYPE_CHECKING, TypedDict

if TYPE_CHECKING:
    from app.config import Settings

PLACEHOLDER_SECRET = "CHANGE_THIS_TO_A_SECURE_RANDOM_KEY_IN_PRODUCTION"
SUPPORTED_DATABASE_SCHEMES = ("postgresql+asyncpg://", "sqlite+aiosqlite://")
MINUTES_PER_DAY = 24 * 60


class ValidationResult(TypedDict):
    environment: str
    errors: list[str]
    warnings: list[str]
    valid: bool


class Check(TypedDict):
    setting: str
    passes: Callable[["Settings"], bool]
    message: str


def _strong_secret(s: "Settings") -> bool:
    return len(s.SECRET_KEY) >= 32 and s.SECRET_KEY != PLACEHOLDER_SECRET


def _supported_database(s: "Settings") -> bool:
    return s.DATABASE_URL.startswith(SUPPORTED_DATABASE_SCHEMES)


def _event_duration_fits_a_day(s: "Settings") -> bool:
    return s.EVENT_MAX_DURATION_MINUTES <= MINUTES_PER_DAY


class EnvironmentValidator:
    """Start-up sanity checks on the loaded settings.

    ``REQUIRED`` failures always abort. ``PRODUCTION`` checks abort only in
    production and are reported as warnings elsewhere. ``RECOMMENDED``
    checks never abort.
    """

    REQUIRED: list[Check] = [
        {
            'setting': 'SECRET_KEY',
            'passes': _strong_secret,
            'message': 'SECRET_KEY must be at least 32 characters and changed from default',
        },
        {
            'setting': 'DATABASE_URL',
            'passes': _supported_database,
            'message': 'DATABASE_URL must start with postgresql+asyncpg:// or sqlite+aiosqlite:///',
        },
        {
            'setting': 'EVENT_MAX_DURATION_MINUTES',
            'passes': _event_duration_fits_a_day,
            'message': f'EVENT_MAX_DURATION_MINUTES cannot exceed {MINUTES_PER_DAY}',
        },
    ]

    PRODUCTION: list[Check] = [
        {
            'setting': 'DEBUG',
            'passes': lambda s: not s.DEBUG,
            'message': 'DEBUG must be false in production environment',
        },
        {
            'setting': 'DOCS_ENABLED',
            'passes': lambda s: not s.DOCS_ENABLED,
            'message': 'DOCS_ENABLED should be false in production',
        },
        {
            'setting': 'DATABASE_URL',
            'passes': lambda s: not s.is_sqlite,
            'message': 'SQLite is meant for development and tests, use PostgreSQL in production',
        },
    ]

    RECOMMENDED: list[Check] = [
        {
            'setting': 'SENTRY_DSN',
            'passes': lambda s: not s.is_production or bool(s.SENTRY_DSN and s.SENTRY_DSN.startswith('https://')),
            'message': 'SENTRY_DSN should be configured for production monitoring',
        },
        {
            'setting': 'ACCESS_TOKEN_EXPIRE_MINUTES',
            'passes': lambda s: 5 <= s.ACCESS_TOKEN_EXPIRE_MINUTES <= MINUTES_PER_DAY,
            'message': f'ACCESS_TOKEN_EXPIRE_MINUTES should be between 5 and {MINUTES_PER_DAY}',
        },
        {
            'setting': 'RATE_LIMIT_PER_MINUTE',
            'passes': lambda s: s.RATE_LIMIT_PER_MINUTE <= 10000,
            'message': 'RATE_LIMIT_PER_MINUTE should not exceed 10000',
        },
    ]

    @classmethod
    def validate_environment(cls, settings: "Settings") -> ValidationResult:
        errors: list[str] = []
        warnings: list[str] = []
        environment = settings.ENVIRONMENT.lower()

        for check in cls.REQUIRED:
            if not check['passes'](settings):
                errors.append(f"❌ {check['setting']}: {check['message']}")

        for check in cls.PRODUCTION:
            if not check['passes'](settings):
                if settings.is_production:
                    errors.append(f"❌ {check['setting']}: {check['message']}")
                elif check['setting'] != 'DATABASE_URL':
                    warnings.append(f"⚠️ {check['setting']}: {check['message']}")

        for check in cls.RECOMMENDED:
            if not check['passes'](settings):
                warnings.append(f"⚠️ {check['setting']}: {check['message']}")

        return ValidationResult(
            environment=environment,
            errors=errors,
            warnings=warnings,
            valid=not errors,
        )

    @classmethod
    def validate_or_exit(cls, settings: "Settings") -> None:
        if any('alembic' in arg for arg in sys.argv):
            return

        result = cls.validate_environment(settings)

        print("🔧 Meet Scheduling configuration check")
        print("=" * 50)
        print(f"Environment: {result['environment'].upper()}")

        for warning in result['warnings']:
            print(f"  {warning}")

        if not result['valid']:
            print("\n❌ CRITICAL ERRORS:")
            for error in result['errors']:
                print(f"  {error}")

            print("\n💡 Generate a secure SECRET_KEY with:")
            print("     python -c \"import secrets; print(secrets.token_urlsafe(32))\"")
            print("\nApplication cannot start with configuration errors.")
            sys.exit(1)

        if not result['warnings']:
            print("✅ All configuration checks passed!")

        print("-" * 50)
