import logging
from typing import Any

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from app.config import settings

logger = logging.getLogger(__name__)


def init_sentry() -> bool:
    if not settings.SENTRY_DSN:
        logger.info("⚠️  Sentry DSN not configured - error tracking disabled")
        return False

    _ = sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        traces_sample_rate=1.0 if settings.DEBUG else 0.1,
        environment=settings.ENVIRONMENT,
        release=f"meet-scheduling@{settings.VERSION}",
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            StarletteIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
        ],
        # owner ids are attached explicitly, nothing else about the caller
        send_default_pii=False,
        attach_stacktrace=True,
    )
    logger.info(f"✅ Sentry initialized for environment: {settings.ENVIRONMENT}")
    return True


def capture_exception_with_context(
    error: Exception,
    owner_id: str | None = None,
    context: dict[str, Any] | None = None,
    level: str = "error",
):
    with sentry_sdk.new_scope() as scope:
        scope.set_level(level)  # type: ignore[arg-type]
        if owner_id:
            scope.set_user({"id": owner_id})
        for key, value in (context or {}).items():
            scope.set_context(key, value)

        sentry_sdk.capture_exception(error)
