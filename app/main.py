from fastapi import FastAPI
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from dotenv import load_dotenv
from pathlib import Path

env_path = Path(__file__).resolve().parent.parent / ".env"
_ = load_dotenv(dotenv_path=env_path)

from app.config import settings
from app.database import engine
from app.core.middleware import setup_middleware
from app.core.sentry_helpers import init_sentry
from app.api import events, schedule

logger = logging.getLogger(__name__)

error_tracking_enabled = init_sentry()
docs_enabled = settings.DEBUG or settings.DOCS_ENABLED


@asynccontextmanager
async def lifespan(_app: FastAPI):
    logger.info(
        f"🚀 {settings.APP_NAME} {settings.VERSION} starting up ({settings.ENVIRONMENT})"
    )

    yield

    logger.info(f"🛑 {settings.APP_NAME} shutting down")
    await engine.dispose()
    logger.info("✅ Database connections closed")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    description="Weekly availability schedules and bookable meeting types.",
    openapi_url="/api/openapi.json" if docs_enabled else None,
    docs_url="/docs" if docs_enabled else None,
    redoc_url="/redoc" if docs_enabled else None,
    lifespan=lifespan,
)

setup_middleware(app)

app.include_router(schedule.router, prefix="/api/schedule", tags=["schedule"])
app.include_router(events.router, prefix="/api/events", tags=["events"])


@app.get("/health", tags=["health"])
async def health_check():
    return {
        "status": "healthy",
        "version": settings.VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "features": {
            "schedules": True,
            "events": True,
            "rate_limiting": True,
            "error_tracking": error_tracking_enabled,
        },
    }
