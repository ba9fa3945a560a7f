import logging
import json
from datetime import datetime, timezone
from uuid import UUID
from fastapi import Request
from app.config import settings


def get_client_ip(request: Request) -> str:
    if not request.client:
        return "unknown"
    return (
        request.headers.get("x-forwarded-for", "").split(",")[0].strip()
        or request.headers.get("x-real-ip", "")
        or request.client.host
    )


def get_user_agent(request: Request) -> str:
    return request.headers.get("user-agent", "unknown")


logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

schedule_logger = logging.getLogger("schedule")
events_logger = logging.getLogger("events")


def _base_record(request: Request, event_type: str) -> dict[str, object]:
    return {
        "event_type": event_type,
        "ip_address": get_client_ip(request),
        "user_agent": get_user_agent(request),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


class ScheduleLogger:
    @staticmethod
    def log_schedule_saved(
        request: Request,
        owner_id: str,
        schedule_id: UUID,
        timezone_name: str,
        availability_count: int,
    ):
        log_data = _base_record(request, "schedule_saved")
        log_data.update(
            {
                "owner_id": owner_id,
                "schedule_id": str(schedule_id),
                "timezone": timezone_name,
                "availability_count": availability_count,
            }
        )

        schedule_logger.info(f"Schedule saved: {json.dumps(log_data)}")

    @staticmethod
    def log_schedule_rejected(
        request: Request,
        reason: str,
        owner_id: str | None = None,
        details: dict[str, object] | None = None,
    ):
        log_data = _base_record(request, "schedule_rejected")
        log_data["reason"] = reason

        if owner_id:
            log_data["owner_id"] = owner_id
        if details:
            log_data.update(details)

        schedule_logger.warning(
            f"Schedule save rejected: {json.dumps(log_data, default=str)}"
        )

    @staticmethod
    def log_schedule_deleted(request: Request, owner_id: str):
        log_data = _base_record(request, "schedule_deleted")
        log_data["owner_id"] = owner_id

        schedule_logger.info(f"Schedule deleted: {json.dumps(log_data)}")

    @staticmethod
    def log_event_change(
        request: Request,
        owner_id: str,
        event_id: UUID,
        action: str,
    ):
        log_data = _base_record(request, f"event_{action}")
        log_data.update({"owner_id": owner_id, "event_id": str(event_id)})

        events_logger.info(f"Event {action}: {json.dumps(log_data)}")
