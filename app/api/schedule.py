import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.config import settings
from app.core.dependencies import (
    CurrentOwnerId,
    OptionalOwnerId,
    get_schedule_service,
)
from app.core.logging import ScheduleLogger
from app.core.middleware import limiter
from app.core.sentry_helpers import capture_exception_with_context
from app.schemas.common import ErrorResponse
from app.schemas.schedule import (
    AvailabilityRead,
    SaveScheduleError,
    ScheduleRead,
    ScheduleValidationResult,
)
from app.services.availability_service import validate_schedule_payload
from app.services.schedule_service import ScheduleService

logger = logging.getLogger(__name__)

router = APIRouter()

ScheduleServiceDep = Annotated[ScheduleService, Depends(get_schedule_service)]


def _save_rate_limit() -> str:
    # read per request so the limit follows the current settings
    return settings.schedule_save_rate_limit


async def _read_json(request: Request) -> object:
    try:
        return await request.json()
    except ValueError:
        return None


def _save_failed() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=SaveScheduleError().model_dump(),
    )


@router.get(
    "",
    response_model=ScheduleRead,
    responses={404: {"model": ErrorResponse, "description": "No schedule saved yet"}},
)
async def get_my_schedule(
    owner_id: CurrentOwnerId,
    schedule_service: ScheduleServiceDep,
) -> ScheduleRead:
    schedule = await schedule_service.get_schedule(owner_id)

    if not schedule:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Schedule not found"
        )

    return ScheduleRead(
        id=schedule.id,
        timezone=schedule.timezone,
        availabilities=[
            AvailabilityRead.model_validate(availability)
            for availability in ScheduleService.sorted_availabilities(schedule)
        ],
        created_at=schedule.created_at,
        updated_at=schedule.updated_at,
    )


@router.post(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Save the weekly schedule",
    description=(
        "Replaces the caller's timezone and availabilities. Any failure, "
        "including missing authentication, yields 400 with {\"error\": true}."
    ),
    responses={400: {"model": SaveScheduleError}},
)
@limiter.limit(_save_rate_limit)
async def save_schedule(
    request: Request,
    owner_id: OptionalOwnerId,
    schedule_service: ScheduleServiceDep,
) -> Response:
    unsafe_data = await _read_json(request)

    if owner_id is None:
        ScheduleLogger.log_schedule_rejected(request, "unauthenticated")
        return _save_failed()

    form, errors = validate_schedule_payload(unsafe_data)
    if form is None:
        ScheduleLogger.log_schedule_rejected(
            request,
            "invalid_payload",
            owner_id=owner_id,
            details={"fields": sorted({error.field for error in errors})},
        )
        return _save_failed()

    try:
        schedule_id = await schedule_service.save_schedule(owner_id, form)
    except SQLAlchemyError as e:
        logger.error(f"Schedule save failed for owner {owner_id}: {e}")
        capture_exception_with_context(
            e, owner_id=owner_id, context={"schedule": {"availability_count": len(form.availabilities)}}
        )
        ScheduleLogger.log_schedule_rejected(
            request, "persistence_error", owner_id=owner_id
        )
        return _save_failed()

    ScheduleLogger.log_schedule_saved(
        request,
        owner_id=owner_id,
        schedule_id=schedule_id,
        timezone_name=form.timezone,
        availability_count=len(form.availabilities),
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/validate",
    response_model=ScheduleValidationResult,
    description=(
        "Runs the same checks as the save path without touching storage. "
        "A body that is not JSON is reported as an invalid payload."
    ),
)
async def validate_schedule(request: Request) -> ScheduleValidationResult:
    _, errors = validate_schedule_payload(await _read_json(request))
    return ScheduleValidationResult(valid=not errors, errors=errors)


@router.delete(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse, "description": "No schedule saved yet"}},
)
async def delete_my_schedule(
    request: Request,
    owner_id: CurrentOwnerId,
    schedule_service: ScheduleServiceDep,
) -> None:
    deleted = await schedule_service.delete_schedule(owner_id)

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Schedule not found"
        )

    ScheduleLogger.log_schedule_deleted(request, owner_id)
