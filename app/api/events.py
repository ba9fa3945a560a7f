from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, status

from app.core.dependencies import CurrentOwnerId, get_event_service
from app.core.logging import ScheduleLogger
from app.models.event import Event
from app.schemas.common import ErrorResponse
from app.schemas.event import EventCreate, EventRead, EventUpdate
from app.services.event_service import EventService

router = APIRouter()

EventServiceDep = Annotated[EventService, Depends(get_event_service)]

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Event not found"}}


async def _get_owned_event(
    event_id: UUID, owner_id: str, event_service: EventService
) -> Event:
    event = await event_service.get_event(event_id, owner_id)
    if not event:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Event not found"
        )
    return event


@router.get(
    "/",
    response_model=list[EventRead],
    summary="List my events",
    description="Events owned by the caller, newest first",
)
async def get_my_events(
    owner_id: CurrentOwnerId,
    event_service: EventServiceDep,
) -> list[EventRead]:
    events = await event_service.list_events(owner_id)
    return [EventRead.model_validate(event) for event in events]


@router.post("/", response_model=EventRead, status_code=status.HTTP_201_CREATED)
async def create_event(
    request: Request,
    event_data: EventCreate,
    owner_id: CurrentOwnerId,
    event_service: EventServiceDep,
) -> EventRead:
    event = await event_service.create_event(owner_id, event_data)
    ScheduleLogger.log_event_change(request, owner_id, event.id, "created")
    return EventRead.model_validate(event)


@router.get("/{event_id}", response_model=EventRead, responses=_NOT_FOUND)
async def get_event(
    event_id: UUID,
    owner_id: CurrentOwnerId,
    event_service: EventServiceDep,
) -> EventRead:
    event = await _get_owned_event(event_id, owner_id, event_service)
    return EventRead.model_validate(event)


@router.patch("/{event_id}", response_model=EventRead, responses=_NOT_FOUND)
async def update_event(
    request: Request,
    event_id: UUID,
    update_data: EventUpdate,
    owner_id: CurrentOwnerId,
    event_service: EventServiceDep,
) -> EventRead:
    event = await _get_owned_event(event_id, owner_id, event_service)
    updated_event = await event_service.update_event(event, update_data)
    ScheduleLogger.log_event_change(request, owner_id, updated_event.id, "updated")
    return EventRead.model_validate(updated_event)


@router.delete(
    "/{event_id}", status_code=status.HTTP_204_NO_CONTENT, responses=_NOT_FOUND
)
async def delete_event(
    request: Request,
    event_id: UUID,
    owner_id: CurrentOwnerId,
    event_service: EventServiceDep,
) -> None:
    event = await _get_owned_event(event_id, owner_id, event_service)
    await event_service.delete_event(event)
    ScheduleLogger.log_event_change(request, owner_id, event_id, "deleted")
