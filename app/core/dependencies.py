from fastapi import Depends, HTTPException, status, Cookie
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from app.database import get_db
from .auth import owner_id_from_token
from ..services.event_service import EventService
from ..services.schedule_service import ScheduleService
from typing import Annotated

DatabaseSession = Annotated[AsyncSession, Depends(get_db)]


async def get_optional_owner_id(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(HTTPBearer(auto_error=False))
    ],
    access_token: Annotated[str | None, Cookie()] = None,
) -> str | None:
    token = credentials.credentials if credentials else access_token
    return owner_id_from_token(token)


OptionalOwnerId = Annotated[str | None, Depends(get_optional_owner_id)]


async def get_current_owner_id(owner_id: OptionalOwnerId) -> str:
    if owner_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return owner_id


CurrentOwnerId = Annotated[str, Depends(get_current_owner_id)]


async def get_event_service(db: DatabaseSession) -> EventService:
    return EventService(db)


async def get_schedule_service(db: DatabaseSession) -> ScheduleService:
    return ScheduleService(db)
