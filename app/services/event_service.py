import uuid

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.event import Event
from ..schemas.event import EventCreate, EventUpdate


class EventService:
    """Meeting types owned by a single user.

    Every lookup is scoped to the owner, so an event belonging to someone
    else behaves exactly like a missing one.
    """

    db: AsyncSession

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_events(self, owner_id: str) -> list[Event]:
        result = await self.db.execute(
            select(Event)
            .where(Event.owner_id == owner_id)
            .order_by(Event.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_event(self, event_id: uuid.UUID, owner_id: str) -> Event | None:
        result = await self.db.execute(
            select(Event).where(Event.id == event_id, Event.owner_id == owner_id)
        )
        return result.scalar_one_or_none()

    async def create_event(self, owner_id: str, event_data: EventCreate) -> Event:
        event = Event(owner_id=owner_id, **event_data.model_dump())
        self.db.add(event)
        await self._commit()
        await self.db.refresh(event)
        return event

    async def update_event(self, event: Event, update_data: EventUpdate) -> Event:
        for key, value in update_data.model_dump(exclude_unset=True).items():
            if key == "description" or value is not None:
                setattr(event, key, value)

        await self._commit()
        await self.db.refresh(event)
        return event

    async def delete_event(self, event: Event) -> None:
        await self.db.delete(event)
        await self._commit()

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
