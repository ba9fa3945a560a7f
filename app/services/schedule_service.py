import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import delete, insert, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import func

from ..models.enums import DAYS_OF_WEEK_IN_ORDER
from ..models.schedule import Schedule, ScheduleAvailability
from ..schemas.schedule import ScheduleForm
from ..utils.time_utils import time_to_int

logger = logging.getLogger(__name__)

# dialects with a native INSERT .. ON CONFLICT .. RETURNING
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class ScheduleService:
    db: AsyncSession

    def __init__(self, db: AsyncSession):
        self.db = db

    async def save_schedule(self, owner_id: str, schedule: ScheduleForm) -> uuid.UUID:
        """Replace the owner's schedule and all of its availabilities.

        The upsert, the delete and the bulk insert share one transaction:
        on any database error nothing is committed and the error is
        re-raised. The payload must already have passed
        validate_schedule_payload.
        """
        try:
            schedule_id = await self._upsert_schedule(owner_id, schedule.timezone)

            await self.db.execute(
                delete(ScheduleAvailability).where(
                    ScheduleAvailability.schedule_id == schedule_id
                )
            )

            if schedule.availabilities:
                await self.db.execute(
                    insert(ScheduleAvailability),
                    [
                        {
                            "schedule_id": schedule_id,
                            "day_of_week": availability.day_of_week,
                            "start_time": availability.start_time,
                            "end_time": availability.end_time,
                        }
                        for availability in schedule.availabilities
                    ],
                )

            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise

        logger.debug(
            f"Saved schedule {schedule_id} with "
            f"{len(schedule.availabilities)} availabilities"
        )
        return schedule_id

    async def _upsert_schedule(self, owner_id: str, tz_name: str) -> uuid.UUID:
        dialect_insert = _UPSERT_INSERTS.get(self.db.get_bind().dialect.name)

        if dialect_insert is not None:
            stmt = dialect_insert(Schedule).values(owner_id=owner_id, timezone=tz_name)
            stmt = stmt.on_conflict_do_update(
                index_elements=[Schedule.owner_id],
                set_={"timezone": stmt.excluded.timezone, "updated_at": func.now()},
            ).returning(Schedule.id)
            result = await self.db.execute(stmt)
            return result.scalar_one()

        result = await self.db.execute(
            select(Schedule).where(Schedule.owner_id == owner_id)
        )
        existing = result.scalar_one_or_none()

        if existing is None:
            existing = Schedule(owner_id=owner_id, timezone=tz_name)
            self.db.add(existing)
        else:
            existing.timezone = tz_name
            existing.updated_at = datetime.now(timezone.utc)

        await self.db.flush()
        return existing.id

    async def get_schedule(self, owner_id: str) -> Schedule | None:
        result = await self.db.execute(
            select(Schedule)
            .options(selectinload(Schedule.availabilities))
            .where(Schedule.owner_id == owner_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def delete_schedule(self, owner_id: str) -> bool:
        try:
            result = await self.db.execute(
                delete(Schedule).where(Schedule.owner_id == owner_id)
            )
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise

        return result.rowcount > 0

    @staticmethod
    def sorted_availabilities(schedule: Schedule) -> list[ScheduleAvailability]:
        day_order = {day: position for position, day in enumerate(DAYS_OF_WEEK_IN_ORDER)}
        return sorted(
            schedule.availabilities,
            key=lambda a: (day_order[a.day_of_week], time_to_int(a.start_time)),
        )
