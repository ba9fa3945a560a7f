from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.schedule import Schedule, ScheduleAvailability


def availability_tuples(availabilities) -> list[tuple[str, str, str]]:
    return sorted(
        (
            getattr(a.day_of_week, "value", a.day_of_week),
            a.start_time,
            a.end_time,
        )
        for a in availabilities
    )


async def count_schedules(session: AsyncSession, owner_id: str) -> int:
    result = await session.execute(
        select(func.count(Schedule.id)).where(Schedule.owner_id == owner_id)
    )
    return result.scalar() or 0


async def count_availabilities(session: AsyncSession) -> int:
    result = await session.execute(select(func.count(ScheduleAvailability.id)))
    return result.scalar() or 0
