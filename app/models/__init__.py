from .base import Base
from .enums import DAYS_OF_WEEK_IN_ORDER, DayOfWeek
from .event import Event
from .schedule import Schedule, ScheduleAvailability

__all__ = [
    "Base",
    "DayOfWeek",
    "DAYS_OF_WEEK_IN_ORDER",
    "Event",
    "Schedule",
    "ScheduleAvailability",
]
