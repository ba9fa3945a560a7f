from .common import ErrorResponse, ValidationErrorDetail
from .event import EventCreate, EventRead, EventUpdate
from .schedule import (
    AvailabilityCreate,
    AvailabilityRead,
    SaveScheduleError,
    ScheduleForm,
    ScheduleRead,
    ScheduleValidationResult,
)

__all__ = [
    "ErrorResponse",
    "ValidationErrorDetail",
    "EventCreate",
    "EventRead",
    "EventUpdate",
    "AvailabilityCreate",
    "AvailabilityRead",
    "SaveScheduleError",
    "ScheduleForm",
    "ScheduleRead",
    "ScheduleValidationResult",
]
