from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models.enums import DayOfWeek
from ..models.schedule import TIMEZONE_MAX_LENGTH
from ..utils.time_utils import is_valid_time, normalize_time
from .common import ValidationErrorDetail

TIME_FORMAT_MESSAGE = "Time must be in the format HH:MM"


class AvailabilityBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    day_of_week: DayOfWeek = Field(..., alias="dayOfWeek")
    start_time: str = Field(..., alias="startTime")
    end_time: str = Field(..., alias="endTime")


class AvailabilityCreate(AvailabilityBase):
    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time_format(cls, v: str) -> str:
        if not is_valid_time(v):
            raise ValueError(TIME_FORMAT_MESSAGE)
        return normalize_time(v)


class ScheduleForm(BaseModel):
    """Payload of the schedule editor: a timezone and the weekly windows.

    Only formats are checked here. Overlap and ordering are checked by
    find_availability_violations so both the editor and the save path
    share one rule.
    """

    model_config = ConfigDict(populate_by_name=True)

    timezone: str = Field(..., max_length=TIMEZONE_MAX_LENGTH)
    availabilities: list[AvailabilityCreate] = Field(default_factory=list)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Required")
        return v


class AvailabilityRead(AvailabilityBase):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID


class ScheduleRead(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    timezone: str
    availabilities: list[AvailabilityRead] = Field(default_factory=list)
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")


class ScheduleValidationResult(BaseModel):
    valid: bool
    errors: list[ValidationErrorDetail] = Field(default_factory=list)


class SaveScheduleError(BaseModel):
    error: Literal[True] = True
