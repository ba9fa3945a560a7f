from pydantic import BaseModel, Field, field_validator, ConfigDict
from datetime import datetime
from uuid import UUID

from ..config import settings


def _check_duration(v: int) -> int:
    limit = settings.EVENT_MAX_DURATION_MINUTES
    if v > limit:
        raise ValueError(
            f"Duration must be less than {limit // 60} hours ({limit} minutes)"
        )
    return v


class EventCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(None, max_length=2000)
    duration_in_minutes: int = Field(..., gt=0, alias="durationInMinutes")
    is_active: bool = Field(True, alias="isActive")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Required')
        return v

    @field_validator('duration_in_minutes')
    @classmethod
    def validate_duration(cls, v: int) -> int:
        return _check_duration(v)

class EventUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=2000)
    duration_in_minutes: int | None = Field(None, gt=0, alias="durationInMinutes")
    is_active: bool | None = Field(None, alias="isActive")

    @field_validator('duration_in_minutes')
    @classmethod
    def validate_duration(cls, v: int | None) -> int | None:
        if v is None:
            return v
        return _check_duration(v)

class EventRead(BaseModel):
    model_config = ConfigDict(from_attributes = True, populate_by_name=True)

    id: UUID
    name: str
    description: str | None = None
    duration_in_minutes: int = Field(..., alias="durationInMinutes")
    is_active: bool = Field(..., alias="isActive")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")
