import uuid

from sqlalchemy import (
    CheckConstraint,
    Enum as SQLEnum,
    ForeignKey,
    Index,
    String,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base
from .enums import DayOfWeek
from .types import TimestampMixin

TIMEZONE_MAX_LENGTH = 64


class Schedule(TimestampMixin, Base):
    __tablename__ = "schedules"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    timezone: Mapped[str] = mapped_column(
        String(TIMEZONE_MAX_LENGTH), nullable=False
    )
    # one schedule per owner
    owner_id: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    availabilities: Mapped[list["ScheduleAvailability"]] = relationship(
        "ScheduleAvailability",
        back_populates="schedule",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class ScheduleAvailability(Base):
    __tablename__ = "schedule_availabilities"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    schedule_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("schedules.id", ondelete="CASCADE"), nullable=False
    )
    day_of_week: Mapped[DayOfWeek] = mapped_column(
        SQLEnum(
            DayOfWeek,
            name="day_of_week",
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
    )
    # zero-padded "HH:MM", so string order matches clock order
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)

    schedule: Mapped["Schedule"] = relationship(
        "Schedule", back_populates="availabilities"
    )

    __table_args__ = (
        Index("idx_schedule_availabilities_schedule", "schedule_id"),
        CheckConstraint(
            "start_time < end_time", name="ck_schedule_availabilities_time_order"
        ),
    )
