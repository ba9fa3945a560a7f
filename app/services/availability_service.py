from collections.abc import Sequence

from pydantic import ValidationError
from pydantic_core import ErrorDetails

from app.schemas.common import ValidationErrorDetail
from app.schemas.schedule import AvailabilityBase, ScheduleForm
from app.utils.time_utils import time_to_int

OVERLAP_MESSAGE = "Availability overlaps with another"
ORDER_MESSAGE = "End time must be after start time"


def find_availability_violations(
    availabilities: Sequence[AvailabilityBase],
) -> dict[int, list[str]]:
    """Map each offending index to its violation messages.

    Two windows conflict when they share a weekday and their half-open
    intervals intersect; touching endpoints do not conflict. Every window
    must also end strictly after it starts. An empty mapping means the
    list is valid.
    """
    bounds = [
        (a.day_of_week, time_to_int(a.start_time), time_to_int(a.end_time))
        for a in availabilities
    ]
    violations: dict[int, list[str]] = {}

    for index, (day, start, end) in enumerate(bounds):
        messages: list[str] = []

        overlaps = any(
            other_index != index
            and other_day == day
            and other_start < end
            and other_end > start
            for other_index, (other_day, other_start, other_end) in enumerate(bounds)
        )
        if overlaps:
            messages.append(OVERLAP_MESSAGE)

        if start >= end:
            messages.append(ORDER_MESSAGE)

        if messages:
            violations[index] = messages

    return violations


def _format_error(error: ErrorDetails) -> ValidationErrorDetail:
    field = ".".join(str(part) for part in error["loc"]) or "body"

    if error["type"] == "value_error" and "ctx" in error:
        message = str(error["ctx"]["error"])
    else:
        message = error["msg"]

    return ValidationErrorDetail(
        field=field, message=message, invalid_value=error.get("input")
    )


def validate_schedule_payload(
    unsafe_data: object,
) -> tuple[ScheduleForm | None, list[ValidationErrorDetail]]:
    """Shared gate for the editor and the save path.

    Format errors are reported first; the overlap rule only runs on a
    well-formed payload.
    """
    try:
        form = ScheduleForm.model_validate(unsafe_data)
    except ValidationError as e:
        return None, [_format_error(error) for error in e.errors()]

    violations = find_availability_violations(form.availabilities)
    if violations:
        return None, [
            ValidationErrorDetail(field=f"availabilities.{index}", message=message)
            for index, messages in violations.items()
            for message in messages
        ]

    return form, []
