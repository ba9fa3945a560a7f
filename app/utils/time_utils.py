import re

TIME_PATTERN = re.compile(r"^([0-9]|0[0-9]|1[0-9]|2[0-3]):[0-5][0-9]$")


def time_to_int(value: str) -> int:
    """Minutes since midnight for an "H:MM" or "HH:MM" wall-clock string.

    No timezone handling and no format checking; callers match
    TIME_PATTERN first.
    """
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def normalize_time(value: str) -> str:
    hours, minutes = value.split(":")
    return f"{int(hours):02d}:{minutes}"


def is_valid_time(value: str) -> bool:
    return TIME_PATTERN.fullmatch(value) is not None
