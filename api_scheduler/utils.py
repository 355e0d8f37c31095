import json
import logging
from datetime import datetime, time, timedelta, timezone
from typing import Dict, Tuple
from api_scheduler.errors import ConfigValidationError, PayloadDecodeError
from api_scheduler.models import RepeatUnit

logger = logging.getLogger("Utils")

START_TIME_FORMATS = ("%H:%M:%S", "%H:%M")

UNIT_DURATIONS = {
    RepeatUnit.HOURS.value: timedelta(hours=1),
    RepeatUnit.MINUTES.value: timedelta(minutes=1),
    RepeatUnit.SECONDS.value: timedelta(seconds=1),
}


def parse_start_time(time_str: str) -> time:
    """Parse a "HH:MM:SS" (or "HH:MM") time of day."""
    for fmt in START_TIME_FORMATS:
        try:
            return datetime.strptime(time_str.strip(), fmt).time()
        except (ValueError, AttributeError):
            continue
    raise ConfigValidationError(f"invalid start time {time_str!r}")


def localize(naive: datetime, tzinfo) -> datetime:
    """Attach a zone to a naive datetime, for both pytz and dateutil zones."""
    if hasattr(tzinfo, "localize"):
        return tzinfo.localize(naive)
    return naive.replace(tzinfo=tzinfo)


def calculate_start(start_time: time, now: datetime, tzinfo) -> Tuple[datetime, timedelta]:
    """
    Calculate the instant a job starts ticking and how long to wait for it.

    The target is today's date (in ``tzinfo``) at ``start_time``. When that
    instant is already behind ``now`` it is shifted by 24 hours exactly once.

    Returns:
        Tuple of (target in UTC, wait duration)
    """
    local_now = now.astimezone(tzinfo)
    target = localize(datetime.combine(local_now.date(), start_time), tzinfo)
    target = target.astimezone(timezone.utc)
    now_utc = now.astimezone(timezone.utc)
    if target < now_utc:
        target += timedelta(hours=24)
    return (target, target - now_utc)


def resolve_interval(repeat_value: int, repeat_unit: str) -> timedelta:
    """Turn a repeat value and unit token into the tick interval."""
    unit = UNIT_DURATIONS.get(repeat_unit)
    if unit is None:
        raise ConfigValidationError(f"invalid repeat unit {repeat_unit!r}")
    if repeat_value <= 0:
        raise ConfigValidationError(f"repeat value must be positive, got {repeat_value}")
    return unit * repeat_value


def decode_payload(blob: str) -> Dict[str, str]:
    """
    Decode the payload blob into request parameters.

    Raises:
        PayloadDecodeError: the blob is not a JSON object of string to string.
    """
    try:
        payload = json.loads(blob)
    except (TypeError, ValueError) as e:
        raise PayloadDecodeError(f"payload is not valid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise PayloadDecodeError("payload is not a JSON object")
    if not all(isinstance(v, str) for v in payload.values()):
        raise PayloadDecodeError("payload values must be strings")
    return payload
