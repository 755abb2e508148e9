from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, Optional

from ..core.exceptions import ValidationError

END_OF_DAY = time(23, 59, 59, 999000)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return truncate_to_millis(datetime.now())


def truncate_to_millis(value: datetime) -> datetime:
    """Drop sub-millisecond digits; storage keeps DATETIME(3) and rounds the rest."""
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def parse_datetime(value: Any, field_name: str = "date") -> datetime:
    """Accept a date, a datetime, ``YYYY-MM-DD`` or an ISO-8601 datetime string.

    Offset-aware values are converted to local time and returned naive.
    """

    if value is None or value == "":
        raise ValidationError(f"{field_name} is required")
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValidationError(f"{field_name} is not a valid date: {value!r}") from None
    else:
        raise ValidationError(f"{field_name} is not a valid date: {value!r}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return truncate_to_millis(parsed)


def parse_calendar_day(value: Any, field_name: str = "date") -> date:
    return parse_datetime(value, field_name).date()


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Whole-day interval [00:00:00.000, 23:59:59.999] used for calendar day filtering."""
    return datetime.combine(day, time.min), datetime.combine(day, END_OF_DAY)


def isoformat_or_none(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat(timespec="milliseconds") if value else None
