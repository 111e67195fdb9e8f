import re
from datetime import date, datetime, timedelta
from typing import List, Optional, Tuple

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})")


def normalize_time(value: Optional[str]) -> Optional[str]:
    """Return a zero-padded 24h ``HH:MM`` string, or None when value holds no time."""
    if not value:
        return None
    match = _TIME_RE.match(value.strip())
    if not match:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        return None
    return f"{hours:02d}:{minutes:02d}"


def split_date_time(value: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """
    Split a naive wall-clock string into (``YYYY-MM-DD``, ``HH:MM``).

    Accepts both ``2025-11-13T05:15:00`` and ``2025-11-13 05:15+02:00``; the
    offset, if any, is ignored because the itinerary works in local time.
    """
    if not value:
        return None, None
    value = value.strip()
    if "T" in value:
        date_part, _, time_part = value.partition("T")
    else:
        date_part, _, time_part = value.partition(" ")
    date_part = date_part[:10] if len(date_part) >= 10 else None
    return date_part, normalize_time(time_part)


def parse_date(value) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(str(value).strip()[:10], "%Y-%m-%d").date()


def date_range(start: date, end: date) -> List[date]:
    """Every calendar date from start to end, inclusive. Empty when end < start."""
    days = (end - start).days
    return [start + timedelta(days=offset) for offset in range(days + 1)]


def minutes_of_day(value: str) -> int:
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def format_minutes(total: int) -> str:
    total = max(0, min(total, 23 * 60 + 59))
    return f"{total // 60:02d}:{total % 60:02d}"


def format_duration(seconds: int) -> str:
    """Render seconds the way the distance service does, e.g. ``1 hour 5 mins``."""
    minutes = max(1, round(seconds / 60)) if seconds > 0 else 0
    hours, minutes = divmod(minutes, 60)
    parts = []
    if hours:
        parts.append(f"{hours} hour" + ("s" if hours != 1 else ""))
    if minutes or not hours:
        parts.append(f"{minutes} min" + ("s" if minutes != 1 else ""))
    return " ".join(parts)
