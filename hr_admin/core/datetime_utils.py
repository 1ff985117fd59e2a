from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Any, Optional


def to_datetime_or_none(value: Any) -> Optional[datetime]:
    """Normalize a date-like value to a UTC-aware instant.

    Date-only values ("2024-03-01") become UTC midnight, full timestamps are
    parsed as given (naive ones are taken as UTC). Empty or unparseable
    values yield None instead of raising.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    if len(text) == 10:
        try:
            return datetime.combine(date.fromisoformat(text), time.min, tzinfo=timezone.utc)
        except ValueError:
            return None

    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
