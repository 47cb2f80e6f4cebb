# backend/storefront/services/slots/dates.py
"""
Date handling at the request boundary.

Weekdays are derived from the calendar date alone, so they do not depend
on any timezone. Only "today" depends on the configured timezone.
"""

import re
from datetime import date, datetime
from zoneinfo import ZoneInfo

from ...errors import ValidationError

DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def parse_pickup_date(value: str) -> date:
    """Parse a strict YYYY-MM-DD string."""
    if not isinstance(value, str) or not DATE_RE.fullmatch(value):
        raise ValidationError("Invalid date format. Use YYYY-MM-DD")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError(f"Invalid calendar date: {value}") from None


def now_in(timezone: str) -> datetime:
    return datetime.now(ZoneInfo(timezone))
