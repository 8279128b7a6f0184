"""Date parsing and calendar arithmetic for ledger filters and analytics.

All instants are timezone-aware UTC; calendar days are UTC days.
"""

import calendar
from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta

from protean.exceptions import ValidationError


def parse_instant(value, field="date"):
    """Parse an ISO-8601 date or datetime string into an aware UTC datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    else:
        try:
            parsed = datetime.fromisoformat(str(value).strip())
        except ValueError:
            raise ValidationError({field: [f"Invalid date: {value}"]}) from None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def end_of_day(moment):
    """Last representable instant of the calendar day containing ``moment``."""
    return datetime.combine(moment.date(), time.max, tzinfo=UTC)


def shift_months(moment, months):
    """Move ``moment`` by whole calendar months, clamping the day to the target month's length."""
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def shift_years(moment, years):
    return shift_months(moment, 12 * years)


def last_days(today, count):
    """``count`` consecutive calendar days ending with ``today``, oldest first."""
    return [today - timedelta(days=offset) for offset in range(count - 1, -1, -1)]


@dataclass(frozen=True)
class DateRange:
    """Inclusive instant range; either bound may be open."""

    start: datetime | None = None
    end: datetime | None = None

    @classmethod
    def parse(cls, start=None, end=None):
        """Build a range from request values; ``end`` covers its whole calendar day."""
        start_at = parse_instant(start, field="start")
        end_at = parse_instant(end, field="end")
        if end_at is not None:
            end_at = end_of_day(end_at)
        return cls(start=start_at, end=end_at)

    @property
    def is_open(self):
        return self.start is None and self.end is None
