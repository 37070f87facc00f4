"""Date ranges for report generation.

``resolve_report_range`` turns the optional ``from``/``to`` query values of a
generation request into an ordered range. It never fails:

* a missing or unparsable ``to`` becomes now,
* a missing or unparsable ``from`` becomes ``to`` minus the lookback window,
* a ``from`` later than ``to`` is swapped with it.

All values are aware UTC datetimes; date-only and naive inputs are read as UTC.
"""
import calendar
import datetime
from dataclasses import dataclass
from typing import Optional, Tuple

from ...common.clock import as_utc, utc_now

DEFAULT_LOOKBACK_DAYS = 30
EARLIEST = datetime.datetime.min.replace(tzinfo=datetime.timezone.utc)


@dataclass(frozen=True)
class ReportRange:
    from_date: datetime.datetime
    to_date: datetime.datetime


def parse_date_or_none(value: Optional[str]) -> Optional[datetime.datetime]:
    """Parse an ISO-8601 date or datetime, or return None if it isn't one."""
    if value is None:
        return None
    text = value.strip()
    if not text:
        return None
    if text[-1] in "Zz":
        text = text[:-1] + "+00:00"
    try:
        return as_utc(datetime.datetime.fromisoformat(text))
    except (ValueError, OverflowError):
        # Overflow: a valid value that leaves the datetime range once shifted to UTC
        return None


def days_before(value: datetime.datetime, days: int) -> datetime.datetime:
    """``value`` minus ``days``, clamped to the earliest representable UTC instant."""
    try:
        return value - datetime.timedelta(days=days)
    except OverflowError:
        return EARLIEST


def resolve_report_range(
    raw_from: Optional[str] = None,
    raw_to: Optional[str] = None,
    *,
    now: Optional[datetime.datetime] = None,
    lookback_days: int = DEFAULT_LOOKBACK_DAYS,
) -> ReportRange:
    to_date = parse_date_or_none(raw_to) or as_utc(now) or utc_now()
    from_date = parse_date_or_none(raw_from) or days_before(to_date, lookback_days)

    if from_date > to_date:
        from_date, to_date = to_date, from_date

    return ReportRange(from_date=from_date, to_date=to_date)


def previous_month_range(now: datetime.datetime) -> Tuple[datetime.datetime, datetime.datetime]:
    """First and last instant of the calendar month before ``now``."""
    now = as_utc(now)
    year, month = (now.year - 1, 12) if now.month == 1 else (now.year, now.month - 1)
    last_day = calendar.monthrange(year, month)[1]
    start = datetime.datetime(year, month, 1, tzinfo=datetime.timezone.utc)
    end = datetime.datetime(year, month, last_day, 23, 59, 59, 999999, tzinfo=datetime.timezone.utc)
    return start, end


def format_period_label(from_date: datetime.datetime, to_date: datetime.datetime) -> str:
    """Human label for a range, e.g. ``January 1 - 31, 2024``."""
    if from_date.year != to_date.year:
        return (
            f"{from_date:%B} {from_date.day}, {from_date.year} - "
            f"{to_date:%B} {to_date.day}, {to_date.year}"
        )
    if from_date.month != to_date.month:
        return f"{from_date:%B} {from_date.day} - {to_date:%B} {to_date.day}, {to_date.year}"
    return f"{from_date:%B} {from_date.day} - {to_date.day}, {to_date.year}"
