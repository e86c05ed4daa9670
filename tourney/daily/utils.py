"""UTC calendar helpers for daily fixtures."""

from __future__ import annotations

import datetime

from tourney.constants import DATE_FORMAT
from tourney.errors import ValidationError


def utc_now() -> datetime.datetime:
    """Return the current time in UTC."""
    return datetime.datetime.now(datetime.timezone.utc)


def today_utc() -> str:
    """Return today's UTC date as YYYY-MM-DD."""
    return utc_now().strftime(DATE_FORMAT)


def yesterday_utc() -> str:
    """Return yesterday's UTC date as YYYY-MM-DD."""
    return (utc_now() - datetime.timedelta(days=1)).strftime(DATE_FORMAT)


def parse_date(value: str) -> datetime.date:
    """Parse a YYYY-MM-DD string or raise ValidationError."""
    try:
        return datetime.datetime.strptime(value, DATE_FORMAT).date()
    except (TypeError, ValueError) as e:
        raise ValidationError("date must be formatted as YYYY-MM-DD") from e


def day_bounds(value: str) -> tuple[datetime.datetime, datetime.datetime]:
    """Return the first and last millisecond of a UTC day."""
    day = parse_date(value)
    start = datetime.datetime.combine(
        day, datetime.time.min, tzinfo=datetime.timezone.utc
    )
    end = datetime.datetime.combine(
        day, datetime.time(23, 59, 59, 999000), tzinfo=datetime.timezone.utc
    )
    return start, end


def fixture_document_id(date: str, slug: str) -> str:
    """Return the document id that makes (date, slug) unique."""
    return f"{date}_{slug}"
