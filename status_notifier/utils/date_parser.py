"""Date parsing and cutoff helpers for the project board query."""

import calendar
from datetime import datetime, timezone

DEFAULT_LOOKBACK_MONTHS = 6


def parse_date_input(date_str: str) -> datetime:
    """Parse a user supplied date into a UTC datetime.

    Supports:
    - ISO dates: 2024-01-01, 2024-01-01T10:00:00Z
    - Slash dates: 2024/01/01

    Args:
        date_str: Date string to parse

    Returns:
        Parsed datetime object (UTC)

    Raises:
        ValueError: If date format is not recognized
    """
    formats = [
        "%Y-%m-%d",  # 2024-01-01
        "%Y-%m-%dT%H:%M:%SZ",  # 2024-01-01T10:00:00Z
        "%Y-%m-%dT%H:%M:%S",  # 2024-01-01T10:00:00
        "%Y/%m/%d",  # 2024/01/01
    ]

    for fmt in formats:
        try:
            return datetime.strptime(date_str, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue

    raise ValueError(
        f"Unable to parse date '{date_str}'. "
        f"Supported formats include: YYYY-MM-DD, YYYY-MM-DDTHH:MM:SSZ, YYYY/MM/DD"
    )


def months_ago(months: int, now: datetime | None = None) -> datetime:
    """Step back a number of calendar months from now.

    The day of month is clamped to the length of the target month, so
    31 August minus six months is 28 (or 29) February.

    Args:
        months: Number of months to go back (positive)
        now: Reference time, defaults to the current UTC time

    Returns:
        Datetime representing the cutoff

    Raises:
        ValueError: If months is not a positive integer
    """
    if months <= 0:
        raise ValueError("Months must be a positive integer")

    reference = now or datetime.now(timezone.utc)
    month_index = reference.year * 12 + (reference.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(reference.day, calendar.monthrange(year, month)[1])
    return reference.replace(year=year, month=month, day=day)


def resolve_cutoff(
    updated_after: str | None = None,
    last_months: int | None = None,
    now: datetime | None = None,
) -> datetime:
    """Work out the "updated on or after" bound for the board query.

    Args:
        updated_after: Absolute date string (wins when given)
        last_months: Relative lookback in months
        now: Reference time for the relative lookback

    Returns:
        Cutoff datetime

    Raises:
        ValueError: If both options are supplied or a value is invalid
    """
    if updated_after is not None and last_months is not None:
        raise ValueError(
            "Cannot combine --updated-after with --last-months; pick one"
        )

    if updated_after is not None:
        try:
            return parse_date_input(updated_after)
        except ValueError as e:
            raise ValueError(f"Invalid --updated-after date: {e}") from e

    return months_ago(
        last_months if last_months is not None else DEFAULT_LOOKBACK_MONTHS, now
    )


def format_datetime_for_github(dt: datetime) -> str:
    """Format datetime for GitHub search queries.

    Args:
        dt: Datetime to format

    Returns:
        ISO formatted date string for GitHub search
    """
    return dt.strftime("%Y-%m-%d")
