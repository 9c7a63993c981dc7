"""Daily and periodic aggregation of entries.

Days are compared as ``YYYY-MM-DD`` strings taken from the stored entry date.
No timezone conversion happens anywhere in this module.
"""

from collections.abc import Iterable
from datetime import date, timedelta
from enum import StrEnum

from calorie_tracker.domain.entries import FOOD, SPORT, DailyStats, Entry, HistoryPoint
from calorie_tracker.domain.errors import ValidationError

DAYS_IN_WEEK = 7
WEEK_BUCKET_WINDOW_DAYS = 60
MONTHS_IN_YEAR = 12


class HistoryRange(StrEnum):
    """History windows offered to clients."""

    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @classmethod
    def parse(cls, value: str) -> "HistoryRange":
        """Return the range for ``value`` or raise a validation error."""
        try:
            return cls(value)
        except ValueError as exc:
            raise ValidationError(f"Unsupported history range: {value!r}") from exc


def aggregate_day(entries: Iterable[Entry]) -> DailyStats:
    """Reduce one day's entries into intake, expenditure and macro totals."""
    items = list(entries)
    calories_in = calories_out = protein = carbs = fat = 0.0
    for entry in items:
        if entry.type == FOOD:
            calories_in += entry.calories
            protein += entry.protein or 0.0
            carbs += entry.carbs or 0.0
            fat += entry.fat or 0.0
        elif entry.type == SPORT:
            calories_out += entry.calories
    return DailyStats(
        calories_in=calories_in,
        calories_out=calories_out,
        protein=protein,
        carbs=carbs,
        fat=fat,
        entries=items,
    )


def aggregate_history(
    entries: Iterable[Entry], history_range: HistoryRange, reference_date: date
) -> list[HistoryPoint]:
    """Bucket entries into a chronological calories in/out series."""
    if history_range is HistoryRange.WEEK:
        buckets = _zero_buckets(_trailing_days(reference_date, DAYS_IN_WEEK))
        key = _day_key
    elif history_range is HistoryRange.YEAR:
        buckets = _zero_buckets(_trailing_months(reference_date, MONTHS_IN_YEAR))
        key = _month_key
    else:
        # Week buckets are created on demand, so empty weeks are absent.
        buckets = None
        key = _iso_week_key

    start = history_window_start(history_range, reference_date)
    totals: dict[str, list[float]] = buckets if buckets is not None else {}
    for entry in entries:
        day = _parse_day(entry.day)
        if day is None or day < start or day > reference_date:
            continue
        bucket_key = key(day)
        if bucket_key not in totals:
            if buckets is not None:
                continue
            totals[bucket_key] = [0.0, 0.0]
        if entry.type == FOOD:
            totals[bucket_key][0] += entry.calories
        elif entry.type == SPORT:
            totals[bucket_key][1] += entry.calories

    return [
        HistoryPoint(date=bucket_key, calories_in=values[0], calories_out=values[1])
        for bucket_key, values in sorted(totals.items())
    ]


def history_window_start(history_range: HistoryRange, reference_date: date) -> date:
    """Return the first calendar day covered by a history window."""
    if history_range is HistoryRange.WEEK:
        return reference_date - timedelta(days=DAYS_IN_WEEK - 1)
    if history_range is HistoryRange.MONTH:
        return reference_date - timedelta(days=WEEK_BUCKET_WINDOW_DAYS - 1)
    year, month = _shift_month(reference_date.year, reference_date.month, -11)
    return date(year, month, 1)


def _zero_buckets(keys: list[str]) -> dict[str, list[float]]:
    return {key: [0.0, 0.0] for key in keys}


def _trailing_days(reference_date: date, days: int) -> list[str]:
    return [
        _day_key(reference_date - timedelta(days=offset))
        for offset in range(days - 1, -1, -1)
    ]


def _trailing_months(reference_date: date, months: int) -> list[str]:
    keys = []
    for offset in range(months - 1, -1, -1):
        year, month = _shift_month(reference_date.year, reference_date.month, -offset)
        keys.append(f"{year:04d}-{month:02d}")
    return keys


def _shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * MONTHS_IN_YEAR + (month - 1) + delta
    return index // MONTHS_IN_YEAR, index % MONTHS_IN_YEAR + 1


def _day_key(day: date) -> str:
    return day.isoformat()


def _month_key(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}"


def _iso_week_key(day: date) -> str:
    iso_year, iso_week, _ = day.isocalendar()
    return f"{iso_year:04d}-W{iso_week:02d}"


def _parse_day(value: str) -> date | None:
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None
