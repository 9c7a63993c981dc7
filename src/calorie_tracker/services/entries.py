"""Entry logging and read-back service."""

import logging
import re
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Protocol
from uuid import UUID

from calorie_tracker.domain.entries import (
    ENTRY_TYPES,
    DailyStats,
    Entry,
    EntryChanges,
    HistoryPoint,
    NewEntry,
)
from calorie_tracker.domain.errors import NotFoundError, ValidationError
from calorie_tracker.domain.targets import DailySummary
from calorie_tracker.services.derivation import summarize_day
from calorie_tracker.services.stats import (
    HistoryRange,
    aggregate_day,
    aggregate_history,
    history_window_start,
)
from calorie_tracker.services.users import ProfileService

_logger = logging.getLogger(__name__)

_DAY_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class EntryRepository(Protocol):
    """Persistence interface for food and sport entries."""

    def insert_entry(self, user_id: UUID, entry: NewEntry) -> Entry:
        """Persist a new entry and return it."""

    def get_entry(self, entry_id: UUID, user_id: UUID) -> Entry | None:
        """Return an entry owned by the user, if present."""

    def list_entries_for_day(self, user_id: UUID, day: str) -> list[Entry]:
        """Return entries whose date falls on ``day`` in storage order."""

    def list_entries_since(self, user_id: UUID, since_day: str) -> list[Entry]:
        """Return entries dated on or after ``since_day``."""

    def update_entry(
        self, entry_id: UUID, user_id: UUID, changes: dict[str, object]
    ) -> Entry | None:
        """Apply changes to an owned entry; None when nothing matched."""

    def delete_entry(self, entry_id: UUID, user_id: UUID) -> bool:
        """Delete an owned entry; False when nothing matched."""


@dataclass
class EntryService:
    """Application service for entries, daily stats and history."""

    repository: EntryRepository
    profile_service: ProfileService

    def add_entry(self, user_id: UUID, entry: NewEntry) -> Entry:
        """Validate and persist a new entry, defaulting its date to now."""
        validate_new_entry(entry)
        if entry.date is None:
            entry = replace(entry, date=datetime.now().isoformat(timespec="seconds"))
        return self.repository.insert_entry(user_id, entry)

    def get_day_stats(self, user_id: UUID, day: str) -> DailyStats:
        """Return totals for a single calendar date."""
        validate_day(day)
        return aggregate_day(self.repository.list_entries_for_day(user_id, day))

    def get_day_summary(self, user_id: UUID, day: str) -> DailySummary:
        """Return a day's stats together with targets and remaining calories."""
        stats = self.get_day_stats(user_id, day)
        return summarize_day(stats, self.profile_service.get_profile(user_id))

    def get_history(
        self, user_id: UUID, history_range: HistoryRange, reference_date: date
    ) -> list[HistoryPoint]:
        """Return the bucketed history series for a trailing window."""
        since = history_window_start(history_range, reference_date)
        entries = self.repository.list_entries_since(user_id, since.isoformat())
        return aggregate_history(entries, history_range, reference_date)

    def update_entry(
        self, entry_id: UUID, user_id: UUID, changes: EntryChanges
    ) -> Entry:
        """Edit name, calories or date of an owned entry."""
        payload = changes.as_payload()
        if not payload:
            raise ValidationError("No fields to update")
        if changes.name is not None and not changes.name.strip():
            raise ValidationError("name must not be empty")
        if changes.calories is not None and changes.calories < 0:
            raise ValidationError("calories must not be negative")
        if changes.date is not None:
            validate_day(changes.date[:10])
        updated = self.repository.update_entry(entry_id, user_id, payload)
        if updated is None:
            raise NotFoundError("Entry not found")
        return updated

    def delete_entry(self, entry_id: UUID, user_id: UUID) -> None:
        """Delete an owned entry."""
        if not self.repository.delete_entry(entry_id, user_id):
            raise NotFoundError("Entry not found")
        _logger.info("Entry deleted: user_id=%s entry_id=%s", user_id, entry_id)


def validate_new_entry(entry: NewEntry) -> None:
    """Raise when type, name or calories are missing or invalid."""
    if entry.type not in ENTRY_TYPES:
        raise ValidationError("type must be 'food' or 'sport'")
    if not entry.name or not entry.name.strip():
        raise ValidationError("name is required")
    if entry.calories is None:
        raise ValidationError("calories is required")
    if entry.calories < 0:
        raise ValidationError("calories must not be negative")
    if min(entry.protein, entry.carbs, entry.fat) < 0:
        raise ValidationError("macros must not be negative")
    if entry.weight is not None and entry.weight <= 0:
        raise ValidationError("weight must be greater than zero")
    if entry.date is not None:
        validate_day(entry.date[:10])


def validate_day(day: str) -> date:
    """Return ``day`` as a date, raising unless it is a ``YYYY-MM-DD`` string.

    Compact and ISO week forms are rejected: stored dates are matched by their
    first ten characters.
    """
    if not isinstance(day, str) or not _DAY_PATTERN.fullmatch(day):
        raise ValidationError(f"Invalid date: {day!r}")
    try:
        return date.fromisoformat(day)
    except ValueError as exc:
        raise ValidationError(f"Invalid date: {day!r}") from exc
