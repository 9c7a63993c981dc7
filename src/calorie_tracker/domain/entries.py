"""Domain models for food and sport entries."""

from dataclasses import dataclass, field
from uuid import UUID

FOOD = "food"
SPORT = "sport"
ENTRY_TYPES = frozenset({FOOD, SPORT})


@dataclass(frozen=True)
class Entry:
    """A logged food or sport record.

    ``calories`` is always positive; the type decides whether it counts as
    intake or expenditure. ``date`` is an opaque calendar string whose first
    ten characters are the ``YYYY-MM-DD`` day.
    """

    id: UUID
    user_id: UUID
    type: str
    name: str
    calories: float
    protein: float
    carbs: float
    fat: float
    weight: float | None
    date: str

    @property
    def day(self) -> str:
        """Return the calendar-date part of the entry timestamp."""
        return self.date[:10]


@dataclass(frozen=True)
class NewEntry:
    """Input for a new entry before it is persisted."""

    type: str
    name: str
    calories: float | None
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    weight: float | None = None
    date: str | None = None


@dataclass(frozen=True)
class EntryChanges:
    """Editable fields of an existing entry."""

    name: str | None = None
    calories: float | None = None
    date: str | None = None

    def as_payload(self) -> dict[str, object]:
        """Return only the fields that were provided."""
        payload: dict[str, object] = {}
        if self.name is not None:
            payload["name"] = self.name
        if self.calories is not None:
            payload["calories"] = self.calories
        if self.date is not None:
            payload["date"] = self.date
        return payload


@dataclass(frozen=True)
class DailyStats:
    """Net intake and expenditure for one calendar date."""

    calories_in: float = 0.0
    calories_out: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    entries: list[Entry] = field(default_factory=list)


@dataclass(frozen=True)
class HistoryPoint:
    """Calories in/out for one history bucket."""

    date: str
    calories_in: float
    calories_out: float
