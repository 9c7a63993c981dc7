"""Supabase repository for food and sport entries."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from calorie_tracker.domain.entries import Entry, NewEntry
from calorie_tracker.services.entries import EntryRepository

_TABLE = "entries"


@dataclass
class SupabaseEntryRepository(EntryRepository):
    """Supabase implementation for entry persistence."""

    client: Client

    def insert_entry(self, user_id: UUID, entry: NewEntry) -> Entry:
        """Insert an entry row and return it."""
        response = (
            self.client.table(_TABLE)
            .insert(
                {
                    "user_id": str(user_id),
                    "type": entry.type,
                    "name": entry.name,
                    "calories": entry.calories,
                    "protein": entry.protein,
                    "carbs": entry.carbs,
                    "fat": entry.fat,
                    "weight": entry.weight,
                    "date": entry.date,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create entry")
        return _parse_entry(response.data[0])

    def get_entry(self, entry_id: UUID, user_id: UUID) -> Entry | None:
        """Return an owned entry by id, if present."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("id", str(entry_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def list_entries_for_day(self, user_id: UUID, day: str) -> list[Entry]:
        """Return entries whose date string starts with ``day``."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .like("date", f"{day}%")
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def list_entries_since(self, user_id: UUID, since_day: str) -> list[Entry]:
        """Return entries dated on or after ``since_day``."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .gte("date", since_day)
            .order("date", desc=False)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def update_entry(
        self, entry_id: UUID, user_id: UUID, changes: dict[str, object]
    ) -> Entry | None:
        """Update an owned entry; None when no row matched."""
        response = (
            self.client.table(_TABLE)
            .update(changes)
            .eq("id", str(entry_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def delete_entry(self, entry_id: UUID, user_id: UUID) -> bool:
        """Delete an owned entry; False when no row matched."""
        response = (
            self.client.table(_TABLE)
            .delete()
            .eq("id", str(entry_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)


def _parse_entry(row: dict[str, object]) -> Entry:
    """Parse an entry row into a domain model."""
    weight = row.get("weight")
    return Entry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        type=str(row.get("type", "")),
        name=str(row.get("name", "")),
        calories=float(row.get("calories") or 0.0),
        protein=float(row.get("protein") or 0.0),
        carbs=float(row.get("carbs") or 0.0),
        fat=float(row.get("fat") or 0.0),
        weight=float(weight) if weight is not None else None,
        date=str(row.get("date") or ""),
    )
