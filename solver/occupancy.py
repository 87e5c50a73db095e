"""Belegungstabelle der Lehrkräfte für genau einen Generator-Lauf.

Schlüssel (faculty_id, day, slot_index) → gebucht. Die Tabelle gilt über
alle Standards hinweg und wird nach dem Lauf verworfen.
"""

from collections import defaultdict

from config.schema import DayOfWeek
from models.timeslot import SlotRef


class FacultyOccupancy:
    """Globale Lehrer-Buchungen eines Laufs (kein Teilen zwischen Läufen)."""

    def __init__(self) -> None:
        self._booked: set[tuple[str, DayOfWeek, int]] = set()

    def is_booked(self, faculty_id: str, day: DayOfWeek, slot_index: int) -> bool:
        return (faculty_id, day, slot_index) in self._booked

    def book(self, faculty_id: str, day: DayOfWeek, slot_index: int) -> None:
        """Bucht eine Lehrkraft. Doppelbuchung ist ein Programmierfehler."""
        key = (faculty_id, day, slot_index)
        if key in self._booked:
            raise ValueError(
                f"Lehrkraft {faculty_id} ist {day.value} Slot {slot_index} bereits gebucht"
            )
        self._booked.add(key)

    def bookings(self) -> dict[str, list[SlotRef]]:
        """faculty_id → sortierte Liste der gebuchten Slots."""
        day_order = {d: i for i, d in enumerate(DayOfWeek)}
        result: dict[str, list[SlotRef]] = defaultdict(list)
        for faculty_id, day, idx in self._booked:
            result[faculty_id].append(SlotRef(day, idx))
        return {
            fid: sorted(refs, key=lambda r: (day_order[r.day], r.slot_index))
            for fid, refs in sorted(result.items())
        }

    def __len__(self) -> int:
        return len(self._booked)

    def __repr__(self) -> str:
        return f"FacultyOccupancy({len(self._booked)} Buchungen)"
