"""Datenmodell für eine Lehrkraft (Pydantic v2)."""

from typing import Optional

from pydantic import BaseModel

from config.schema import DayOfWeek
from models.timeslot import SlotRef


class Faculty(BaseModel):
    """Repräsentiert eine einzelne Lehrkraft."""

    id: str
    name: str
    email: Optional[str] = None
    subject_ids: list[str] = []          # Unterrichtbare Fächer
    standard_ids: list[str] = []         # Standards, in denen unterrichtet werden darf
    unavailable_slots: list[SlotRef] = []  # Persönliche Sperrzeiten

    def is_qualified(self, subject_id: str, standard_id: str) -> bool:
        """True wenn Fach UND Standard zur Lehrkraft passen."""
        return subject_id in self.subject_ids and standard_id in self.standard_ids

    def is_unavailable(self, day: DayOfWeek, slot_index: int) -> bool:
        return SlotRef(day, slot_index) in self.unavailable_slots
