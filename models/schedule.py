"""Stundenplan-Modelle: Zelle, Wochenraster pro Standard, Gesamtplan (Pydantic v2)."""

import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from config.schema import DayOfWeek

DEFAULT_SCHEDULE_NAME = "Generierter Stundenplan"


class ScheduleCell(BaseModel):
    """Eine belegte Stunde: Fach + Lehrkraft."""

    subject_id: str
    faculty_id: str


class StandardSchedule(BaseModel):
    """Wochenraster eines Standards: Tag → Slot-Index → Zelle oder leer.

    Fehlende Slot-Indizes und None bedeuten beide "frei".
    """

    standard_id: str
    days: dict[DayOfWeek, dict[int, Optional[ScheduleCell]]] = {}

    def get_cell(self, day: DayOfWeek, slot_index: int) -> Optional[ScheduleCell]:
        return self.days.get(day, {}).get(slot_index)

    def set_cell(
        self, day: DayOfWeek, slot_index: int, cell: Optional[ScheduleCell]
    ) -> None:
        self.days.setdefault(day, {})[slot_index] = cell

    def cells_for_subject(self, day: DayOfWeek, subject_id: str) -> int:
        """Anzahl Stunden eines Fachs an einem Tag."""
        return sum(
            1 for c in self.days.get(day, {}).values()
            if c is not None and c.subject_id == subject_id
        )

    def occupied(self) -> list[tuple[DayOfWeek, int, ScheduleCell]]:
        """Alle belegten Zellen als (day, slot_index, cell), nach Slot sortiert."""
        result = []
        for day, slots in self.days.items():
            for idx in sorted(slots):
                cell = slots[idx]
                if cell is not None:
                    result.append((day, idx, cell))
        return result

    def count_subject(self, subject_id: str) -> int:
        """Wochenstunden eines Fachs in diesem Raster."""
        return sum(1 for _, _, c in self.occupied() if c.subject_id == subject_id)


def _new_id() -> str:
    return uuid.uuid4().hex


def _now() -> datetime:
    return datetime.now(timezone.utc)


class FullSchedule(BaseModel):
    """Versionierter Gesamtplan: ein StandardSchedule pro Standard."""

    id: str = Field(default_factory=_new_id)
    name: str = DEFAULT_SCHEDULE_NAME
    created_at: datetime = Field(default_factory=_now)
    schedules: list[StandardSchedule] = []

    def get_schedule(self, standard_id: str) -> StandardSchedule:
        """StandardSchedule eines Standards; KeyError wenn unbekannt."""
        for s in self.schedules:
            if s.standard_id == standard_id:
                return s
        raise KeyError(f"Kein Stundenplan für Standard '{standard_id}'")

    # ─── Manuelle Bearbeitung ───
    # Überschreibt eine Zelle direkt; Qualifikation wird hier nicht geprüft.

    def set_cell(
        self,
        standard_id: str,
        day: DayOfWeek,
        slot_index: int,
        cell: Optional[ScheduleCell],
    ) -> None:
        self.get_schedule(standard_id).set_cell(day, slot_index, cell)

    def clear_cell(self, standard_id: str, day: DayOfWeek, slot_index: int) -> None:
        self.set_cell(standard_id, day, slot_index, None)

    def faculty_slots(self, faculty_id: str) -> list[tuple[str, DayOfWeek, int]]:
        """Alle (standard_id, day, slot_index) an denen eine Lehrkraft eingeplant ist."""
        return [
            (s.standard_id, day, idx)
            for s in self.schedules
            for day, idx, cell in s.occupied()
            if cell.faculty_id == faculty_id
        ]
