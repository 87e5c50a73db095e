"""Veränderlicher Zustand eines Generator-Laufs: Raster + Lehrer-Belegung."""

from config.schema import DayOfWeek
from models.schedule import ScheduleCell, StandardSchedule
from solver.occupancy import FacultyOccupancy


class AllocationState:
    """Ausgaberaster aller Standards und die gemeinsame Belegungstabelle.

    Gehört exklusiv einem generate()-Aufruf. Parallele Läufe brauchen je
    eine eigene Instanz, sonst ist die Doppelbuchungs-Freiheit verloren.
    """

    def __init__(self, standard_ids: list[str], active_days: list[DayOfWeek]) -> None:
        self.occupancy = FacultyOccupancy()
        self._grids: dict[str, StandardSchedule] = {}
        for sid in standard_ids:
            self._grids[sid] = StandardSchedule(
                standard_id=sid, days={day: {} for day in active_days}
            )

    def grid(self, standard_id: str) -> StandardSchedule:
        return self._grids[standard_id]

    def commit(
        self,
        standard_id: str,
        subject_id: str,
        faculty_id: str,
        day: DayOfWeek,
        slot_index: int,
    ) -> None:
        """Schreibt die Zelle und bucht die Lehrkraft global."""
        grid = self._grids[standard_id]
        if grid.get_cell(day, slot_index) is not None:
            raise ValueError(
                f"Standard {standard_id}: {day.value} Slot {slot_index} ist bereits belegt"
            )
        self.occupancy.book(faculty_id, day, slot_index)
        grid.set_cell(day, slot_index, ScheduleCell(subject_id=subject_id, faculty_id=faculty_id))

    def schedules(self) -> list[StandardSchedule]:
        """Alle Raster in Standard-Reihenfolge."""
        return list(self._grids.values())
