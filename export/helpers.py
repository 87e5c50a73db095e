"""Gemeinsame Hilfsfunktionen für die Darstellung von Stundenplänen."""

from collections import defaultdict
from datetime import date
from typing import Optional

from config.schema import DayOfWeek, SchoolConfig
from models.schedule import FullSchedule, ScheduleCell, StandardSchedule
from models.school_data import SchoolData

RECESS_MARKER = "RECESS"
EMPTY_MARKER = "-"
UNKNOWN = "Unknown"


def today_str() -> str:
    """Gibt das heutige Datum als DD.MM.YYYY zurück."""
    return date.today().strftime("%d.%m.%Y")


def header_row(config: SchoolConfig, first: str = "Time") -> list[str]:
    """Kopfzeile: erste Spalte + ein Eintrag pro aktivem Tag."""
    return [first] + [d.day.value for d in config.time_grid.active_days()]


# ─── Zelleninhalt-Formatierung ────────────────────────────────────────────────

def format_cell(cell: Optional[ScheduleCell], school_data: SchoolData) -> str:
    """"Fach (Lehrkraft)" oder EMPTY_MARKER; unbekannte IDs als 'Unknown'."""
    if cell is None:
        return EMPTY_MARKER
    subject = school_data.get_subject(cell.subject_id)
    faculty = school_data.get_faculty(cell.faculty_id)
    subj_name = subject.name if subject else UNKNOWN
    fac_name = faculty.name if faculty else UNKNOWN
    return f"{subj_name} ({fac_name})"


# ─── Zählungen ────────────────────────────────────────────────────────────────

def count_faculty_hours(schedule: FullSchedule, faculty_id: str) -> int:
    """Stunden einer Lehrkraft über alle Standards."""
    return len(schedule.faculty_slots(faculty_id))


def hours_per_day(
    schedule: FullSchedule, faculty_id: str
) -> dict[DayOfWeek, int]:
    """Stunden einer Lehrkraft je Tag."""
    result: dict[DayOfWeek, int] = defaultdict(int)
    for _, day, _ in schedule.faculty_slots(faculty_id):
        result[day] += 1
    return dict(result)


def count_double_periods(grid: StandardSchedule) -> int:
    """Zählt Doppelstunden (zwei direkt aufeinanderfolgende Slots mit demselben Fach)."""
    total = 0
    for day, slots in grid.days.items():
        for idx, cell in slots.items():
            if cell is None:
                continue
            nxt = grid.get_cell(day, idx + 1)
            if nxt is not None and nxt.subject_id == cell.subject_id:
                total += 1
    return total
