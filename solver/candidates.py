"""Kandidatensuche und Bewertung für eine einzelne Platzierung.

Zustandslos: alle Funktionen lesen nur aus dem übergebenen Raster und der
Belegungstabelle. Geschrieben wird ausschließlich in AllocationState.commit().

Harte Regeln pro Kandidat (day, slot):
  - Fach hat an diesem Tag noch < max_per_day Stunden
  - Slot liegt im Tages-Präfix, ist kein Recess und noch frei
  - keine dritte Stunde in Folge, kein [S, neu, S]-Sandwich
  - es gibt eine qualifizierte, verfügbare, noch nicht gebuchte Lehrkraft

Bewertung: Zufall (0..jitter) + adjacent_bonus je Nachbar mit demselben Fach
+ first_of_day_bonus wenn das Fach an dem Tag noch nicht vorkommt.
"""

import random
from dataclasses import dataclass
from typing import Optional

from config.schema import DayOfWeek, GeneratorConfig, TimeGridConfig
from models.faculty import Faculty
from models.schedule import StandardSchedule
from models.subject import Subject
from solver.occupancy import FacultyOccupancy


@dataclass(frozen=True)
class Candidate:
    """Eine zulässige Platzierung mit Bewertung."""

    day: DayOfWeek
    slot_index: int
    faculty_id: str
    score: float


def _holds(grid: StandardSchedule, day: DayOfWeek, slot_index: int, subject_id: str) -> bool:
    cell = grid.get_cell(day, slot_index)
    return cell is not None and cell.subject_id == subject_id


def find_faculty(
    faculties: list[Faculty],
    occupancy: FacultyOccupancy,
    subject_id: str,
    standard_id: str,
    day: DayOfWeek,
    slot_index: int,
) -> Optional[Faculty]:
    """Erste passende Lehrkraft in Listenreihenfolge (kein Lastausgleich)."""
    for faculty in faculties:
        if not faculty.is_qualified(subject_id, standard_id):
            continue
        if faculty.is_unavailable(day, slot_index):
            continue
        if occupancy.is_booked(faculty.id, day, slot_index):
            continue
        return faculty
    return None


def score_candidate(
    prev_same: bool,
    next_same: bool,
    lectures_on_day: int,
    rules: GeneratorConfig,
    rng: random.Random,
) -> float:
    """Bewertet einen zulässigen Slot. Höher = besser."""
    score = rng.uniform(0.0, rules.jitter)
    if prev_same:
        score += rules.adjacent_bonus
    if next_same:
        score += rules.adjacent_bonus
    if lectures_on_day == 0:
        score += rules.first_of_day_bonus
    return score


def find_candidates(
    grid: StandardSchedule,
    occupancy: FacultyOccupancy,
    subject: Subject,
    faculties: list[Faculty],
    time_grid: TimeGridConfig,
    rules: GeneratorConfig,
    rng: random.Random,
) -> list[Candidate]:
    """Alle zulässigen (day, slot, faculty)-Kandidaten über die ganze Woche."""
    candidates: list[Candidate] = []
    standard_id = grid.standard_id

    for day_config in time_grid.active_days():
        day = day_config.day
        on_day = grid.cells_for_subject(day, subject.id)
        if on_day >= rules.max_per_day:
            continue

        for slot in time_grid.slots_for_day(day_config):
            if slot.is_recess:
                continue
            idx = slot.index
            if grid.get_cell(day, idx) is not None:
                continue

            prev_same = _holds(grid, day, idx - 1, subject.id)
            next_same = _holds(grid, day, idx + 1, subject.id)
            # Dritte Stunde in Folge
            if prev_same and _holds(grid, day, idx - 2, subject.id):
                continue
            # Lücke zwischen zwei gleichen Stunden füllen ergäbe ebenfalls drei in Folge
            if prev_same and next_same:
                continue

            faculty = find_faculty(faculties, occupancy, subject.id, standard_id, day, idx)
            if faculty is None:
                continue

            candidates.append(Candidate(
                day=day,
                slot_index=idx,
                faculty_id=faculty.id,
                score=score_candidate(prev_same, next_same, on_day, rules, rng),
            ))

    return candidates


def select_best(candidates: list[Candidate]) -> Optional[Candidate]:
    """Kandidat mit der höchsten Bewertung (bei Gleichstand der erste)."""
    if not candidates:
        return None
    return max(candidates, key=lambda c: c.score)
