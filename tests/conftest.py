"""Gemeinsame Fixtures: kleine, handgebaute Datensätze für schnelle Tests."""

import pytest

from config.schema import (
    DayConfig,
    DayOfWeek,
    GeneratorConfig,
    SchoolConfig,
    TimeGridConfig,
    TimeSlot,
)
from models.faculty import Faculty
from models.school_data import SchoolData
from models.standard import Standard
from models.subject import Subject


# ─── Hilfsfunktionen ──────────────────────────────────────────────────────────

def build_config(
    active_days: int = 5,
    n_slots: int = 6,
    lecture_count: int = 6,
    recess: tuple[int, ...] = (2,),
    **generator,
) -> SchoolConfig:
    """Zeitraster mit n_slots Slots, die ersten active_days Wochentage aktiv."""
    slots = [
        TimeSlot(
            index=i,
            start_time=f"{8 + i:02d}:00",
            end_time=f"{8 + i:02d}:50",
            is_recess=i in recess,
            name="Recess" if i in recess else None,
        )
        for i in range(n_slots)
    ]
    days = [
        DayConfig(day=day, is_active=pos < active_days, lecture_count=lecture_count)
        for pos, day in enumerate(DayOfWeek)
    ]
    return SchoolConfig(
        school_name="Test School",
        time_grid=TimeGridConfig(slots=slots, days=days),
        generator=GeneratorConfig(**generator),
    )


def build_data(
    config: SchoolConfig,
    subjects: list[tuple[str, str, str, int]],
    faculties: list[tuple[str, list[str]]],
) -> SchoolData:
    """Datensatz aus Kurzformen.

    subjects:  (id, name, standard_id, lectures_per_week)
    faculties: (id, subject_ids); standard_ids werden abgeleitet.
    """
    standard_ids: list[str] = []
    for _, _, std_id, _ in subjects:
        if std_id not in standard_ids:
            standard_ids.append(std_id)
    standards = [
        Standard(id=sid, grade=int(sid[:-1]), division=sid[-1]) for sid in standard_ids
    ]
    data = SchoolData(
        config=config,
        standards=standards,
        subjects=[
            Subject(id=sid, name=name, standard_id=std, lectures_per_week=n)
            for sid, name, std, n in subjects
        ],
        faculties=[
            Faculty(id=fid, name=f"Faculty {fid}", subject_ids=subject_ids)
            for fid, subject_ids in faculties
        ],
    )
    return data.with_derived_faculty_standards()


# ─── Fixtures ─────────────────────────────────────────────────────────────────

@pytest.fixture
def school_config() -> SchoolConfig:
    """Mo-Fr, 6 Slots, Recess an Index 2."""
    return build_config()


@pytest.fixture
def mini_data(school_config: SchoolConfig) -> SchoolData:
    """Zwei Standards (9A, 9B), zwei Fächer je Standard, zwei geteilte Lehrkräfte."""
    return build_data(
        school_config,
        subjects=[
            ("9A-MAT", "Mathematics", "9A", 4),
            ("9A-ENG", "English", "9A", 3),
            ("9B-MAT", "Mathematics", "9B", 4),
            ("9B-ENG", "English", "9B", 3),
        ],
        faculties=[
            ("F01", ["9A-MAT", "9B-MAT"]),
            ("F02", ["9A-ENG", "9B-ENG"]),
        ],
    )
