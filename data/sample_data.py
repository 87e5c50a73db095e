"""Beispieldaten-Generator für den Lecture-Scheduler.

Erzeugt einen kleinen, aber realistischen Datensatz (Standards 9 und 10,
je mehrere Divisions) aus der Stundentafel in config.defaults.

Absichtliche Engpässe:
  1. Knapper Pool: pro Fach nur so viele Lehrkräfte, wie das Deputat
     (max. 18 Stunden) gerade erfordert
  2. Eingeschränkte Lehrkraft: die English-Lehrkraft ist Montag früh und
     Freitag spät gesperrt
  3. Springer am Listenende: qualifiziert für Mathematics und Science in
     allen Standards, wird aber nur gewählt, wenn alle vorderen belegt sind
"""

import math
import random
from typing import Optional

from config.defaults import SAMPLE_CURRICULUM, color_for
from config.schema import DayOfWeek, SchoolConfig
from models.faculty import Faculty
from models.school_data import SchoolData
from models.standard import Standard
from models.subject import Subject
from models.timeslot import SlotRef

# Maximales Deputat einer Lehrkraft im Beispiel (Stunden/Woche)
_MAX_LOAD = 18

_DIVISIONS = "ABCDEF"

# ─── Namens-Listen ────────────────────────────────────────────────────────────

_FIRST_NAMES = [
    "Aarav", "Anjali", "Bhavesh", "Chetna", "Deepak", "Esha", "Farhan",
    "Gita", "Harsh", "Isha", "Jignesh", "Kavita", "Manoj", "Neha",
    "Nirav", "Pooja", "Rakesh", "Ritu", "Sanjay", "Swati", "Tushar",
    "Usha", "Vikram", "Yamini",
]

_LAST_NAMES = [
    "Patel", "Shah", "Mehta", "Desai", "Joshi", "Trivedi", "Parmar",
    "Pandya", "Bhatt", "Vyas", "Chauhan", "Solanki", "Rana", "Dave",
    "Modi", "Thakkar", "Raval", "Gandhi",
]


def _abbreviation(subject_name: str) -> str:
    """Fach-Kürzel für IDs: "Social Science" → "SOC"."""
    return subject_name.replace(" ", "")[:3].upper()


class SampleDataGenerator:
    """Erzeugt einen vollständigen SchoolData-Datensatz zum Ausprobieren."""

    def __init__(
        self,
        config: SchoolConfig,
        seed: Optional[int] = None,
        divisions: int = 2,
    ) -> None:
        if not 1 <= divisions <= len(_DIVISIONS):
            raise ValueError(f"divisions muss zwischen 1 und {len(_DIVISIONS)} liegen")
        self.config = config
        self.rng = random.Random(seed)
        self.divisions = divisions
        self._used_names: set[str] = set()

    # ─── Standards ────────────────────────────────────────────────────────────

    def _generate_standards(self) -> list[Standard]:
        standards = []
        for grade in sorted(SAMPLE_CURRICULUM):
            for division in _DIVISIONS[:self.divisions]:
                standards.append(Standard(
                    id=f"{grade}{division}",
                    grade=grade,
                    medium=self.config.medium,
                    division=division,
                ))
        return standards

    # ─── Fächer ───────────────────────────────────────────────────────────────

    def _generate_subjects(self, standards: list[Standard]) -> list[Subject]:
        """Ein Subject pro (Standard, Fach der Stundentafel)."""
        subjects = []
        for std in standards:
            for pos, (name, hours) in enumerate(SAMPLE_CURRICULUM[std.grade].items()):
                subjects.append(Subject(
                    id=f"{std.id}-{_abbreviation(name)}",
                    name=name,
                    standard_id=std.id,
                    lectures_per_week=hours,
                    color=color_for(pos),
                ))
        return subjects

    # ─── Lehrkräfte ───────────────────────────────────────────────────────────

    def _make_name(self) -> str:
        while True:
            name = f"{self.rng.choice(_FIRST_NAMES)} {self.rng.choice(_LAST_NAMES)}"
            if name not in self._used_names:
                self._used_names.add(name)
                return name

    def _make_faculty(self, number: int, subject_ids: list[str]) -> Faculty:
        name = self._make_name()
        email = name.lower().replace(" ", ".") + "@school.example"
        return Faculty(
            id=f"F{number:02d}",
            name=name,
            email=email,
            subject_ids=subject_ids,
        )

    def _generate_faculties(self, subjects: list[Subject]) -> list[Faculty]:
        """Verteilt jedes Fach auf so wenige Lehrkräfte wie das Deputat zulässt."""
        by_name: dict[str, list[Subject]] = {}
        for subj in subjects:
            by_name.setdefault(subj.name, []).append(subj)

        faculties: list[Faculty] = []
        for name, group in by_name.items():
            total = sum(s.lectures_per_week for s in group)
            n_faculty = max(1, math.ceil(total / _MAX_LOAD))
            # Reihum: Standard i geht an Lehrkraft i % n
            buckets: list[list[str]] = [[] for _ in range(n_faculty)]
            for i, subj in enumerate(group):
                buckets[i % n_faculty].append(subj.id)
            for bucket in buckets:
                faculties.append(self._make_faculty(len(faculties) + 1, bucket))

        # Engpass 2: English-Lehrkraft mit Sperrzeiten
        english_ids = {s.id for s in by_name.get("English", [])}
        for i, fac in enumerate(faculties):
            if english_ids & set(fac.subject_ids):
                faculties[i] = fac.model_copy(update={"unavailable_slots": [
                    SlotRef(DayOfWeek.MONDAY, 0),
                    SlotRef(DayOfWeek.MONDAY, 1),
                    SlotRef(DayOfWeek.FRIDAY, 4),
                    SlotRef(DayOfWeek.FRIDAY, 5),
                ]})
                break

        # Engpass 3: Springer am Ende der Liste
        floater_subjects = [
            s.id for s in subjects if s.name in ("Mathematics", "Science")
        ]
        faculties.append(self._make_faculty(len(faculties) + 1, floater_subjects))
        return faculties

    # ─── Vollständiger Datensatz ──────────────────────────────────────────────

    def generate(self) -> SchoolData:
        """Erzeugt den Datensatz; standard_ids der Lehrkräfte werden abgeleitet."""
        standards = self._generate_standards()
        subjects = self._generate_subjects(standards)
        faculties = self._generate_faculties(subjects)
        data = SchoolData(
            config=self.config,
            standards=standards,
            subjects=subjects,
            faculties=faculties,
        )
        return data.with_derived_faculty_standards()

    # ─── Ausgabe ──────────────────────────────────────────────────────────────

    def print_summary(self, data: SchoolData) -> None:
        """Gibt eine Rich-Tabelle mit Übersicht der erzeugten Daten aus."""
        from rich.console import Console
        from rich.table import Table
        from rich import box

        console = Console()
        table = Table(title="Erzeugte Beispieldaten", box=box.ROUNDED)
        table.add_column("Kategorie", style="bold cyan")
        table.add_column("Anzahl", justify="right")
        table.add_column("Details")

        need = sum(s.lectures_per_week for s in data.subjects)
        restricted = sum(1 for f in data.faculties if f.unavailable_slots)
        table.add_row("Standards", str(len(data.standards)),
                      f"{len({s.grade for s in data.standards})} Stufen")
        table.add_row("Fächer", str(len(data.subjects)), f"{need} Stunden/Woche")
        table.add_row("Lehrkräfte", str(len(data.faculties)),
                      f"{restricted} mit Sperrzeiten")

        console.print(table)
