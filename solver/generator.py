"""Greedy-Stundenplan-Generator mit gewichteten Heuristiken.

Ablauf pro Standard:
  - Fächer absteigend nach Wochenstunden (häufige Fächer zuerst, stabil)
  - pro fehlender Stunde: alle zulässigen Slots der Woche bewerten,
    den besten übernehmen und die Lehrkraft global buchen
  - findet eine Suche nichts, zählt das gegen das Retry-Budget des Fachs
  - bleibt ein Fach unter Soll, wird das als AllocationShortfall gemeldet,
    der Lauf geht weiter (kein Rollback)

Kein optimaler Solver: keine Rücknahme früherer Platzierungen.
"""

import logging
import random
import time
from typing import Optional

from pydantic import BaseModel

from models.schedule import FullSchedule
from models.school_data import SchoolData
from models.subject import Subject
from models.timeslot import SlotRef
from solver.allocation_state import AllocationState
from solver.candidates import find_candidates, select_best

logger = logging.getLogger(__name__)


# ─── Ergebnis-Modelle ─────────────────────────────────────────────────────────

class AllocationShortfall(BaseModel):
    """Ein Fach, das nicht vollständig verplant werden konnte."""

    standard_id: str
    subject_id: str
    subject_name: str
    allocated: int
    required: int

    @property
    def missing(self) -> int:
        return self.required - self.allocated

    @property
    def message(self) -> str:
        return (
            f"Fach '{self.subject_name}' in Standard {self.standard_id} "
            f"nicht vollständig verplant: {self.allocated}/{self.required}"
        )


class GenerationResult(BaseModel):
    """Ergebnis eines Generator-Laufs."""

    schedule: FullSchedule
    shortfalls: list[AllocationShortfall] = []
    faculty_bookings: dict[str, list[SlotRef]] = {}
    seed: int
    elapsed_seconds: float

    @property
    def is_complete(self) -> bool:
        """True wenn jedes Fach sein Soll erreicht hat."""
        return not self.shortfalls

    def print_rich(self) -> None:
        """Gibt Kurzfassung und Unterdeckungen über Rich aus."""
        from rich.console import Console
        from rich.table import Table
        from rich import box

        console = Console()
        cells = sum(len(s.occupied()) for s in self.schedule.schedules)
        console.print(
            f"[bold]{self.schedule.name}[/bold] | {len(self.schedule.schedules)} Standards | "
            f"{cells} Stunden verplant | Seed {self.seed} | {self.elapsed_seconds:.2f}s"
        )
        if self.is_complete:
            console.print("[green]✓ Alle Fächer vollständig verplant.[/green]")
            return

        table = Table(title="Unterdeckung", box=box.ROUNDED)
        table.add_column("Standard")
        table.add_column("Fach")
        table.add_column("Ist/Soll", justify="right")
        table.add_column("Fehlt", justify="right")
        for s in self.shortfalls:
            table.add_row(
                s.standard_id, s.subject_name,
                f"{s.allocated}/{s.required}", f"[red]{s.missing}[/red]",
            )
        console.print(table)


# ─── Generator ────────────────────────────────────────────────────────────────

class ScheduleGenerator:
    """Greedy-Generator für alle Standards eines Datensatzes.

    Verwendung:
        generator = ScheduleGenerator(school_data)
        result = generator.generate(seed=7)
    """

    def __init__(self, school_data: SchoolData) -> None:
        self.data = school_data
        self.config = school_data.config
        self.rules = school_data.config.generator

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def generate(self, seed: Optional[int] = None) -> GenerationResult:
        """Erzeugt einen neuen FullSchedule. Wirft im Normalbetrieb nicht.

        Seed-Priorität: Argument > GeneratorConfig.seed > zufällig.
        """
        if seed is None:
            seed = self.rules.seed
        if seed is None:
            seed = random.SystemRandom().randrange(2**32)
        rng = random.Random(seed)

        t0 = time.time()
        tg = self.config.time_grid
        active_days = [d.day for d in tg.active_days()]
        state = AllocationState([s.id for s in self.data.standards], active_days)
        shortfalls: list[AllocationShortfall] = []

        seen: set[str] = set()
        for standard in self.data.standards:
            # Doppelte IDs teilen sich ein Raster; Fächer nur einmal verplanen
            if standard.id in seen:
                continue
            seen.add(standard.id)
            # Häufige Fächer zuerst; sorted() ist stabil → Eingabereihenfolge bei Gleichstand
            subjects = sorted(
                self.data.subjects_for(standard.id),
                key=lambda s: s.lectures_per_week,
                reverse=True,
            )
            for subject in subjects:
                allocated = self._allocate_subject(state, standard.id, subject, rng)
                if allocated < subject.lectures_per_week:
                    shortfall = AllocationShortfall(
                        standard_id=standard.id,
                        subject_id=subject.id,
                        subject_name=subject.name,
                        allocated=allocated,
                        required=subject.lectures_per_week,
                    )
                    logger.warning(shortfall.message)
                    shortfalls.append(shortfall)

        elapsed = time.time() - t0
        schedule = FullSchedule(schedules=state.schedules())
        logger.info(
            f"Generierung beendet: {len(schedule.schedules)} Standards | "
            f"{len(state.occupancy)} Stunden | {len(shortfalls)} Unterdeckungen | "
            f"Zeit: {elapsed:.2f}s"
        )

        return GenerationResult(
            schedule=schedule,
            shortfalls=shortfalls,
            faculty_bookings=state.occupancy.bookings(),
            seed=seed,
            elapsed_seconds=elapsed,
        )

    # ─── Allokation ───────────────────────────────────────────────────────────

    def _allocate_subject(
        self,
        state: AllocationState,
        standard_id: str,
        subject: Subject,
        rng: random.Random,
    ) -> int:
        """Platziert ein Fach Stunde für Stunde. Gibt die Anzahl verplanter Stunden zurück."""
        allocated = 0
        retries = 0
        grid = state.grid(standard_id)

        while allocated < subject.lectures_per_week and retries < self.rules.max_retries:
            candidates = find_candidates(
                grid,
                state.occupancy,
                subject,
                self.data.faculties,
                self.config.time_grid,
                self.rules,
                rng,
            )
            best = select_best(candidates)
            if best is None:
                retries += 1
                continue

            state.commit(standard_id, subject.id, best.faculty_id, best.day, best.slot_index)
            allocated += 1
            logger.debug(
                f"  {standard_id}: {subject.name} → {best.day.value} Slot {best.slot_index} "
                f"({best.faculty_id}, Score {best.score:.0f})"
            )

        return allocated


def generate_schedule(school_data: SchoolData, seed: Optional[int] = None) -> FullSchedule:
    """Kurzform: nur den FullSchedule erzeugen (Unterdeckungen werden geloggt)."""
    return ScheduleGenerator(school_data).generate(seed=seed).schedule
