"""Post-Generierung Validierung der fertigen Stundenpläne.

Prüft einen FullSchedule auf Regelverletzungen als Sicherheitsnetz
unabhängig vom Generator. Manuelle Bearbeitungen dürfen Regeln brechen;
der Validator meldet nur, er korrigiert nichts.
"""

from collections import defaultdict
from typing import Literal

from pydantic import BaseModel

from models.schedule import FullSchedule
from models.school_data import SchoolData


class ValidationViolation(BaseModel):
    """Eine einzelne Regelverletzung."""

    severity: Literal["error", "warning"]
    constraint: str      # z.B. "faculty_double_booking"
    description: str
    entity: str          # faculty_id / standard_id / subject_id


class ValidationReport(BaseModel):
    """Ergebnis der Validierung."""

    violations: list[ValidationViolation]
    is_valid: bool       # True wenn keine Errors (Warnings ok)

    def constraints(self, severity: str = "error") -> set[str]:
        """Namen aller verletzten Regeln einer Schwere."""
        return {v.constraint for v in self.violations if v.severity == severity}

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        errors = [v for v in self.violations if v.severity == "error"]
        warnings = [v for v in self.violations if v.severity == "warning"]

        status = (
            "[bold green]✓ VALIDE[/bold green]"
            if self.is_valid
            else "[bold red]✗ VERLETZUNGEN GEFUNDEN[/bold red]"
        )
        lines = [status, f"Fehler: {len(errors)} | Warnungen: {len(warnings)}"]
        console.print(Panel("\n".join(lines), title="Stundenplan-Validierung", border_style="cyan"))

        if not self.violations:
            console.print("[dim]Keine Verletzungen gefunden.[/dim]")
            return

        table = Table(box=box.ROUNDED, show_lines=True)
        table.add_column("Typ", width=8)
        table.add_column("Regel", width=24)
        table.add_column("Entität", width=12)
        table.add_column("Beschreibung")

        for v in self.violations:
            color = "red" if v.severity == "error" else "yellow"
            table.add_row(
                f"[{color}]{v.severity.upper()}[/{color}]",
                v.constraint,
                v.entity,
                v.description,
            )
        console.print(table)


class SolutionValidator:
    """Prüft einen fertigen FullSchedule gegen den Eingabedatensatz."""

    def validate(
        self, schedule: FullSchedule, school_data: SchoolData
    ) -> ValidationReport:
        """Führt alle Validierungschecks durch und gibt einen ValidationReport zurück."""
        violations: list[ValidationViolation] = []

        violations.extend(self._check_structure(schedule, school_data))
        violations.extend(self._check_faculty_double_booking(schedule))
        violations.extend(self._check_daily_cap(schedule, school_data))
        violations.extend(self._check_triple_blocks(schedule))
        violations.extend(self._check_recess(schedule, school_data))
        violations.extend(self._check_qualification(schedule, school_data))
        violations.extend(self._check_unavailable_slots(schedule, school_data))
        violations.extend(self._check_allocation(schedule, school_data))

        has_errors = any(v.severity == "error" for v in violations)
        return ValidationReport(violations=violations, is_valid=not has_errors)

    # ── Einzelne Prüfungen ────────────────────────────────────────────────────

    def _check_structure(
        self, schedule: FullSchedule, school_data: SchoolData
    ) -> list[ValidationViolation]:
        """Genau ein StandardSchedule pro Standard, jeder aktive Tag vorhanden."""
        violations: list[ValidationViolation] = []
        counts: dict[str, int] = defaultdict(int)
        for s in schedule.schedules:
            counts[s.standard_id] += 1
        active_days = [d.day for d in school_data.config.time_grid.active_days()]

        for std in school_data.standards:
            n = counts.get(std.id, 0)
            if n != 1:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="schedule_structure",
                    entity=std.id,
                    description=f"{n} Stundenpläne statt genau einem.",
                ))
        for s in schedule.schedules:
            missing = [d.value for d in active_days if d not in s.days]
            if missing:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="schedule_structure",
                    entity=s.standard_id,
                    description=f"Aktive Tage fehlen: {', '.join(missing)}.",
                ))
        return violations

    def _check_faculty_double_booking(
        self, schedule: FullSchedule
    ) -> list[ValidationViolation]:
        """Keine Lehrkraft darf zur selben Zeit in zwei Standards sein."""
        violations: list[ValidationViolation] = []
        seen: dict[tuple, list[str]] = defaultdict(list)

        for s in schedule.schedules:
            for day, idx, cell in s.occupied():
                seen[(cell.faculty_id, day, idx)].append(s.standard_id)

        for (faculty_id, day, idx), standards in seen.items():
            if len(standards) > 1:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="faculty_double_booking",
                    entity=faculty_id,
                    description=(
                        f"{day.value}, Slot {idx}: gleichzeitig in "
                        f"{', '.join(standards)} eingeplant."
                    ),
                ))
        return violations

    def _check_daily_cap(
        self, schedule: FullSchedule, school_data: SchoolData
    ) -> list[ValidationViolation]:
        """Höchstens max_per_day Stunden desselben Fachs pro Tag."""
        violations: list[ValidationViolation] = []
        cap = school_data.config.generator.max_per_day

        for s in schedule.schedules:
            per_day: dict[tuple, int] = defaultdict(int)
            for day, _, cell in s.occupied():
                per_day[(day, cell.subject_id)] += 1
            for (day, subject_id), n in per_day.items():
                if n > cap:
                    violations.append(ValidationViolation(
                        severity="error",
                        constraint="daily_cap",
                        entity=s.standard_id,
                        description=f"{day.value}: Fach {subject_id} {n}× (max. {cap}).",
                    ))
        return violations

    def _check_triple_blocks(self, schedule: FullSchedule) -> list[ValidationViolation]:
        """Kein Fach drei Slots in Folge. Jede Serie wird einmal gemeldet."""
        violations: list[ValidationViolation] = []
        for s in schedule.schedules:
            for day in s.days:
                # Serien als [subject_id, erster Slot, letzter Slot]
                runs: list[list] = []
                for d, idx, cell in s.occupied():
                    if d != day:
                        continue
                    last = runs[-1] if runs else None
                    if last and last[0] == cell.subject_id and last[2] == idx - 1:
                        last[2] = idx
                    else:
                        runs.append([cell.subject_id, idx, idx])
                for subject_id, first, end in runs:
                    if end - first >= 2:
                        violations.append(ValidationViolation(
                            severity="error",
                            constraint="triple_block",
                            entity=s.standard_id,
                            description=(
                                f"{day.value}: Fach {subject_id} in Slots "
                                f"{first}-{end} hintereinander."
                            ),
                        ))
        return violations

    def _check_recess(
        self, schedule: FullSchedule, school_data: SchoolData
    ) -> list[ValidationViolation]:
        """Recess-Slots bleiben immer frei."""
        violations: list[ValidationViolation] = []
        recess = school_data.config.time_grid.recess_indices
        for s in schedule.schedules:
            for day, idx, cell in s.occupied():
                if idx in recess:
                    violations.append(ValidationViolation(
                        severity="error",
                        constraint="recess_occupied",
                        entity=s.standard_id,
                        description=f"{day.value}, Slot {idx} (Recess): {cell.subject_id}.",
                    ))
        return violations

    def _check_qualification(
        self, schedule: FullSchedule, school_data: SchoolData
    ) -> list[ValidationViolation]:
        """Lehrkraft muss für Fach UND Standard qualifiziert sein."""
        violations: list[ValidationViolation] = []
        faculty_map = {f.id: f for f in school_data.faculties}

        for s in schedule.schedules:
            for day, idx, cell in s.occupied():
                faculty = faculty_map.get(cell.faculty_id)
                if faculty is None or not faculty.is_qualified(cell.subject_id, s.standard_id):
                    violations.append(ValidationViolation(
                        severity="error",
                        constraint="unqualified_faculty",
                        entity=cell.faculty_id,
                        description=(
                            f"{day.value}, Slot {idx}: nicht qualifiziert für "
                            f"{cell.subject_id} in {s.standard_id}."
                        ),
                    ))
        return violations

    def _check_unavailable_slots(
        self, schedule: FullSchedule, school_data: SchoolData
    ) -> list[ValidationViolation]:
        """Keine Lehrkraft darf in gesperrten Slots eingeplant sein."""
        violations: list[ValidationViolation] = []
        faculty_map = {f.id: f for f in school_data.faculties}

        for s in schedule.schedules:
            for day, idx, cell in s.occupied():
                faculty = faculty_map.get(cell.faculty_id)
                if faculty and faculty.is_unavailable(day, idx):
                    violations.append(ValidationViolation(
                        severity="error",
                        constraint="unavailable_slot_violation",
                        entity=cell.faculty_id,
                        description=(
                            f"{day.value}, Slot {idx} ist gesperrt, aber "
                            f"{cell.subject_id} für {s.standard_id} eingeplant."
                        ),
                    ))
        return violations

    def _check_allocation(
        self, schedule: FullSchedule, school_data: SchoolData
    ) -> list[ValidationViolation]:
        """Unterdeckung ist erwartbar und daher nur eine Warnung."""
        violations: list[ValidationViolation] = []
        by_standard = {s.standard_id: s for s in schedule.schedules}

        for subj in school_data.subjects:
            grid = by_standard.get(subj.standard_id)
            got = grid.count_subject(subj.id) if grid else 0
            if got < subj.lectures_per_week:
                violations.append(ValidationViolation(
                    severity="warning",
                    constraint="under_allocation",
                    entity=subj.id,
                    description=(
                        f"{subj.name} ({subj.standard_id}): {got}/{subj.lectures_per_week} "
                        f"verplant."
                    ),
                ))
            elif got > subj.lectures_per_week:
                violations.append(ValidationViolation(
                    severity="warning",
                    constraint="over_allocation",
                    entity=subj.id,
                    description=(
                        f"{subj.name} ({subj.standard_id}): {got}/{subj.lectures_per_week} "
                        f"verplant (manuell ergänzt?)."
                    ),
                ))
        return violations
