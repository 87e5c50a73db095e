"""SchoolData: Vollständiger Eingabedatensatz + Machbarkeits-Check (Pydantic v2)."""

from collections import Counter
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from config.schema import SchoolConfig
from models.faculty import Faculty
from models.standard import Standard
from models.subject import Subject


class FeasibilityReport(BaseModel):
    """Ergebnis des Machbarkeits-Checks."""

    is_feasible: bool
    errors: list[str]      # Kritische Probleme (Generierung verweigern)
    warnings: list[str]    # Hinweise (Unterdeckung wahrscheinlich)

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel

        console = Console()
        if self.is_feasible:
            status = "[bold green]✓ GENERIERBAR[/bold green]"
        else:
            status = "[bold red]✗ KONFIGURATION FEHLERHAFT[/bold red]"

        lines = [status]
        if self.errors:
            lines.append("\n[red bold]Fehler (kritisch):[/red bold]")
            for e in self.errors:
                lines.append(f"  [red]• {e}[/red]")
        if self.warnings:
            lines.append("\n[yellow bold]Warnungen:[/yellow bold]")
            for w in self.warnings:
                lines.append(f"  [yellow]• {w}[/yellow]")
        if not self.errors and not self.warnings:
            lines.append("[dim]Keine Probleme gefunden.[/dim]")

        console.print(Panel("\n".join(lines), title="Machbarkeits-Check", border_style="cyan"))


class SchoolData(BaseModel):
    """Vollständiger Datensatz: Standards, Fächer, Lehrkräfte + Konfiguration."""

    config: SchoolConfig
    standards: list[Standard] = []
    subjects: list[Subject] = []
    faculties: list[Faculty] = []
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    data_version: str = "1.0"

    # ─── Lookups ───

    def get_standard(self, standard_id: str) -> Optional[Standard]:
        return next((s for s in self.standards if s.id == standard_id), None)

    def get_subject(self, subject_id: str) -> Optional[Subject]:
        return next((s for s in self.subjects if s.id == subject_id), None)

    def get_faculty(self, faculty_id: str) -> Optional[Faculty]:
        return next((f for f in self.faculties if f.id == faculty_id), None)

    def subjects_for(self, standard_id: str) -> list[Subject]:
        """Alle Fächer eines Standards in Eingabereihenfolge."""
        return [s for s in self.subjects if s.standard_id == standard_id]

    # ─── Abgeleitete Qualifikation ───

    def with_derived_faculty_standards(self) -> "SchoolData":
        """Kopie, in der standard_ids jeder Lehrkraft = Standards ihrer Fächer.

        Fächer mit unbekannter ID werden dabei ignoriert.
        """
        subject_map = {s.id: s for s in self.subjects}
        faculties = []
        for f in self.faculties:
            standard_ids: list[str] = []
            for sid in f.subject_ids:
                subj = subject_map.get(sid)
                if subj and subj.standard_id not in standard_ids:
                    standard_ids.append(subj.standard_id)
            faculties.append(f.model_copy(update={"standard_ids": standard_ids}))
        return self.model_copy(update={"faculties": faculties})

    # ─── Übersicht ───

    def summary(self) -> str:
        """Kurze Übersicht über den Datensatz."""
        tg = self.config.time_grid
        total_need = sum(s.lectures_per_week for s in self.subjects)
        lines = [
            f"Schule: {self.config.school_name} ({self.config.medium.value} Medium)",
            f"Standards: {len(self.standards)}",
            f"Fächer: {len(self.subjects)}",
            f"Lehrkräfte: {len(self.faculties)}",
            f"Aktive Tage: {len(tg.active_days())} | Slots: {len(tg.slots)} "
            f"({len(tg.recess_indices)} Recess)",
            f"Gesamtbedarf: {total_need} Stunden/Woche",
        ]
        return "\n".join(lines)

    # ─── Machbarkeits-Check ───

    def validate_feasibility(self) -> FeasibilityReport:
        """Prüft die Eingabe bevor der Generator aufgerufen wird.

        Fehler (Generierung verweigern):
        1. Keine Fächer / keine aktiven Tage
        2. Doppelte IDs
        3. Fach verweist auf unbekannten Standard, Stundenzahl ≤ 0
        4. Lehrkraft verweist auf unbekanntes Fach / unbekannten Standard

        Warnungen (Generator läuft, meldet Unterdeckung):
        5. Fach ohne qualifizierte Lehrkraft
        6. Fach braucht mehr Stunden als Tageslimit × aktive Tage zulässt
        7. Sperrzeit an inaktivem Tag oder außerhalb der Slot-Abfolge
        8. Standard ohne Fächer
        9. Bedarf über den Unterrichtsslots der Woche (Standard oder einzelnes Fach)
        """
        errors: list[str] = []
        warnings: list[str] = []

        tg = self.config.time_grid
        gen = self.config.generator
        active_days = tg.active_days()

        # ── 1. Grundvoraussetzungen ──────────────────────────────────────
        if not self.subjects:
            errors.append("Keine Fächer konfiguriert – bitte zuerst Fächer anlegen.")
        if not active_days:
            errors.append("Kein Wochentag ist aktiv.")

        # ── 2. Eindeutige IDs ────────────────────────────────────────────
        for label, ids in (
            ("Standard", [s.id for s in self.standards]),
            ("Fach", [s.id for s in self.subjects]),
            ("Lehrkraft", [f.id for f in self.faculties]),
        ):
            for dup, n in Counter(ids).items():
                if n > 1:
                    errors.append(f"{label}-ID '{dup}' ist {n}× vergeben.")

        standard_ids = {s.id for s in self.standards}
        subject_map = {s.id: s for s in self.subjects}

        # ── 3. Fächer ────────────────────────────────────────────────────
        # Kapazität pro Standard und Woche für ein einzelnes Fach
        per_week_cap = gen.max_per_day * len(active_days)
        for subj in self.subjects:
            if subj.standard_id not in standard_ids:
                errors.append(
                    f"Fach '{subj.name}' ({subj.id}): unbekannter Standard "
                    f"'{subj.standard_id}'."
                )
            if subj.lectures_per_week <= 0:
                errors.append(
                    f"Fach '{subj.name}' ({subj.id}): Stunden pro Woche muss > 0 sein "
                    f"(ist {subj.lectures_per_week})."
                )
            elif subj.lectures_per_week > per_week_cap:
                warnings.append(
                    f"Fach '{subj.name}' ({subj.id}): {subj.lectures_per_week} Stunden "
                    f"gefordert, aber max. {gen.max_per_day}/Tag × {len(active_days)} "
                    f"Tage = {per_week_cap} möglich."
                )

        # ── 4. Lehrkräfte ────────────────────────────────────────────────
        day_limits = {d.day: d.lecture_count for d in active_days}
        for fac in self.faculties:
            for sid in fac.subject_ids:
                if sid not in subject_map:
                    errors.append(
                        f"Lehrkraft {fac.id} ({fac.name}): unbekanntes Fach '{sid}'."
                    )
            for std_id in fac.standard_ids:
                if std_id not in standard_ids:
                    errors.append(
                        f"Lehrkraft {fac.id} ({fac.name}): unbekannter Standard '{std_id}'."
                    )
            # ── 7. Sperrzeiten ───────────────────────────────────────────
            for ref in fac.unavailable_slots:
                if ref.day not in day_limits:
                    warnings.append(
                        f"Lehrkraft {fac.id}: Sperrzeit {ref} liegt auf einem inaktiven Tag."
                    )
                elif not 0 <= ref.slot_index < day_limits[ref.day]:
                    warnings.append(
                        f"Lehrkraft {fac.id}: Sperrzeit {ref} liegt außerhalb der "
                        f"{day_limits[ref.day]} Slots dieses Tages."
                    )

        # ── 5. Qualifizierte Lehrkraft pro Fach ──────────────────────────
        for subj in self.subjects:
            if not any(f.is_qualified(subj.id, subj.standard_id) for f in self.faculties):
                warnings.append(
                    f"Fach '{subj.name}' ({subj.id}): keine qualifizierte Lehrkraft "
                    f"für Standard '{subj.standard_id}' – wird nicht verplant."
                )

        # ── 6. Raster-Kapazität pro Standard ─────────────────────────────
        teachable = sum(
            1 for d in active_days for s in tg.slots_for_day(d) if not s.is_recess
        )
        for std in self.standards:
            subjects = self.subjects_for(std.id)
            if not subjects:
                warnings.append(
                    f"Standard {std.name} ({std.id}): keine Fächer – Raster bleibt leer."
                )
                continue
            need = sum(max(s.lectures_per_week, 0) for s in subjects)
            if need > teachable:
                warnings.append(
                    f"Standard {std.name} ({std.id}): {need} Stunden Bedarf, "
                    f"aber nur {teachable} Unterrichtsslots pro Woche."
                )
            for subj in subjects:
                if subj.lectures_per_week > teachable:
                    warnings.append(
                        f"Fach '{subj.name}' ({subj.id}): {subj.lectures_per_week} Stunden "
                        f"gefordert, aber nur {teachable} Unterrichtsslots pro Woche."
                    )

        return FeasibilityReport(
            is_feasible=len(errors) == 0,
            errors=errors,
            warnings=warnings,
        )

    # ─── Persistenz ────────────────────────────────────────────────────────

    def save_json(self, path: Path) -> None:
        """Speichert den kompletten Datensatz als JSON-Datei."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        now = datetime.now(timezone.utc)
        updated = self.model_copy(update={
            "modified_at": now,
            "created_at": self.created_at or now,
        })
        with open(path, "w", encoding="utf-8") as f:
            f.write(updated.model_dump_json(indent=2))

    @classmethod
    def load_json(cls, path: Path) -> "SchoolData":
        """Lädt einen Datensatz aus einer JSON-Datei."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"JSON-Datei nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate_json(f.read())
