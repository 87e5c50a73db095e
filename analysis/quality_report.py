"""Qualitätsbericht für fertige Stundenpläne.

Analysiert Lehrer-Auslastung und Standard-Qualität und berechnet
zusammenfassende Metriken. Die Lehrkraft-Auswahl des Generators nimmt
immer die erste passende Lehrkraft; der Fairness-Index macht die daraus
entstehende ungleiche Verteilung sichtbar.
"""

from collections import defaultdict

from pydantic import BaseModel

from models.schedule import FullSchedule, StandardSchedule
from models.school_data import SchoolData
from export.helpers import count_double_periods, count_faculty_hours, hours_per_day


# ─── Metriken-Modelle ─────────────────────────────────────────────────────────

class FacultyQualityMetrics(BaseModel):
    """Qualitäts-Metriken für eine einzelne Lehrkraft."""

    faculty_id: str
    name: str
    actual_hours: int
    hours_per_day: dict[str, int]
    free_days: int
    standards_taught: list[str]


class StandardQualityMetrics(BaseModel):
    """Qualitäts-Metriken für einen einzelnen Standard."""

    standard_id: str
    name: str
    total_hours: int
    required_hours: int
    double_periods: int
    subject_spread_score: float  # 0.0–1.0

    @property
    def fulfillment(self) -> float:
        return self.total_hours / self.required_hours if self.required_hours else 1.0


class ScheduleQualityReport(BaseModel):
    """Vollständiger Qualitätsbericht für einen FullSchedule."""

    schedule_name: str
    faculty_metrics: list[FacultyQualityMetrics]
    standard_metrics: list[StandardQualityMetrics]
    workload_fairness_index: float   # Jain's fairness index (1.0 = perfekt)
    fulfillment_rate: float          # 0.0–1.0


# ─── Analyzer ─────────────────────────────────────────────────────────────────

class QualityAnalyzer:
    """Berechnet Qualitätsmetriken für einen fertigen FullSchedule."""

    def analyze(
        self, schedule: FullSchedule, school_data: SchoolData
    ) -> ScheduleQualityReport:
        """Hauptmethode: berechnet alle Metriken und gibt einen Report zurück."""
        faculty_metrics = self._faculty_metrics(schedule, school_data)
        standard_metrics = self._standard_metrics(schedule, school_data)

        # Jain's Fairness Index: (Σ actual_i)² / (n * Σ actual_i²)
        actuals = [m.actual_hours for m in faculty_metrics]
        n = len(actuals)
        sum_a = sum(actuals)
        sum_sq = sum(a * a for a in actuals)
        fairness = (sum_a ** 2) / (n * sum_sq) if sum_sq > 0 else 1.0

        total_required = sum(m.required_hours for m in standard_metrics)
        total_hours = sum(min(m.total_hours, m.required_hours) for m in standard_metrics)
        rate = total_hours / total_required if total_required > 0 else 1.0

        return ScheduleQualityReport(
            schedule_name=schedule.name,
            faculty_metrics=faculty_metrics,
            standard_metrics=standard_metrics,
            workload_fairness_index=round(fairness, 4),
            fulfillment_rate=round(rate, 4),
        )

    def print_rich(self, report: ScheduleQualityReport) -> None:
        """Gibt den Qualitätsbericht formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()

        fairness_color = (
            "green" if report.workload_fairness_index >= 0.95
            else "yellow" if report.workload_fairness_index >= 0.85
            else "red"
        )
        rate_color = (
            "green" if report.fulfillment_rate >= 1.0
            else "yellow" if report.fulfillment_rate >= 0.9
            else "red"
        )
        console.print(Panel(
            f"Plan: [bold]{report.schedule_name}[/bold]\n"
            f"Auslastungs-Fairness (Jain): "
            f"[{fairness_color}]{report.workload_fairness_index:.4f}[/{fairness_color}] "
            f"(1.0 = perfekt)\n"
            f"Erfüllung Soll-Stunden: "
            f"[{rate_color}]{report.fulfillment_rate:.1%}[/{rate_color}]",
            title="Qualitätsbericht – Übersicht",
            border_style="cyan",
        ))

        f_table = Table(title="Lehrer-Auslastung", box=box.ROUNDED)
        f_table.add_column("ID", width=8)
        f_table.add_column("Name", width=25)
        f_table.add_column("Stunden", justify="right", width=8)
        f_table.add_column("Freie Tage", justify="right", width=10)
        f_table.add_column("Standards")
        for m in sorted(report.faculty_metrics, key=lambda x: x.faculty_id):
            f_table.add_row(
                m.faculty_id, m.name, str(m.actual_hours),
                str(m.free_days), ", ".join(m.standards_taught),
            )
        console.print(f_table)

        s_table = Table(title="Standard-Qualität", box=box.ROUNDED)
        s_table.add_column("Standard", width=14)
        s_table.add_column("Ist/Soll", justify="right", width=10)
        s_table.add_column("Doppelstd.", justify="right", width=10)
        s_table.add_column("Spread-Score", justify="right", width=12)
        for m in report.standard_metrics:
            spread_color = (
                "green" if m.subject_spread_score >= 0.7
                else "yellow" if m.subject_spread_score >= 0.4
                else "red"
            )
            s_table.add_row(
                m.name, f"{m.total_hours}/{m.required_hours}", str(m.double_periods),
                f"[{spread_color}]{m.subject_spread_score:.2f}[/{spread_color}]",
            )
        console.print(s_table)

    # ── Private Berechnungen ──────────────────────────────────────────────────

    def _faculty_metrics(
        self, schedule: FullSchedule, school_data: SchoolData
    ) -> list[FacultyQualityMetrics]:
        """Berechnet Metriken für alle Lehrkräfte."""
        active_days = [d.day for d in school_data.config.time_grid.active_days()]
        metrics = []

        for faculty in school_data.faculties:
            per_day = hours_per_day(schedule, faculty.id)
            standards = sorted({sid for sid, _, _ in schedule.faculty_slots(faculty.id)})
            metrics.append(FacultyQualityMetrics(
                faculty_id=faculty.id,
                name=faculty.name,
                actual_hours=count_faculty_hours(schedule, faculty.id),
                hours_per_day={d.value: per_day.get(d, 0) for d in active_days},
                free_days=sum(1 for d in active_days if per_day.get(d, 0) == 0),
                standards_taught=standards,
            ))

        return metrics

    def _standard_metrics(
        self, schedule: FullSchedule, school_data: SchoolData
    ) -> list[StandardQualityMetrics]:
        """Berechnet Metriken für alle Standards."""
        n_days = len(school_data.config.time_grid.active_days())
        metrics = []

        for std in school_data.standards:
            try:
                grid = schedule.get_schedule(std.id)
            except KeyError:
                continue
            required = sum(s.lectures_per_week for s in school_data.subjects_for(std.id))
            metrics.append(StandardQualityMetrics(
                standard_id=std.id,
                name=std.name,
                total_hours=len(grid.occupied()),
                required_hours=required,
                double_periods=count_double_periods(grid),
                subject_spread_score=round(_compute_spread_score(grid, n_days), 3),
            ))

        return metrics


# ─── Hilfsfunktionen ──────────────────────────────────────────────────────────

def _compute_spread_score(grid: StandardSchedule, days_per_week: int) -> float:
    """Berechnet wie gleichmäßig Fächer über die Woche verteilt sind.

    Score 0.0–1.0:
    - 1.0 = jedes Fach ist auf möglichst viele verschiedene Tage verteilt
    - 1/Stunden = alle Stunden eines Fachs liegen am selben Tag
    """
    subject_days: dict[str, set] = defaultdict(set)
    subject_hours: dict[str, int] = defaultdict(int)
    for day, _, cell in grid.occupied():
        subject_days[cell.subject_id].add(day)
        subject_hours[cell.subject_id] += 1

    if not subject_hours:
        return 1.0

    # Für jedes Fach: Verhältnis (Anzahl verschiedener Tage) / min(Stunden, days_per_week)
    scores = []
    for subj, hours in subject_hours.items():
        max_days = min(hours, days_per_week)
        actual_days = len(subject_days[subj])
        scores.append(actual_days / max_days if max_days > 0 else 1.0)

    return sum(scores) / len(scores)
