"""Lecture-Scheduler — Haupt-CLI.

Verwendung:
  python main.py init                         Default-Konfiguration anlegen
  python main.py config show                  Konfiguration anzeigen
  python main.py sample                       Beispieldaten erzeugen + speichern
  python main.py validate                     Machbarkeits-Check
  python main.py generate [--seed N]          Stundenplan erzeugen (neue Version)
  python main.py show [--standard ID]         Aktiven Stundenplan anzeigen
  python main.py history list                 Versionen auflisten
  python main.py history activate <ref>       Version aktivieren
  python main.py history rename <ref> <name>  Version umbenennen
  python main.py history delete <ref>         Version löschen
  python main.py edit-cell 9A Monday 0 ...    Zelle manuell setzen/leeren
  python main.py check                        Validierung + Qualitätsbericht
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()

# Standard-Pfade für gespeicherte Daten
DEFAULT_DATA_JSON = Path("output/school_data.json")
DEFAULT_HISTORY_JSON = Path("output/schedule_history.json")


def _load_config_or_abort():
    """Lädt die Konfiguration oder bricht mit Fehlermeldung ab."""
    from config.manager import ConfigManager
    mgr = ConfigManager()
    if mgr.first_run_check():
        console.print(
            "[red]Keine Konfiguration gefunden.[/red]\n"
            "Führen Sie zunächst [bold]python main.py init[/bold] aus."
        )
        sys.exit(1)
    try:
        return mgr, mgr.load()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)


def _load_data_or_abort(json_path: str):
    """Lädt den gespeicherten Datensatz oder bricht ab."""
    from models.school_data import SchoolData

    p = Path(json_path)
    if not p.exists():
        console.print(
            f"[red]Keine Datendatei gefunden: {p}[/red]\n"
            "Verwenden Sie [bold]python main.py sample[/bold] für Beispieldaten."
        )
        sys.exit(1)
    return SchoolData.load_json(p)


def _load_history():
    from solver.history import ScheduleHistory
    return ScheduleHistory.load_json(DEFAULT_HISTORY_JSON)


def _active_or_abort(history):
    schedule = history.active
    if schedule is None:
        console.print(
            "[red]Kein aktiver Stundenplan.[/red]\n"
            "Führen Sie zunächst [bold]python main.py generate[/bold] aus."
        )
        sys.exit(1)
    return schedule


def _resolve_or_abort(history, ref: str):
    try:
        return history.resolve(ref)
    except KeyError as e:
        console.print(f"[red]{e.args[0]}[/red]")
        sys.exit(1)


def _parse_day(value: str):
    """'Monday', 'monday' oder 'Mon' → DayOfWeek."""
    from config.schema import DayOfWeek

    for day in DayOfWeek:
        if value.lower() in (day.value.lower(), day.short.lower()):
            return day
    raise click.BadParameter(f"Unbekannter Wochentag: {value}")


# ─── INIT ─────────────────────────────────────────────────────────────────────

@click.command("init")
@click.option("--force", is_flag=True, default=False,
              help="Bestehende Konfiguration überschreiben.")
def cmd_init(force: bool):
    """Legt die Default-Konfiguration an (Mo-Fr, 6 Slots, Recess an Index 2)."""
    from config.defaults import default_school_config
    from config.manager import ConfigManager

    mgr = ConfigManager()
    if not mgr.first_run_check() and not force:
        console.print(
            "[yellow]Eine Konfiguration existiert bereits.[/yellow]\n"
            "Verwenden Sie [bold]--force[/bold] zum Überschreiben."
        )
        return

    mgr.save(default_school_config())
    console.print("Führen Sie jetzt [bold]python main.py sample[/bold] aus.")


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen."""


@cmd_config.command("show")
def config_show():
    """Zeigt die aktuelle Konfiguration an."""
    mgr, config = _load_config_or_abort()

    console.print(Panel(
        f"[bold]{config.school_name}[/bold]  |  {config.medium.value} Medium",
        title="Schulkonfiguration",
        border_style="cyan",
    ))

    tg = config.time_grid
    table = Table(title="Zeitraster", box=box.ROUNDED)
    table.add_column("Index")
    table.add_column("Beginn")
    table.add_column("Ende")
    table.add_column("Art")
    for slot in tg.slots:
        kind = f"[yellow]{slot.name or 'Recess'}[/yellow]" if slot.is_recess else "Unterricht"
        table.add_row(str(slot.index), slot.start_time, slot.end_time, kind)
    console.print(table)

    table2 = Table(title="Wochentage", box=box.ROUNDED)
    table2.add_column("Tag")
    table2.add_column("Aktiv")
    table2.add_column("Slots", justify="right")
    for dc in tg.days:
        active = "[green]ja[/green]" if dc.is_active else "[dim]nein[/dim]"
        table2.add_row(dc.day.value, active, str(dc.lecture_count))
    console.print(table2)

    gc = config.generator
    console.print(
        f"\n[bold]Generator:[/bold] max. {gc.max_per_day}/Tag | "
        f"Retries {gc.max_retries} | Jitter {gc.jitter:g} | "
        f"Doppelstunde +{gc.adjacent_bonus:g} | Erste am Tag +{gc.first_of_day_bonus:g} | "
        f"Seed {gc.seed if gc.seed is not None else 'zufällig'}"
    )


# ─── SAMPLE ───────────────────────────────────────────────────────────────────

@click.command("sample")
@click.option("--seed", default=42, help="Zufalls-Seed für reproduzierbare Daten.")
@click.option("--divisions", default=2, help="Divisions pro Stufe (A, B, ...).")
@click.option("--json-path", default=str(DEFAULT_DATA_JSON),
              help="Pfad für den Datensatz.")
def cmd_sample(seed: int, divisions: int, json_path: str):
    """Erzeugt einen Beispieldatensatz (Standards, Fächer, Lehrkräfte)."""
    mgr, config = _load_config_or_abort()
    from data.sample_data import SampleDataGenerator

    console.print("[bold]Beispieldaten werden generiert...[/bold]")
    gen = SampleDataGenerator(config, seed=seed, divisions=divisions)
    data = gen.generate()
    gen.print_summary(data)

    console.print(f"\n[dim]{data.summary()}[/dim]")

    out_path = Path(json_path)
    data.save_json(out_path)
    console.print(f"[green]✓[/green] JSON gespeichert: {out_path}")


# ─── VALIDATE ─────────────────────────────────────────────────────────────────

@click.command("validate")
@click.option("--json-path", default=str(DEFAULT_DATA_JSON),
              help="Pfad zur gespeicherten JSON-Datei.")
def cmd_validate(json_path: str):
    """Führt einen Machbarkeits-Check auf dem aktuellen Datensatz durch."""
    data = _load_data_or_abort(json_path)

    console.print(f"\n{data.summary()}\n")
    report = data.validate_feasibility()
    report.print_rich()

    sys.exit(0 if report.is_feasible else 1)


# ─── GENERATE ─────────────────────────────────────────────────────────────────

@click.command("generate")
@click.option("--seed", type=int, default=None,
              help="Zufalls-Seed (überschreibt generator.seed der Config).")
@click.option("--json-path", default=str(DEFAULT_DATA_JSON),
              help="Pfad zur gespeicherten JSON-Datei.")
def cmd_generate(seed: Optional[int], json_path: str):
    """Erzeugt einen Stundenplan und speichert ihn als neue Version."""
    from solver.generator import ScheduleGenerator

    data = _load_data_or_abort(json_path)
    report = data.validate_feasibility()
    if not report.is_feasible or report.warnings:
        report.print_rich()
    if not report.is_feasible:
        console.print("[red bold]Generierung abgebrochen.[/red bold]")
        sys.exit(1)

    console.print("[bold]Stundenplan wird generiert...[/bold]")
    result = ScheduleGenerator(data).generate(seed=seed)

    history = _load_history()
    history.add(result.schedule)
    history.save_json(DEFAULT_HISTORY_JSON)

    result.print_rich()
    console.print(
        f"[green]✓[/green] Gespeichert als [bold]{result.schedule.name}[/bold] "
        f"({result.schedule.id[:8]}) und aktiviert."
    )


# ─── SHOW ─────────────────────────────────────────────────────────────────────

@click.command("show")
@click.option("--standard", "standard_id", default=None,
              help="Nur diesen Standard anzeigen.")
@click.option("--faculty", "faculty_id", default=None,
              help="Wochenplan einer Lehrkraft statt der Standards.")
@click.option("--json-path", default=str(DEFAULT_DATA_JSON),
              help="Pfad zur gespeicherten JSON-Datei.")
def cmd_show(standard_id: Optional[str], faculty_id: Optional[str], json_path: str):
    """Zeigt den aktiven Stundenplan als Tabellen an."""
    from export.helpers import header_row
    from export.tui_renderer import render_faculty_rows, render_standard_rows

    data = _load_data_or_abort(json_path)
    schedule = _active_or_abort(_load_history())
    header = header_row(data.config)

    if faculty_id is not None:
        faculty = data.get_faculty(faculty_id)
        if faculty is None:
            console.print(f"[red]Unbekannte Lehrkraft: {faculty_id}[/red]")
            sys.exit(1)
        _print_grid(f"{faculty.name} ({faculty.id})", header,
                    render_faculty_rows(faculty.id, schedule, data))
        return

    if standard_id is not None:
        if data.get_standard(standard_id) is None:
            console.print(f"[red]Unbekannter Standard: {standard_id}[/red]")
            sys.exit(1)
        standards = [data.get_standard(standard_id)]
    else:
        standards = data.standards

    console.print(f"[bold]{schedule.name}[/bold] [dim]({schedule.id[:8]})[/dim]")
    for std in standards:
        rows = render_standard_rows(std.id, schedule, data)
        if not rows:
            console.print(f"[yellow]{std.name}: kein Stundenplan vorhanden.[/yellow]")
            continue
        _print_grid(std.label, header, rows)


def _print_grid(title: str, header: list[str], rows: list[list[str]]) -> None:
    from export.helpers import RECESS_MARKER

    table = Table(title=title, box=box.ROUNDED, show_lines=True)
    for col in header:
        table.add_column(col)
    for row in rows:
        if row[1:] and all(c == RECESS_MARKER for c in row[1:]):
            table.add_row(*[f"[dim]{c}[/dim]" for c in row])
        else:
            table.add_row(*row)
    console.print(table)


# ─── HISTORY ──────────────────────────────────────────────────────────────────

@click.group("history")
def cmd_history():
    """Versionen verwalten (auflisten, aktivieren, umbenennen, löschen)."""


@cmd_history.command("list")
def history_list():
    """Listet alle gespeicherten Versionen auf (neueste zuerst)."""
    history = _load_history()
    if not len(history):
        console.print("[dim]Keine Versionen vorhanden.[/dim]")
        return

    table = Table(title="Stundenplan-Versionen", box=box.ROUNDED)
    table.add_column("", width=2)
    table.add_column("Name", style="bold")
    table.add_column("ID")
    table.add_column("Erstellt")
    table.add_column("Stunden", justify="right")
    for s in history.versions:
        marker = "[green]●[/green]" if s.id == history.active_id else ""
        cells = sum(len(g.occupied()) for g in s.schedules)
        table.add_row(
            marker, s.name, s.id[:8],
            s.created_at.strftime("%d.%m.%Y %H:%M"), str(cells),
        )
    console.print(table)


@cmd_history.command("activate")
@click.argument("ref")
def history_activate(ref: str):
    """Setzt eine Version (ID, ID-Präfix oder Name) als aktiv."""
    history = _load_history()
    schedule = history.activate(_resolve_or_abort(history, ref).id)
    history.save_json(DEFAULT_HISTORY_JSON)
    console.print(f"[green]✓[/green] '{schedule.name}' ist jetzt aktiv.")


@cmd_history.command("rename")
@click.argument("ref")
@click.argument("name")
def history_rename(ref: str, name: str):
    """Benennt eine Version um."""
    history = _load_history()
    old = _resolve_or_abort(history, ref)
    old_name = old.name
    history.rename(old.id, name)
    history.save_json(DEFAULT_HISTORY_JSON)
    console.print(f"[green]✓[/green] '{old_name}' → '{name}'")


@cmd_history.command("delete")
@click.argument("ref")
@click.option("--yes", is_flag=True, default=False, help="Ohne Rückfrage löschen.")
def history_delete(ref: str, yes: bool):
    """Löscht eine Version."""
    history = _load_history()
    schedule = _resolve_or_abort(history, ref)
    if not yes and not click.confirm(f"'{schedule.name}' wirklich löschen?", default=False):
        return
    history.delete(schedule.id)
    history.save_json(DEFAULT_HISTORY_JSON)
    console.print(f"[green]✓[/green] '{schedule.name}' gelöscht.")
    if history.active is not None:
        console.print(f"Aktiv: [bold]{history.active.name}[/bold]")


# ─── EDIT-CELL ────────────────────────────────────────────────────────────────

@click.command("edit-cell")
@click.argument("standard_id")
@click.argument("day")
@click.argument("slot", type=int)
@click.option("--subject", "subject_id", default=None, help="Fach-ID.")
@click.option("--faculty", "faculty_id", default=None, help="Lehrkraft-ID.")
@click.option("--clear", is_flag=True, default=False, help="Zelle leeren.")
@click.option("--json-path", default=str(DEFAULT_DATA_JSON),
              help="Pfad zur gespeicherten JSON-Datei.")
def cmd_edit_cell(
    standard_id: str,
    day: str,
    slot: int,
    subject_id: Optional[str],
    faculty_id: Optional[str],
    clear: bool,
    json_path: str,
):
    """Setzt oder leert eine Zelle im aktiven Stundenplan.

    Regeln werden dabei nicht erzwungen; 'check' meldet Verletzungen.
    """
    from models.schedule import ScheduleCell

    data = _load_data_or_abort(json_path)
    history = _load_history()
    schedule = _active_or_abort(history)
    day_of_week = _parse_day(day)

    day_config = data.config.time_grid.get_day(day_of_week)
    if day_config is None or not day_config.is_active:
        console.print(f"[red]{day_of_week.value} ist kein aktiver Tag.[/red]")
        sys.exit(1)
    if not 0 <= slot < day_config.lecture_count:
        console.print(
            f"[red]Slot {slot} liegt außerhalb von 0..{day_config.lecture_count - 1}.[/red]"
        )
        sys.exit(1)
    if slot in data.config.time_grid.recess_indices:
        console.print(f"[red]Slot {slot} ist ein Recess und bleibt frei.[/red]")
        sys.exit(1)

    if clear:
        cell = None
    else:
        if not subject_id or not faculty_id:
            console.print("[red]--subject und --faculty angeben (oder --clear).[/red]")
            sys.exit(1)
        if data.get_subject(subject_id) is None:
            console.print(f"[red]Unbekanntes Fach: {subject_id}[/red]")
            sys.exit(1)
        if data.get_faculty(faculty_id) is None:
            console.print(f"[red]Unbekannte Lehrkraft: {faculty_id}[/red]")
            sys.exit(1)
        cell = ScheduleCell(subject_id=subject_id, faculty_id=faculty_id)

    try:
        schedule.set_cell(standard_id, day_of_week, slot, cell)
    except KeyError as e:
        console.print(f"[red]{e.args[0]}[/red]")
        sys.exit(1)

    history.save_json(DEFAULT_HISTORY_JSON)
    action = "geleert" if cell is None else f"gesetzt auf {subject_id} ({faculty_id})"
    console.print(
        f"[green]✓[/green] {standard_id} {day_of_week.value} Slot {slot} {action} "
        f"in '{schedule.name}'."
    )


# ─── CHECK ────────────────────────────────────────────────────────────────────

@click.command("check")
@click.option("--json-path", default=str(DEFAULT_DATA_JSON),
              help="Pfad zur gespeicherten JSON-Datei.")
def cmd_check(json_path: str):
    """Prüft den aktiven Stundenplan und zeigt den Qualitätsbericht."""
    from analysis.quality_report import QualityAnalyzer
    from analysis.solution_validator import SolutionValidator

    data = _load_data_or_abort(json_path)
    schedule = _active_or_abort(_load_history())

    report = SolutionValidator().validate(schedule, data)
    report.print_rich()

    analyzer = QualityAnalyzer()
    analyzer.print_rich(analyzer.analyze(schedule, data))

    sys.exit(0 if report.is_valid else 1)


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False,
              help="Generator-Details ausgeben (Logging auf DEBUG).")
def cli(verbose: bool):
    """Lecture-Scheduler: Wochenstundenpläne für Standards einer Schule.

    Starten Sie mit: python main.py init
    """
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def main():
    """Einstiegspunkt. Legt beim ersten Aufruf die Default-Konfiguration an."""
    from config.manager import ConfigManager
    mgr = ConfigManager()

    if len(sys.argv) == 1 and mgr.first_run_check():
        console.print(Panel(
            "[bold]Willkommen beim Lecture-Scheduler![/bold]\n\n"
            "Keine Konfiguration gefunden.\n"
            "Die Default-Konfiguration wird jetzt angelegt...",
            border_style="cyan",
        ))
        sys.argv.append("init")

    cli()


# Befehle registrieren
cli.add_command(cmd_init)
cli.add_command(cmd_config)
cli.add_command(cmd_sample)
cli.add_command(cmd_validate)
cli.add_command(cmd_generate)
cli.add_command(cmd_show)
cli.add_command(cmd_history)
cli.add_command(cmd_edit_cell)
cli.add_command(cmd_check)


if __name__ == "__main__":
    main()
