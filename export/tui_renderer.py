"""Gemeinsamer Renderer für die tabellarische Stundenplan-Anzeige.

Wird von cmd_show (Rich) verwendet und liefert die Zeilen, die auch
Export-Konsumenten brauchen: pro Slot entweder RECESS, '-' oder
"Fach (Lehrkraft)".
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from models.schedule import FullSchedule
    from models.school_data import SchoolData


def render_standard_rows(
    standard_id: str,
    schedule: "FullSchedule",
    school_data: "SchoolData",
) -> list[list[str]]:
    """Gibt Tabellenzeilen für den Stundenplan eines Standards zurück.

    Jede Zeile: [Zeit, Tag1, Tag2, ...] über alle globalen Slots.
    Slots jenseits der lecture_count eines Tages erscheinen leer.
    """
    from export.helpers import RECESS_MARKER, EMPTY_MARKER, format_cell

    try:
        grid = schedule.get_schedule(standard_id)
    except KeyError:
        return []

    tg = school_data.config.time_grid
    active = tg.active_days()
    rows: list[list[str]] = []

    for slot in tg.slots:
        cells = [slot.time_label]
        if slot.is_recess:
            rows.append(cells + [RECESS_MARKER] * len(active))
            continue
        for day_config in active:
            if slot.index >= day_config.lecture_count:
                cells.append(EMPTY_MARKER)
            else:
                cells.append(format_cell(grid.get_cell(day_config.day, slot.index), school_data))
        rows.append(cells)

    return rows


def render_faculty_rows(
    faculty_id: str,
    schedule: "FullSchedule",
    school_data: "SchoolData",
) -> list[list[str]]:
    """Gibt Tabellenzeilen für den Wochenplan einer Lehrkraft zurück.

    Zelle: "Fach (Standard)" oder '-'.
    """
    from export.helpers import RECESS_MARKER, EMPTY_MARKER

    slot_map: dict = {}
    for standard_id, day, idx in schedule.faculty_slots(faculty_id):
        cell = schedule.get_schedule(standard_id).get_cell(day, idx)
        subject = school_data.get_subject(cell.subject_id)
        standard = school_data.get_standard(standard_id)
        label = f"{subject.name if subject else cell.subject_id} " \
                f"({standard.name if standard else standard_id})"
        slot_map.setdefault((day, idx), []).append(label)

    tg = school_data.config.time_grid
    active = tg.active_days()
    rows: list[list[str]] = []

    for slot in tg.slots:
        cells = [slot.time_label]
        if slot.is_recess:
            rows.append(cells + [RECESS_MARKER] * len(active))
            continue
        for day_config in active:
            labels = slot_map.get((day_config.day, slot.index))
            cells.append(" / ".join(labels) if labels else EMPTY_MARKER)
        rows.append(cells)

    return rows
