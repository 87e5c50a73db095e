from config.schema import (
    DayConfig,
    DayOfWeek,
    GeneratorConfig,
    Medium,
    SchoolConfig,
    TimeGridConfig,
    TimeSlot,
)


def default_time_grid() -> TimeGridConfig:
    """Standard-Zeitraster einer Schule mit Vormittagsunterricht.

    Slot-Abfolge (0-basiert):
    0  08:00 - 08:50
    1  08:50 - 09:40
    2  09:40 - 10:00   ── Recess ──
    3  10:00 - 10:50
    4  10:50 - 11:40
    5  11:40 - 12:30

    Montag bis Freitag aktiv mit je 6 Slots, Samstag inaktiv.
    """
    return TimeGridConfig(
        slots=[
            TimeSlot(index=0, start_time="08:00", end_time="08:50"),
            TimeSlot(index=1, start_time="08:50", end_time="09:40"),
            TimeSlot(index=2, start_time="09:40", end_time="10:00",
                     is_recess=True, name="Recess"),
            TimeSlot(index=3, start_time="10:00", end_time="10:50"),
            TimeSlot(index=4, start_time="10:50", end_time="11:40"),
            TimeSlot(index=5, start_time="11:40", end_time="12:30"),
        ],
        days=[
            DayConfig(day=day, is_active=day != DayOfWeek.SATURDAY, lecture_count=6)
            for day in DayOfWeek
        ],
    )


def default_school_config() -> SchoolConfig:
    """Komplette Default-Konfiguration (Mo-Fr, 6 Slots, Recess an Index 2)."""
    return SchoolConfig(
        school_name="Demo School",
        medium=Medium.ENGLISH,
        time_grid=default_time_grid(),
        generator=GeneratorConfig(),
    )


# ─── FARBPALETTE ───
# Wird beim Anlegen von Fächern reihum vergeben.

SUBJECT_COLORS: list[str] = [
    "#f472b6",  # pink
    "#a78bfa",  # violet
    "#38bdf8",  # sky
    "#4ade80",  # green
    "#fbbf24",  # amber
    "#fb7185",  # rose
    "#94a3b8",  # slate
]


def color_for(position: int) -> str:
    """Farbe aus der Palette für das n-te Fach (zyklisch)."""
    return SUBJECT_COLORS[position % len(SUBJECT_COLORS)]


# ─── STUNDENTAFEL (Beispieldaten) ───
# Jahrgang → Fach → Wochenstunden, nur für den Beispieldatensatz.

SAMPLE_CURRICULUM: dict[int, dict[str, int]] = {
    9: {
        "Mathematics":     6,
        "Science":         5,
        "English":         4,
        "Gujarati":        3,
        "Social Science":  3,
        "Hindi":           2,
    },  # Summe: 23 von 25 Unterrichtsslots (5 Tage × 5)
    10: {
        "Mathematics":     6,
        "Science":         5,
        "English":         4,
        "Social Science":  3,
        "Gujarati":        3,
        "Computer":        2,
    },  # Summe: 23
}
