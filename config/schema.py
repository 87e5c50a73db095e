from pydantic import BaseModel, Field, model_validator
from typing import Optional
from enum import Enum


class Medium(str, Enum):
    ENGLISH = "English"
    GUJARATI = "Gujarati"
    HINDI = "Hindi"


class Stream(str, Enum):
    NONE = "None"
    SCIENCE = "Science"
    COMMERCE = "Commerce"
    ARTS = "Arts"


class DayOfWeek(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"

    @property
    def short(self) -> str:
        """Dreibuchstabige Abkürzung für Tabellenköpfe ("Mon", "Tue", ...)."""
        return self.value[:3]


# ─── ZEITRASTER ───

class TimeSlot(BaseModel):
    """Eine Stunde (oder Pause) in der globalen Tagesabfolge."""
    # Position in der Tagesabfolge, 0-basiert
    index: int = Field(ge=0)
    # Beginn im Format "HH:MM"
    start_time: str
    # Ende im Format "HH:MM"
    end_time: str
    # Pausen-Slots werden nie belegt
    is_recess: bool = False
    # Optionale Bezeichnung, z.B. "Recess" oder "Lunch Break"
    name: Optional[str] = None

    @property
    def time_label(self) -> str:
        return f"{self.start_time} - {self.end_time}"


class DayConfig(BaseModel):
    """Konfiguration eines Wochentags."""
    day: DayOfWeek
    # Nur aktive Tage werden verplant
    is_active: bool = True
    # Wie viele führende Slots der globalen Abfolge an diesem Tag gelten
    lecture_count: int = Field(6, ge=0)


class TimeGridConfig(BaseModel):
    """Globales Zeitraster: eine Slot-Abfolge für alle Standards und Tage.

    Jeder aktive Tag nutzt ein Präfix dieser Abfolge, abgeschnitten auf
    seine lecture_count.
    """
    # Globale, geordnete Slot-Abfolge
    slots: list[TimeSlot] = Field(
        description="Globale Slot-Abfolge (Index 0..n-1)")
    # Ein Eintrag pro Wochentag
    days: list[DayConfig] = Field(
        description="Aktivierung und Stundenzahl pro Wochentag")

    @model_validator(mode='after')
    def validate_grid(self):
        """Slot-Indizes müssen lückenlos 0..n-1 in Reihenfolge sein,
        Tage eindeutig und lecture_count innerhalb der Slot-Anzahl."""
        for pos, slot in enumerate(self.slots):
            if slot.index != pos:
                raise ValueError(
                    f"Slot an Position {pos} hat Index {slot.index} "
                    f"(erwartet lückenlos 0..{len(self.slots) - 1})")
        seen: set[DayOfWeek] = set()
        for dc in self.days:
            if dc.day in seen:
                raise ValueError(f"Tag {dc.day.value} ist doppelt konfiguriert")
            seen.add(dc.day)
            if dc.lecture_count > len(self.slots):
                raise ValueError(
                    f"{dc.day.value}: lecture_count {dc.lecture_count} > "
                    f"{len(self.slots)} definierte Slots")
        return self

    def active_days(self) -> list[DayConfig]:
        """Alle aktiven Tage in Konfigurationsreihenfolge."""
        return [d for d in self.days if d.is_active]

    def slots_for_day(self, day_config: DayConfig) -> list[TimeSlot]:
        """Die an einem Tag geltenden Slots (Präfix der globalen Abfolge)."""
        return self.slots[:day_config.lecture_count]

    def get_day(self, day: DayOfWeek) -> Optional[DayConfig]:
        for dc in self.days:
            if dc.day == day:
                return dc
        return None

    @property
    def recess_indices(self) -> set[int]:
        return {s.index for s in self.slots if s.is_recess}


# ─── GENERATOR ───

class GeneratorConfig(BaseModel):
    """Stellschrauben des Greedy-Generators."""
    # Maximale Anzahl Stunden desselben Fachs pro Tag und Standard
    max_per_day: int = Field(2, ge=1,
        description="Max. Stunden eines Fachs pro Tag")
    # Fehlgeschlagene Kandidatensuchen pro Fach, bevor aufgegeben wird
    max_retries: int = Field(50, ge=1,
        description="Retry-Budget pro Fach")
    # Obergrenze des zufälligen Tie-Breakers (gleichverteilt 0..jitter)
    jitter: float = Field(10.0, ge=0.0,
        description="Zufälliger Tie-Breaker (klein gegenüber den Boni)")
    # Bonus je Nachbarslot mit demselben Fach (Doppelstunde)
    adjacent_bonus: float = Field(1000.0, ge=0.0,
        description="Bonus: Doppelstunde bilden")
    # Bonus für die erste Stunde des Fachs an einem Tag
    first_of_day_bonus: float = Field(100.0, ge=0.0,
        description="Bonus: über die Woche verteilen")
    # Fester Seed für reproduzierbare Läufe (None = jedes Mal neu)
    seed: Optional[int] = Field(None,
        description="Zufalls-Seed (leer = zufällig)")


# ─── GESAMT-CONFIG ───

class SchoolConfig(BaseModel):
    """Gesamtkonfiguration der Schule."""
    # Name der Schule
    school_name: str = Field("Demo School",
        description="Name der Schule")
    # Unterrichtssprache
    medium: Medium = Field(Medium.ENGLISH)
    # Zeitraster mit Slots, Pausen und aktiven Tagen
    time_grid: TimeGridConfig
    # Generator-Parameter
    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)
