"""Referenz auf einen Zeitslot im Wochenraster."""

from dataclasses import dataclass

from config.schema import DayOfWeek


@dataclass(frozen=True)
class SlotRef:
    """Kombination aus Wochentag und Slot-Index.

    Immutable (frozen=True) damit es als Dict-Key / Set-Element nutzbar ist.
    """

    day: DayOfWeek
    # Index in der globalen Slot-Abfolge (0-basiert)
    slot_index: int

    @property
    def slot_id(self) -> str:
        """Eindeutiger String-Bezeichner (z.B. "Monday-3")."""
        return f"{self.day.value}-{self.slot_index}"

    def __repr__(self) -> str:
        return f"SlotRef({self.day.short}, Slot {self.slot_index})"

    def __str__(self) -> str:
        return f"{self.day.short} {self.slot_index}"
