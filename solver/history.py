"""ScheduleHistory – Versionsverlauf generierter Stundenpläne.

Neue Versionen werden vorne eingefügt und als "Version N" benannt
(N = bisherige Anzahl + 1). Genau eine Version kann aktiv sein.
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from models.schedule import FullSchedule


class ScheduleHistory(BaseModel):
    """Alle gespeicherten Versionen (neueste zuerst) und die aktive ID."""

    versions: list[FullSchedule] = []
    active_id: Optional[str] = None

    def add(self, schedule: FullSchedule, activate: bool = True) -> FullSchedule:
        """Nummeriert, speichert und (optional) aktiviert eine neue Version."""
        schedule.name = f"Version {len(self.versions) + 1}"
        self.versions.insert(0, schedule)
        if activate:
            self.active_id = schedule.id
        return schedule

    def get(self, schedule_id: str) -> FullSchedule:
        for s in self.versions:
            if s.id == schedule_id:
                return s
        raise KeyError(f"Version '{schedule_id}' nicht gefunden")

    @property
    def active(self) -> Optional[FullSchedule]:
        if self.active_id is None:
            return None
        return next((s for s in self.versions if s.id == self.active_id), None)

    def activate(self, schedule_id: str) -> FullSchedule:
        schedule = self.get(schedule_id)
        self.active_id = schedule.id
        return schedule

    def rename(self, schedule_id: str, name: str) -> FullSchedule:
        """Benennt eine Version um (wirkt auch auf die aktive, da dasselbe Objekt)."""
        schedule = self.get(schedule_id)
        schedule.name = name
        return schedule

    def delete(self, schedule_id: str) -> None:
        """Entfernt eine Version. War sie aktiv, wird die neueste verbleibende aktiv."""
        schedule = self.get(schedule_id)
        self.versions = [s for s in self.versions if s.id != schedule.id]
        if self.active_id == schedule.id:
            self.active_id = self.versions[0].id if self.versions else None

    def resolve(self, ref: str) -> FullSchedule:
        """Findet eine Version über ID, ID-Präfix oder Namen ("Version 2")."""
        for s in self.versions:
            if s.id == ref or s.name == ref:
                return s
        matches = [s for s in self.versions if s.id.startswith(ref)]
        if len(matches) == 1:
            return matches[0]
        raise KeyError(f"Version '{ref}' nicht eindeutig oder nicht gefunden")

    def save_json(self, path: Path) -> None:
        """Speichert den Verlauf als JSON."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.model_dump_json(indent=2))

    @classmethod
    def load_json(cls, path: Path) -> "ScheduleHistory":
        """Lädt einen gespeicherten Verlauf; fehlende Datei → leerer Verlauf."""
        path = Path(path)
        if not path.exists():
            return cls()
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate_json(f.read())

    def __len__(self) -> int:
        return len(self.versions)

    def __repr__(self) -> str:
        return f"ScheduleHistory({len(self.versions)} Versionen, aktiv={self.active_id})"
