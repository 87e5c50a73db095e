"""Datenmodell für einen Standard (Klasse/Section, Pydantic v2)."""

from typing import Optional

from pydantic import BaseModel

from config.schema import Medium, Stream


class Standard(BaseModel):
    """Eine Klasse mit eigenem Wochenraster (z.B. 10-A, 12-Science-B).

    Zwei Standards derselben Stufe unterscheiden sich über Stream,
    Division oder Medium.
    """

    id: str
    grade: int                     # 1..12
    stream: Stream = Stream.NONE
    medium: Medium = Medium.ENGLISH
    division: Optional[str] = None  # "A", "B", "C"

    @property
    def name(self) -> str:
        """Anzeigename: Stufe, ggf. Stream und Division ("12-Science-B")."""
        parts = [str(self.grade)]
        if self.stream != Stream.NONE:
            parts.append(self.stream.value)
        if self.division:
            parts.append(self.division)
        return "-".join(parts)

    @property
    def label(self) -> str:
        """Name inkl. Unterrichtssprache, z.B. für Tabellentitel."""
        return f"{self.name} ({self.medium.value} Medium)"
