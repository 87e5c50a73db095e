"""Datenmodell für ein Unterrichtsfach (Pydantic v2)."""

from typing import Optional
from pydantic import BaseModel, Field


class Subject(BaseModel):
    """Ein Fach gehört zu genau einem Standard.

    Gleichnamige Fächer verschiedener Standards sind eigene Entitäten.
    """

    id: str
    name: str
    standard_id: str
    lectures_per_week: int = Field(description="Soll-Stunden pro Woche")
    color: Optional[str] = None   # "#38bdf8"
