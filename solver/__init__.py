"""Solver-Modul (Greedy-Generator mit gewichteten Heuristiken)."""

from .generator import ScheduleGenerator, GenerationResult, AllocationShortfall, generate_schedule
from .history import ScheduleHistory

__all__ = [
    "ScheduleGenerator",
    "GenerationResult",
    "AllocationShortfall",
    "generate_schedule",
    "ScheduleHistory",
]
