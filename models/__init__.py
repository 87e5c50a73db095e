from models.timeslot import SlotRef
from models.standard import Standard
from models.subject import Subject
from models.faculty import Faculty
from models.schedule import ScheduleCell, StandardSchedule, FullSchedule
from models.school_data import SchoolData, FeasibilityReport

__all__ = [
    "SlotRef",
    "Standard",
    "Subject",
    "Faculty",
    "ScheduleCell",
    "StandardSchedule",
    "FullSchedule",
    "SchoolData",
    "FeasibilityReport",
]
