# Re-export common types
from .classinfo import ClassInfo
from .period import TimeSlot
from .profile import FacultyProfile
from .timetable import DaySchedule, Timetable

__all__ = [
    "ClassInfo",
    "TimeSlot",
    "DaySchedule",
    "Timetable",
    "FacultyProfile",
]
