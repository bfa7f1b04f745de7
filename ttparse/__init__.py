from .errors import TimetableError, TimetableParseError
from .models import ClassInfo, DaySchedule, FacultyProfile, Timetable, TimeSlot
from .parser import ParseResult, parse_timetable, parse_timetable_or_raise

__all__ = [
    "ClassInfo",
    "DaySchedule",
    "FacultyProfile",
    "ParseResult",
    "TimeSlot",
    "Timetable",
    "TimetableError",
    "TimetableParseError",
    "parse_timetable",
    "parse_timetable_or_raise",
]
