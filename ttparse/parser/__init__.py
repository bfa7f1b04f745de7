from .cells import highlight_color, hue_for, is_complex_cell, parse_cell, string_hash
from .days import parse_day_rows
from .delimiter import Delimiter, detect_delimiter
from .headers import parse_time_slots
from .parse import (
    ParseResult,
    ParseState,
    TimetableParser,
    parse_timetable,
    parse_timetable_or_raise,
)

__all__ = [
    "Delimiter",
    "ParseResult",
    "ParseState",
    "TimetableParser",
    "detect_delimiter",
    "highlight_color",
    "hue_for",
    "is_complex_cell",
    "parse_cell",
    "parse_day_rows",
    "parse_time_slots",
    "parse_timetable",
    "parse_timetable_or_raise",
    "string_hash",
]
