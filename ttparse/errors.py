from __future__ import annotations


class TimetableError(Exception):
    """Base class for everything this package raises on bad input."""


class TimetableParseError(TimetableError):
    reason = "could not parse timetable"

    def __init__(self, reason: str | None = None):
        if reason is not None:
            self.reason = reason
        super().__init__(self.reason)


class InputTooShortError(TimetableParseError):
    reason = "input too short"


class TruncatedRowError(TimetableParseError):
    reason = "day row has too few columns"


class EmptyDayNameError(TimetableParseError):
    reason = "day name is empty"


class NoDayDataError(TimetableParseError):
    reason = "no valid day data found"


class ProfileValidationError(TimetableError):
    pass


class ProfileNotFoundError(TimetableError):
    pass


class ProfileCorruptError(TimetableError):
    pass
