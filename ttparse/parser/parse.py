from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import List

from ..config import ParserSettings
from ..errors import InputTooShortError, NoDayDataError, TimetableParseError
from ..models.timetable import Timetable
from .cells import DEFAULT_SETTINGS
from .days import parse_day_rows
from .delimiter import detect_delimiter
from .headers import parse_time_slots

logger = logging.getLogger(__name__)

MIN_LINES = 6  # four header rows plus one day pair


class ParseState(enum.Enum):
    START = "start"
    HEADER_PARSED = "header_parsed"
    DAYS_PARSED = "days_parsed"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class ParseResult:
    timetable: Timetable | None = None
    error: TimetableParseError | None = None
    # last state reached before DONE/FAILED
    reached: ParseState = ParseState.START

    @property
    def ok(self) -> bool:
        return self.timetable is not None

    @property
    def state(self) -> ParseState:
        return ParseState.DONE if self.ok else ParseState.FAILED

    @property
    def reason(self) -> str | None:
        return self.error.reason if self.error is not None else None


def split_lines(text: str) -> List[str]:
    # Blank lines carry no row role; \r\n endings are folded by splitlines.
    return [line for line in text.splitlines() if line.strip()]


class TimetableParser:
    """Strict parser: START -> HEADER_PARSED -> DAYS_PARSED -> DONE, or FAILED.

    One instance may be reused; every run starts again from START and builds
    a fresh Timetable.
    """

    def __init__(self, settings: ParserSettings = DEFAULT_SETTINGS):
        self.settings = settings
        self.state = ParseState.START
        self.failed_after: ParseState | None = None

    def run(self, text: str) -> Timetable:
        self.state = ParseState.START
        try:
            tt = self._run(text)
        except TimetableParseError:
            self.failed_after = self.state
            self.state = ParseState.FAILED
            raise
        self.state = ParseState.DONE
        return tt

    def _run(self, text: str) -> Timetable:
        lines = split_lines(text)
        if len(lines) < MIN_LINES:
            raise InputTooShortError(
                f"input too short: need at least {MIN_LINES} non-empty lines, got {len(lines)}"
            )
        delimiter = detect_delimiter(lines[0])
        logger.debug("Detected %s delimiter over %d lines", delimiter.name, len(lines))

        theory_slots, lab_slots, theory_cols, lab_cols = parse_time_slots(lines, delimiter)
        self.state = ParseState.HEADER_PARSED
        logger.debug("Header: %d theory slots, %d lab slots", len(theory_slots), len(lab_slots))

        days = parse_day_rows(lines, delimiter, theory_cols, lab_cols, self.settings)
        # Guard only: with MIN_LINES met, the first pair either raises or adds a day.
        if not days:
            raise NoDayDataError()
        self.state = ParseState.DAYS_PARSED
        logger.debug("Parsed %d day(s): %s", len(days), ", ".join(days))

        return Timetable(theory_slots=theory_slots, lab_slots=lab_slots, days=days)


def parse_timetable_or_raise(text: str, settings: ParserSettings = DEFAULT_SETTINGS) -> Timetable:
    """Parse pasted timetable text, raising TimetableParseError on bad input."""
    return TimetableParser(settings).run(text)


def parse_timetable(text: str, settings: ParserSettings = DEFAULT_SETTINGS) -> ParseResult:
    """Parse pasted timetable text into a ParseResult.

    Malformed input never raises: the result carries the error and its
    reason instead, so the caller can keep the raw text for correction.
    """
    parser = TimetableParser(settings)
    try:
        tt = parser.run(text)
    except TimetableParseError as exc:
        logger.info("Timetable rejected: %s", exc.reason)
        return ParseResult(error=exc, reached=parser.failed_after or ParseState.START)
    return ParseResult(timetable=tt, reached=ParseState.DAYS_PARSED)
