from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from ..config import ParserSettings
from ..errors import EmptyDayNameError, TruncatedRowError
from ..models.timetable import Cell, DaySchedule
from .cells import DEFAULT_SETTINGS, parse_cell
from .delimiter import Delimiter

logger = logging.getLogger(__name__)

FIRST_DAY_LINE = 4
MIN_ROW_COLUMNS = 3  # day, label, at least one cell


def _split_row(line: str, delimiter: Delimiter, line_no: int) -> List[str]:
    cols = delimiter.split(line)
    if len(cols) < MIN_ROW_COLUMNS:
        raise TruncatedRowError(
            f"line {line_no}: expected at least {MIN_ROW_COLUMNS} columns, got {len(cols)}"
        )
    return cols


def _check_label(label: str, role: str, day: str) -> None:
    if label.strip() and role not in label.strip().lower():
        logger.warning("%s: %r row labelled %r; pairing by position", day, role, label.strip())


def align_cells(
    data: Sequence[str],
    columns: Sequence[int],
    settings: ParserSettings,
    day: str,
    track: str,
) -> List[Cell]:
    """Pick the cells that sit under a real time slot.

    Missing trailing cells become None. Non-empty cells in columns without a
    slot are dropped and reported.
    """
    out = [parse_cell(data[j], settings) if j < len(data) else None for j in columns]
    kept = set(columns)
    dropped = [j for j in range(len(data)) if j not in kept and parse_cell(data[j], settings)]
    if dropped:
        logger.warning(
            "%s %s: dropping %d cell(s) with no time slot at columns %s",
            day, track, len(dropped), dropped,
        )
    return out


def parse_day_rows(
    lines: Sequence[str],
    delimiter: Delimiter,
    theory_columns: Sequence[int],
    lab_columns: Sequence[int],
    settings: ParserSettings = DEFAULT_SETTINGS,
) -> Dict[str, DaySchedule]:
    """Consume (theory, lab) row pairs from line 4 onwards.

    The first row of a pair is always theory and the second lab; the label
    column is only checked for logging. A dangling final row is ignored.
    """
    days: Dict[str, DaySchedule] = {}
    for i in range(FIRST_DAY_LINE, len(lines), 2):
        if i + 1 >= len(lines):
            logger.warning("line %d: theory row without a lab row, ignored", i + 1)
            break

        theory_row = _split_row(lines[i], delimiter, i + 1)
        lab_row = _split_row(lines[i + 1], delimiter, i + 2)

        day = theory_row[0].strip()
        if not day:
            raise EmptyDayNameError(f"line {i + 1}: day name is empty")
        _check_label(theory_row[1], "theory", day)
        _check_label(lab_row[1], "lab", day)

        if day in days:
            logger.warning("%s appears more than once; keeping the later rows", day)
        days[day] = DaySchedule(
            theory=align_cells(theory_row[2:], theory_columns, settings, day, "theory"),
            lab=align_cells(lab_row[2:], lab_columns, settings, day, "lab"),
        )
    return days
