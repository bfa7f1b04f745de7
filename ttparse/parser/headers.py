from __future__ import annotations

import re
from typing import List, Sequence, Tuple

from ..models.period import TimeSlot
from .delimiter import Delimiter

PLACEHOLDER = "-"
LABEL_COLUMNS = 2
CLOCK = re.compile(r"\d{1,2}[:.]\d{2}")

# Row order of the four header lines
THEORY_START, THEORY_END, LAB_START, LAB_END = range(4)


def _usable(value: str) -> bool:
    return bool(value) and value != PLACEHOLDER


def _is_label(value: str) -> bool:
    return _usable(value) and not CLOCK.match(value)


def label_width(rows: Sequence[Sequence[str]]) -> int:
    """Number of leading label columns shared by all four header rows.

    Labelled exports carry "THEORY"/"Start" style text in columns 0-1 of at
    least one row; a header pasted without labels starts with data (times,
    "-" or blanks) in every row.
    """
    if any(_is_label(c) for row in rows for c in row[:LABEL_COLUMNS]):
        return LABEL_COLUMNS
    return 0


def pair_slots(starts: Sequence[str], ends: Sequence[str]) -> Tuple[List[TimeSlot], List[int]]:
    slots: List[TimeSlot] = []
    columns: List[int] = []
    for i, start in enumerate(starts):
        end = ends[i] if i < len(ends) else ""
        if _usable(start) and _usable(end):
            slots.append(TimeSlot(start=start, end=end))
            columns.append(i)
    return slots, columns


def parse_time_slots(
    lines: Sequence[str], delimiter: Delimiter
) -> Tuple[List[TimeSlot], List[TimeSlot], List[int], List[int]]:
    """Read theory/lab slots from the four header rows.

    Returns (theory_slots, lab_slots, theory_columns, lab_columns) where the
    column lists hold the data-column index each slot came from.
    """
    if len(lines) < 4:
        return [], [], [], []
    split = [[c.strip() for c in delimiter.split(lines[i])] for i in range(4)]
    skip = label_width(split)
    rows = [row[skip:] for row in split]
    theory, theory_cols = pair_slots(rows[THEORY_START], rows[THEORY_END])
    lab, lab_cols = pair_slots(rows[LAB_START], rows[LAB_END])
    return theory, lab, theory_cols, lab_cols
