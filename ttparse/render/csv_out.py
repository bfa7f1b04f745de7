from __future__ import annotations

from pathlib import Path
from typing import List

from ..models.timetable import TRACKS, Timetable

HEADER = "Track,Day,SlotStart,SlotEnd,Code,Room,Instructor"


def _field(value: str | None) -> str:
    value = value or ""
    if any(ch in value for ch in ',"\n'):
        return '"' + value.replace('"', '""') + '"'
    return value


def csv_blocks(tt: Timetable) -> str:
    # One block per track, blank line between blocks
    lines: List[str] = []
    for track in TRACKS:
        lines.append(HEADER)
        for day in tt.days:
            for idx, s in enumerate(tt.slots_for(track)):
                c = tt.get(day, track, idx)
                prefix = f"{track},{_field(day)},{_field(s.start)},{_field(s.end)}"
                if c is None:
                    lines.append(f"{prefix},,,")
                else:
                    lines.append(f"{prefix},{_field(c.code)},{_field(c.room)},{_field(c.instructor)}")
        lines.append("")
    return "\n".join(lines)


def write_csv_blocks(text: str, outputs_dir: Path) -> Path:
    outputs_dir.mkdir(parents=True, exist_ok=True)
    path = outputs_dir / "timetable.csv"
    with path.open("w", encoding="utf-8") as f:
        f.write(text)
    return path
