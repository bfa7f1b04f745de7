from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .classinfo import ClassInfo
from .period import TimeSlot


TRACKS = ("theory", "lab")

Cell = Optional[ClassInfo]


def _cells_to_json(cells: List[Cell]) -> List[Dict[str, str] | None]:
    return [c.to_dict() if c is not None else None for c in cells]


def _cells_from_json(raw: Iterable[Any]) -> List[Cell]:
    return [ClassInfo.from_dict(c) if c else None for c in raw]


@dataclass
class DaySchedule:
    theory: List[Cell] = field(default_factory=list)
    lab: List[Cell] = field(default_factory=list)

    def track(self, track: str) -> List[Cell]:
        if track not in TRACKS:
            raise KeyError(track)
        return self.theory if track == "theory" else self.lab


@dataclass
class Timetable:
    theory_slots: List[TimeSlot] = field(default_factory=list)
    lab_slots: List[TimeSlot] = field(default_factory=list)
    days: Dict[str, DaySchedule] = field(default_factory=dict)

    def slots_for(self, track: str) -> List[TimeSlot]:
        if track not in TRACKS:
            raise KeyError(track)
        return self.theory_slots if track == "theory" else self.lab_slots

    def cells(self, day: str, track: str) -> List[Cell]:
        return self.days[day].track(track)

    def get(self, day: str, track: str, index: int) -> Cell:
        row = self.cells(day, track)
        return row[index] if 0 <= index < len(row) else None

    def iter_classes(self) -> Iterable[Tuple[str, str, int, ClassInfo]]:
        for day, sched in self.days.items():
            for track in TRACKS:
                for idx, c in enumerate(sched.track(track)):
                    if c is not None:
                        yield day, track, idx, c

    def to_dict(self) -> Dict[str, Any]:
        return {
            "theorySlots": [s.to_dict() for s in self.theory_slots],
            "labSlots": [s.to_dict() for s in self.lab_slots],
            "days": {
                day: {"theory": _cells_to_json(d.theory), "lab": _cells_to_json(d.lab)}
                for day, d in self.days.items()
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Timetable":
        return cls(
            theory_slots=[TimeSlot(s["start"], s["end"]) for s in data.get("theorySlots", [])],
            lab_slots=[TimeSlot(s["start"], s["end"]) for s in data.get("labSlots", [])],
            days={
                day: DaySchedule(
                    theory=_cells_from_json(d.get("theory", [])),
                    lab=_cells_from_json(d.get("lab", [])),
                )
                for day, d in data.get("days", {}).items()
            },
        )
