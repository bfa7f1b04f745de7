from __future__ import annotations

from collections import defaultdict
from typing import Dict, List

from ..models.profile import FacultyProfile
from ..models.timetable import TRACKS, Timetable


def check_timetable(tt: Timetable) -> Dict[str, object]:
    report: Dict[str, object] = {}
    report["day_count"] = len(tt.days)
    report["theory_slot_count"] = len(tt.theory_slots)
    report["lab_slot_count"] = len(tt.lab_slots)

    violations_by_rule: Dict[str, List[str]] = defaultdict(list)

    # Each day row must line up with its slot row
    for day, sched in tt.days.items():
        for track in TRACKS:
            want = len(tt.slots_for(track))
            got = len(sched.track(track))
            if got != want:
                violations_by_rule[f"{track}_length"].append(f"{day}: {got} cells for {want} slots")

    for track in TRACKS:
        for idx, s in enumerate(tt.slots_for(track)):
            if not s.start or not s.end or "-" in (s.start, s.end):
                violations_by_rule["bad_slot"].append(f"{track}[{idx}]")

    classes = list(tt.iter_classes())
    for day, track, idx, c in classes:
        if not c.code:
            violations_by_rule["empty_code"].append(f"{day} {track}[{idx}]")

    report["class_count"] = len(classes)
    report["complex_count"] = sum(1 for *_, c in classes if c.color is not None)
    report["violations_by_rule"] = dict(violations_by_rule)
    return report


def validate_profile(profile: FacultyProfile) -> str | None:
    if not profile.name.strip():
        return "Full name is required"
    if not profile.department.strip():
        return "Department is required"
    if not profile.employee_id.strip():
        return "Employee ID is required"
    return None
