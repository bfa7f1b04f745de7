from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from .timetable import Timetable


@dataclass
class FacultyProfile:
    uid: str
    name: str = ""
    department: str = ""
    employee_id: str = ""
    timetable: Timetable | None = None
    signup_completed: bool = False
    completed_at: str | None = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "name": self.name,
            "department": self.department,
            "employeeId": self.employee_id,
            "signupCompleted": self.signup_completed,
        }
        if self.timetable is not None:
            out["timetable"] = self.timetable.to_dict()
        if self.completed_at is not None:
            out["completedAt"] = self.completed_at
        return out

    @classmethod
    def from_dict(cls, uid: str, data: Dict[str, Any]) -> "FacultyProfile":
        tt = data.get("timetable")
        return cls(
            uid=uid,
            name=data.get("name") or "",
            department=data.get("department") or "",
            employee_id=data.get("employeeId") or "",
            timetable=Timetable.from_dict(tt) if tt else None,
            signup_completed=bool(data.get("signupCompleted", False)),
            completed_at=data.get("completedAt"),
        )
