from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class ClassInfo:
    code: str
    room: str | None = None
    instructor: str | None = None
    color: str | None = None  # hsl() display hint, complex cells only

    def to_dict(self) -> Dict[str, str]:
        out = {"code": self.code}
        for key in ("room", "instructor", "color"):
            value = getattr(self, key)
            if value is not None:
                out[key] = value
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClassInfo":
        return cls(
            code=data["code"],
            room=data.get("room"),
            instructor=data.get("instructor"),
            color=data.get("color"),
        )
