from dataclasses import dataclass


@dataclass(frozen=True)
class TimeSlot:
    start: str
    end: str

    def to_dict(self) -> dict:
        return {"start": self.start, "end": self.end}
