from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

EDITABLE_FIELDS = ("committee", "name", "date", "time", "location")


@dataclass(frozen=True)
class Meeting:
    """Domain entity: a scheduled committee meeting.

    ``time`` is free display text ("2:00 PM"), ``date`` an ISO date string.
    """

    id: str
    committee: str
    name: str
    date: str
    time: str = ""
    location: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "committee": self.committee,
            "name": self.name,
            "date": self.date,
            "time": self.time,
            "location": self.location,
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Meeting":
        return cls(
            id=str(raw.get("id") or ""),
            committee=str(raw.get("committee") or ""),
            name=str(raw.get("name") or ""),
            date=str(raw.get("date") or ""),
            time=str(raw.get("time") or ""),
            location=str(raw.get("location") or ""),
        )
