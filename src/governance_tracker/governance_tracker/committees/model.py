from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Tuple


def normalize_committees(names: Iterable[Any]) -> Tuple[str, ...]:
    """Deduplicate committee names, keeping first-seen order."""
    seen: list[str] = []
    for name in names or ():
        text = str(name).strip() if name is not None else ""
        if text and text not in seen:
            seen.append(text)
    return tuple(seen)


@dataclass(frozen=True)
class CommitteeAssignment:
    """One record per senator: the committees they sit on."""

    pid: str
    committees: Tuple[str, ...]

    @property
    def sorted_committees(self) -> list[str]:
        return sorted(self.committees)

    def has(self, committee: str) -> bool:
        return committee in self.committees

    def to_dict(self) -> dict:
        return {"pid": self.pid, "committees": list(self.committees)}

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "CommitteeAssignment":
        committees = raw.get("committees") or []
        if isinstance(committees, str):
            committees = [committees]
        return cls(pid=str(raw.get("pid", "")).strip(), committees=normalize_committees(committees))
