from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a directory entry loaded from ``users.json``.

    Note: passwords are compared as plain text; the directory is static seed data.
    """

    pid: str
    password: str
    role: Role

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "User":
        return cls(
            pid=str(raw.get("pid", "")).strip(),
            password=str(raw.get("password", "")),
            role=Role(str(raw.get("role", Role.SENATOR.value))),
        )


@dataclass(frozen=True)
class Session:
    """The record identifying the authenticated user of a profile."""

    pid: str
    role: Role
    timestamp: int

    def to_dict(self) -> dict:
        return {"pid": self.pid, "role": self.role.value, "timestamp": self.timestamp}

    @classmethod
    def from_dict(cls, raw: Any) -> Optional["Session"]:
        if not isinstance(raw, Mapping) or not raw.get("pid"):
            return None
        try:
            role = Role(str(raw.get("role")))
        except ValueError:
            return None
        try:
            timestamp = int(raw.get("timestamp") or 0)
        except (TypeError, ValueError):
            timestamp = 0
        return cls(pid=str(raw["pid"]), role=role, timestamp=timestamp)
