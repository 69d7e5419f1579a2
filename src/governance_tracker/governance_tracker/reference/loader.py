"""Static reference data shipped with the application.

Files live under the configured data directory (``data/`` next to the
project by default) and are never written to. Any failure to read or parse
one of them is a ``LoadError``: an empty user directory would lock everybody
out, so no empty fallback is substituted.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List

from ..committees.model import CommitteeAssignment
from ..core.constants import ASSIGNMENTS_FILE, COMMITTEES_FILE, MEETINGS_FILE, USERS_FILE
from ..core.exceptions import LoadError
from ..meetings.model import Meeting
from ..users.model import User

LOGGER = logging.getLogger("governance_tracker.reference")


class StaticReferenceLoader:
    def __init__(self, data_dir: Path | str):
        self._data_dir = Path(data_dir).resolve()

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def resolve(self, filename: str) -> Path:
        path = (self._data_dir / filename).resolve()
        if self._data_dir not in path.parents:
            raise LoadError(f"Failed to load {filename}")
        return path

    def load(self, filename: str) -> Any:
        path = self.resolve(filename)
        try:
            with open(path, "r", encoding="utf-8") as handle:
                return json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            LOGGER.error("Failed to load reference file %s", path, exc_info=exc)
            raise LoadError(f"Failed to load {filename}") from exc

    def _load_list(self, filename: str) -> List[Any]:
        data = self.load(filename)
        if not isinstance(data, list):
            raise LoadError(f"Failed to load {filename}: expected a list")
        return data

    def load_users(self) -> List[User]:
        try:
            return [User.from_dict(r) for r in self._load_list(USERS_FILE) if isinstance(r, dict)]
        except ValueError as exc:
            raise LoadError(f"Failed to load {USERS_FILE}: {exc}") from exc

    def load_meetings(self) -> List[Meeting]:
        return [Meeting.from_dict(r) for r in self._load_list(MEETINGS_FILE) if isinstance(r, dict)]

    def load_assignments(self) -> List[CommitteeAssignment]:
        return [CommitteeAssignment.from_dict(r) for r in self._load_list(ASSIGNMENTS_FILE) if isinstance(r, dict)]

    def load_committees(self) -> List[str]:
        names: List[str] = []
        for entry in self._load_list(COMMITTEES_FILE):
            name = entry.get("name") if isinstance(entry, dict) else entry
            text = str(name).strip() if name else ""
            if text and text not in names:
                names.append(text)
        return names
