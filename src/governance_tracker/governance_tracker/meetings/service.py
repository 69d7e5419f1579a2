from __future__ import annotations

import logging
import re
from dataclasses import replace
from datetime import date
from typing import Callable, Iterable, List, Optional, Sequence

from ..committees.model import CommitteeAssignment
from ..committees.service import get_assigned_committees
from ..common.datetime_utils import today_local
from ..common.validators import require_iso_date, require_non_empty
from ..core.constants import DEFAULT_COMMITTEE_NAME, DEFAULT_MEETING_NAME
from ..core.enums import StorageKey
from ..core.exceptions import ValidationError
from ..overrides.store import OverrideStore
from ..storage.repository import KeyValueStore
from .model import EDITABLE_FIELDS, Meeting

LOGGER = logging.getLogger("governance_tracker.meetings")

_NON_DIGITS = re.compile(r"\D")


def generate_meeting_id(meetings: Iterable[Meeting]) -> str:
    """Next id after the highest numeric suffix, e.g. m1, m3 -> m4."""

    numbers = []
    for meeting in meetings:
        digits = _NON_DIGITS.sub("", meeting.id or "")
        if digits and int(digits):
            numbers.append(int(digits))
    return f"m{max(numbers) + 1 if numbers else 1}"


def filter_by_committees(meetings: Iterable[Meeting], committees: Sequence[str]) -> List[Meeting]:
    return [m for m in meetings if m.committee in committees]


def committees_in(meetings: Iterable[Meeting]) -> List[str]:
    """Distinct committees in first-seen order."""
    seen: List[str] = []
    for meeting in meetings:
        if meeting.committee and meeting.committee not in seen:
            seen.append(meeting.committee)
    return seen


def _serialize(meetings: Sequence[Meeting]) -> list:
    return [m.to_dict() for m in meetings]


def _deserialize(raw) -> List[Meeting]:
    if not isinstance(raw, list):
        raise ValueError("meetings override must be a list")
    return [Meeting.from_dict(r) for r in raw]


class MeetingService:
    """Use case: the meeting calendar and its admin edits.

    Any add/edit/remove writes the whole list as the meetings override.
    """

    def __init__(self, store: KeyValueStore, loader, *, today: Callable[[], date] = today_local):
        self._overrides: OverrideStore[List[Meeting]] = OverrideStore(
            store, StorageKey.MEETINGS_OVERRIDE, serialize=_serialize, deserialize=_deserialize
        )
        self._loader = loader
        self._today = today

    @property
    def overrides(self) -> OverrideStore[List[Meeting]]:
        return self._overrides

    def list_meetings(self) -> List[Meeting]:
        return list(self._overrides.read_lazy(self._loader.load_meetings))

    def get_meeting(self, meeting_id: str) -> Optional[Meeting]:
        for meeting in self.list_meetings():
            if meeting.id == meeting_id:
                return meeting
        return None

    def add_meeting(
        self,
        *,
        committee: Optional[str] = None,
        name: str = DEFAULT_MEETING_NAME,
        date: Optional[str] = None,
        time: str = "",
        location: str = "",
    ) -> Meeting:
        meeting_name = require_non_empty(name, "Meeting name")
        meetings = self.list_meetings()
        if not committee:
            existing = committees_in(meetings)
            committee = existing[0] if existing else DEFAULT_COMMITTEE_NAME
        meeting_date = require_iso_date(date, "Date") if date else self._today().isoformat()

        meeting = Meeting(
            id=generate_meeting_id(meetings),
            committee=committee.strip(),
            name=meeting_name,
            date=meeting_date,
            time=(time or "").strip(),
            location=(location or "").strip(),
        )
        meetings.append(meeting)
        self._overrides.write(meetings)
        LOGGER.info("Added meeting %s (%s)", meeting.id, meeting.committee)
        return meeting

    def update_meeting(self, meeting_id: str, **changes: str) -> Meeting:
        """Apply one or more field edits as a single write.

        Every value is validated before anything is persisted, so a bad date
        leaves the other fields of the same edit unsaved too.
        """

        cleaned = {}
        for field, value in changes.items():
            if field not in EDITABLE_FIELDS:
                raise ValidationError(f"Field {field} cannot be edited")
            value = (value or "").strip()
            if field == "name":
                value = require_non_empty(value, "Meeting name")
            elif field == "date":
                value = require_iso_date(value, "Date", allow_empty=True)
            cleaned[field] = value

        meetings = self.list_meetings()
        for i, meeting in enumerate(meetings):
            if meeting.id == meeting_id:
                if cleaned:
                    meetings[i] = replace(meeting, **cleaned)
                    self._overrides.write(meetings)
                    LOGGER.info("Updated meeting %s: %s", meeting_id, ", ".join(sorted(cleaned)))
                return meetings[i]
        raise ValidationError("Meeting not found")

    def remove_meeting(self, meeting_id: str) -> List[Meeting]:
        meetings = [m for m in self.list_meetings() if m.id != meeting_id]
        self._overrides.write(meetings)
        LOGGER.info("Removed meeting %s", meeting_id)
        return meetings

    def meetings_for_committees(self, committees: Sequence[str]) -> List[Meeting]:
        return filter_by_committees(self.list_meetings(), committees)

    def meetings_for_senator(self, pid: str, assignments: Iterable[CommitteeAssignment]) -> List[Meeting]:
        return self.meetings_for_committees(get_assigned_committees(pid, assignments))
