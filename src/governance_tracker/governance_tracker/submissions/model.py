from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from ..core.exceptions import ValidationError

REQUIRED_IMPORT_FIELDS = ("pid", "meetingName", "timestamp")


def _as_confirmed(value: Any) -> bool:
    # Hand-edited exports may carry "true"/"false" strings.
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return value is True


@dataclass(frozen=True)
class Submission:
    """Domain entity: one attendance/notes submission (append-only log entry).

    Serialized with the camelCase field names used by exported files so that
    exports from older installs can be imported unchanged.
    """

    pid: str
    committee_name: str
    meeting_name: str
    meeting_date: str
    meeting_id: str
    timestamp: str
    attendance_confirmed: bool
    notes: str = ""
    attachment_name: Optional[str] = None
    attachment_data: Optional[str] = None

    @property
    def identity(self) -> Tuple[str, str, str]:
        return (self.pid, self.meeting_id, self.timestamp)

    @property
    def has_attachment(self) -> bool:
        return bool(self.attachment_name and self.attachment_data)

    def to_dict(self) -> dict:
        out: dict[str, Any] = {
            "pid": self.pid,
            "committeeName": self.committee_name,
            "meetingName": self.meeting_name,
            "meetingDate": self.meeting_date,
            "meetingId": self.meeting_id,
            "timestamp": self.timestamp,
            "attendanceConfirmed": self.attendance_confirmed,
            "notes": self.notes,
        }
        if self.attachment_name:
            out["attachmentName"] = self.attachment_name
            out["attachmentData"] = self.attachment_data or ""
        return out

    @classmethod
    def from_dict(cls, raw: Any) -> "Submission":
        """Build from an imported record, rejecting entries missing identity fields."""

        if not isinstance(raw, Mapping):
            raise ValidationError("Submission entry must be an object")
        for field in REQUIRED_IMPORT_FIELDS:
            if not raw.get(field):
                raise ValidationError(f"Submission entry missing {field}")
        return cls.from_stored(raw)

    @classmethod
    def from_stored(cls, raw: Mapping[str, Any]) -> "Submission":
        """Build from a record already in the log; blank fields are kept as-is."""

        return cls(
            pid=str(raw.get("pid") or ""),
            committee_name=str(raw.get("committeeName") or ""),
            meeting_name=str(raw.get("meetingName") or ""),
            meeting_date=str(raw.get("meetingDate") or ""),
            meeting_id=str(raw.get("meetingId") or ""),
            timestamp=str(raw.get("timestamp") or ""),
            attendance_confirmed=_as_confirmed(raw.get("attendanceConfirmed")),
            notes=str(raw.get("notes") or ""),
            attachment_name=str(raw["attachmentName"]) if raw.get("attachmentName") else None,
            attachment_data=str(raw["attachmentData"]) if raw.get("attachmentData") else None,
        )


@dataclass(frozen=True)
class Attachment:
    """An uploaded file before it is encoded into a submission."""

    filename: str
    content: bytes
    mimetype: str = "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class ImportResult:
    imported_count: int
    total_count: int
    received_count: int
    skipped_count: int
