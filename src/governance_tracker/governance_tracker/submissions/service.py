from __future__ import annotations

import base64
import binascii
import json
import logging
import re
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple

from werkzeug.utils import secure_filename

from ..common.datetime_utils import now_utc, to_iso_timestamp
from ..common.validators import require_max_bytes
from ..core.constants import MAX_ATTACHMENT_BYTES
from ..core.enums import StorageKey
from ..core.exceptions import ImportFormatError, ValidationError
from ..meetings.model import Meeting
from ..overrides.store import OverrideStore
from ..storage.repository import KeyValueStore
from ..users.model import Session
from .model import Attachment, ImportResult, Submission

LOGGER = logging.getLogger("governance_tracker.submissions")

_DATA_URL = re.compile(r"^data:(?P<mime>[^;,]*)(?P<params>(;[^;,]*)*?);base64,(?P<payload>.*)$", re.DOTALL)


def encode_data_url(attachment: Attachment) -> str:
    payload = base64.b64encode(attachment.content).decode("ascii")
    return f"data:{attachment.mimetype or 'application/octet-stream'};base64,{payload}"


def decode_data_url(value: str) -> Tuple[str, bytes]:
    match = _DATA_URL.match(value or "")
    if not match:
        raise ValidationError("Attachment data is not a base64 data URL")
    try:
        content = base64.b64decode(match.group("payload"), validate=False)
    except (binascii.Error, ValueError):
        raise ValidationError("Attachment data is corrupt")
    return match.group("mime") or "application/octet-stream", content


def _contains(value: str, needle: str) -> bool:
    return needle.lower() in str(value or "").lower()


def filter_submissions(
    submissions: Sequence[Submission],
    *,
    pid: str = "",
    committee: str = "",
    meeting: str = "",
) -> List[Submission]:
    """Case-insensitive substring filters used by the admin table."""

    out = list(submissions)
    if pid:
        out = [s for s in out if _contains(s.pid, pid)]
    if committee:
        out = [s for s in out if _contains(s.committee_name, committee)]
    if meeting:
        out = [s for s in out if _contains(s.meeting_name, meeting)]
    return out


def _serialize(submissions: Sequence[Submission]) -> list:
    return [s.to_dict() for s in submissions]


def _deserialize(raw) -> List[Submission]:
    if not isinstance(raw, list):
        raise ValueError("submissions must be a list")
    out: List[Submission] = []
    for entry in raw:
        if isinstance(entry, Mapping):
            out.append(Submission.from_stored(entry))
        else:
            LOGGER.warning("Skipping non-object entry in stored submissions")
    return out


class SubmissionRecorder:
    """Use case: the append-only submissions log.

    ``record`` never deduplicates; only ``import_submissions`` drops entries
    whose (pid, meetingId, timestamp) already exist.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        max_attachment_bytes: int = MAX_ATTACHMENT_BYTES,
        clock: Callable = now_utc,
    ):
        self._log: OverrideStore[List[Submission]] = OverrideStore(
            store, StorageKey.SUBMISSIONS, serialize=_serialize, deserialize=_deserialize
        )
        self._max_attachment_bytes = int(max_attachment_bytes)
        self._clock = clock

    @property
    def max_attachment_bytes(self) -> int:
        return self._max_attachment_bytes

    def list_submissions(self) -> List[Submission]:
        return list(self._log.read([]))

    def submissions_for(self, pid: str) -> List[Submission]:
        return [s for s in self.list_submissions() if s.pid == str(pid)]

    def record(self, submission: Submission) -> None:
        submissions = self.list_submissions()
        submissions.append(submission)
        self._log.write(submissions)
        LOGGER.info("Recorded submission from %s for %s", submission.pid, submission.meeting_id)

    def check_attachment(self, attachment: Attachment) -> None:
        require_max_bytes(attachment.size, "File", self._max_attachment_bytes)

    def submit(
        self,
        *,
        session: Session,
        meeting: Meeting,
        attended: bool,
        notes: str = "",
        attachment: Optional[Attachment] = None,
    ) -> Submission:
        """Build a submission for ``meeting`` and record it.

        An oversized attachment raises ValidationError and nothing is recorded.
        """

        attachment_name = None
        attachment_data = None
        if attachment is not None and attachment.filename:
            self.check_attachment(attachment)
            attachment_name = secure_filename(attachment.filename) or "attachment"
            attachment_data = encode_data_url(attachment)

        submission = Submission(
            pid=session.pid,
            committee_name=meeting.committee,
            meeting_name=meeting.name,
            meeting_date=meeting.date,
            meeting_id=meeting.id,
            timestamp=to_iso_timestamp(self._clock()),
            attendance_confirmed=bool(attended),
            notes=(notes or "").strip(),
            attachment_name=attachment_name,
            attachment_data=attachment_data,
        )
        self.record(submission)
        return submission

    def import_submissions(self, candidates: Any) -> ImportResult:
        if not isinstance(candidates, list):
            raise ImportFormatError("Invalid file. Please select a valid submissions JSON export.")

        merged = self.list_submissions()
        seen = {s.identity for s in merged}
        imported = 0
        skipped = 0
        for entry in candidates:
            try:
                submission = Submission.from_dict(entry)
            except ValidationError:
                skipped += 1
                continue
            if submission.identity in seen:
                continue
            seen.add(submission.identity)
            merged.append(submission)
            imported += 1

        self._log.write(merged)
        LOGGER.info("Imported %d of %d submissions (total %d)", imported, len(candidates), len(merged))
        return ImportResult(
            imported_count=imported,
            total_count=len(merged),
            received_count=len(candidates),
            skipped_count=skipped,
        )

    def import_json(self, text: str | bytes) -> ImportResult:
        try:
            payload = json.loads(text)
        except (ValueError, TypeError):
            raise ImportFormatError("Invalid file. Please select a valid submissions JSON export.")
        return self.import_submissions(payload)

    def export_json(self) -> str:
        return json.dumps(_serialize(self.list_submissions()), indent=2, ensure_ascii=False)

    def get_attachment(self, index: int) -> Tuple[str, str, bytes]:
        submissions = self.list_submissions()
        if index < 0 or index >= len(submissions):
            raise ValidationError("Submission not found")
        submission = submissions[index]
        if not submission.has_attachment:
            raise ValidationError("Submission has no attachment")
        mime, content = decode_data_url(submission.attachment_data or "")
        return submission.attachment_name or "attachment", mime, content

    def clear(self) -> None:
        self._log.clear()
