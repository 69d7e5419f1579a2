"""Single entry point for state-changing user actions.

Controllers translate requests into a ``Command`` plus keyword payload; the
dispatcher checks the role the command needs and calls the owning service.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from .committees.service import AssignmentService
from .core.enums import Command, Role
from .core.exceptions import AuthorizationError, ValidationError
from .meetings.service import MeetingService
from .submissions.model import Attachment
from .submissions.service import SubmissionRecorder
from .users.model import Session
from .users.service import AuthService, SessionManager

LOGGER = logging.getLogger("governance_tracker.dispatch")

REQUIRED_ROLES: Dict[Command, Optional[Role]] = {
    Command.LOGIN: None,
    Command.LOGOUT: None,
    Command.SUBMIT_ATTENDANCE: Role.SENATOR,
    Command.ADD_ASSIGNMENT: Role.ADMIN,
    Command.REMOVE_ASSIGNMENT: Role.ADMIN,
    Command.ADD_MEETING: Role.ADMIN,
    Command.UPDATE_MEETING: Role.ADMIN,
    Command.REMOVE_MEETING: Role.ADMIN,
    Command.IMPORT_SUBMISSIONS: Role.ADMIN,
    Command.RESET_OVERRIDES: Role.ADMIN,
}


class Dispatcher:
    def __init__(
        self,
        *,
        auth: AuthService,
        sessions: SessionManager,
        assignments: AssignmentService,
        meetings: MeetingService,
        submissions: SubmissionRecorder,
    ):
        self._auth = auth
        self._sessions = sessions
        self._assignments = assignments
        self._meetings = meetings
        self._submissions = submissions
        self._handlers: Dict[Command, Callable[..., Any]] = {
            Command.LOGIN: self._login,
            Command.LOGOUT: self._logout,
            Command.SUBMIT_ATTENDANCE: self._submit_attendance,
            Command.ADD_ASSIGNMENT: self._add_assignment,
            Command.REMOVE_ASSIGNMENT: self._remove_assignment,
            Command.ADD_MEETING: self._add_meeting,
            Command.UPDATE_MEETING: self._update_meeting,
            Command.REMOVE_MEETING: self._remove_meeting,
            Command.IMPORT_SUBMISSIONS: self._import_submissions,
            Command.RESET_OVERRIDES: self._reset_overrides,
        }

    def dispatch(self, command: Command | str, **payload: Any) -> Any:
        command = Command(command)
        session = self._sessions.get_session()
        required = REQUIRED_ROLES[command]
        if required is not None and (session is None or session.role != required):
            LOGGER.warning("Rejected %s for %s", command.value, session.pid if session else "anonymous")
            raise AuthorizationError("You do not have permission to do that.")
        return self._handlers[command](session, **payload)

    def _login(self, _session: Optional[Session], *, pid: str, password: str) -> Session:
        return self._auth.login(pid, password)

    def _logout(self, _session: Optional[Session]) -> None:
        self._auth.logout()

    def _submit_attendance(
        self,
        session: Session,
        *,
        meeting_id: str,
        attended: bool = False,
        notes: str = "",
        attachment: Optional[Attachment] = None,
    ):
        committees = self._assignments.committees_for(session.pid)
        meeting = self._meetings.get_meeting(meeting_id)
        if meeting is None or meeting.committee not in committees:
            raise ValidationError("Meeting not found for your committees.")
        return self._submissions.submit(
            session=session,
            meeting=meeting,
            attended=attended,
            notes=notes,
            attachment=attachment,
        )

    def _add_assignment(self, _session: Session, *, pid: str, committee: str):
        return self._assignments.add_assignment(pid, committee)

    def _remove_assignment(self, _session: Session, *, pid: str, committee: str):
        return self._assignments.remove_assignment(pid, committee)

    def _add_meeting(self, _session: Session, **fields: Any):
        return self._meetings.add_meeting(**fields)

    def _update_meeting(self, _session: Session, *, meeting_id: str, **changes: str):
        return self._meetings.update_meeting(meeting_id, **changes)

    def _remove_meeting(self, _session: Session, *, meeting_id: str):
        return self._meetings.remove_meeting(meeting_id)

    def _import_submissions(self, _session: Session, *, payload: Any):
        if isinstance(payload, (str, bytes)):
            return self._submissions.import_json(payload)
        return self._submissions.import_submissions(payload)

    def _reset_overrides(self, _session: Session) -> None:
        self._meetings.overrides.clear()
        self._assignments.overrides.clear()
        LOGGER.info("Cleared meeting and assignment overrides")
