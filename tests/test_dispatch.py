from __future__ import annotations

import json

import pytest

from src.governance_tracker.governance_tracker.container import build_container
from src.governance_tracker.governance_tracker.core.enums import Command, Role
from src.governance_tracker.governance_tracker.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ImportFormatError,
    ValidationError,
)


@pytest.fixture
def container(data_dir, store):
    return build_container(data_dir=data_dir, store=store)


def _login(container, pid, password):
    return container.dispatcher.dispatch(Command.LOGIN, pid=pid, password=password)


def test_login_command_opens_session(container):
    session = _login(container, "12345678", "senator1")
    assert session.role == Role.SENATOR
    assert container.sessions.get_session() == session


def test_login_command_rejects_bad_credentials(container):
    with pytest.raises(AuthenticationError):
        _login(container, "12345678", "bad")


def test_admin_commands_need_admin_session(container):
    with pytest.raises(AuthorizationError):
        container.dispatcher.dispatch(Command.ADD_MEETING)

    _login(container, "12345678", "senator1")
    with pytest.raises(AuthorizationError):
        container.dispatcher.dispatch(Command.ADD_ASSIGNMENT, pid="1", committee="Equity")
    with pytest.raises(AuthorizationError):
        container.dispatcher.dispatch(Command.RESET_OVERRIDES)


def test_senator_command_rejected_for_admin(container):
    _login(container, "90000001", "cabinet1")
    with pytest.raises(AuthorizationError):
        container.dispatcher.dispatch(Command.SUBMIT_ATTENDANCE, meeting_id="m1", attended=True)


def test_submit_only_for_own_committees(container):
    _login(container, "12345678", "senator1")

    submission = container.dispatcher.dispatch(Command.SUBMIT_ATTENDANCE, meeting_id="m1", attended=True)
    assert submission.meeting_name == "CSA Meeting"

    with pytest.raises(ValidationError):
        container.dispatcher.dispatch(Command.SUBMIT_ATTENDANCE, meeting_id="m3", attended=True)
    with pytest.raises(ValidationError):
        container.dispatcher.dispatch(Command.SUBMIT_ATTENDANCE, meeting_id="m404", attended=True)


def test_admin_edits_and_reset(container):
    _login(container, "90000001", "cabinet1")
    dispatch = container.dispatcher.dispatch

    meeting = dispatch(Command.ADD_MEETING, committee="Equity", name="Retreat", date="2026-05-01")
    dispatch(Command.UPDATE_MEETING, meeting_id=meeting.id, time="9:00 AM")
    dispatch(Command.ADD_ASSIGNMENT, pid="23456789", committee="Equity")
    assert container.meeting_service.get_meeting("m4").time == "9:00 AM"
    assert container.assignment_service.committees_for("23456789") == ["Equity", "Undergraduate Studies"]

    dispatch(Command.RESET_OVERRIDES)
    assert container.meeting_service.get_meeting("m4") is None
    assert container.assignment_service.committees_for("23456789") == ["Undergraduate Studies"]


def test_import_command_accepts_text_or_list(container):
    _login(container, "90000001", "cabinet1")
    entry = {"pid": "1", "meetingName": "M", "timestamp": "2026-01-01T00:00:00.000Z", "meetingId": "m1"}

    result = container.dispatcher.dispatch(Command.IMPORT_SUBMISSIONS, payload=json.dumps([entry]).encode("utf-8"))
    assert result.imported_count == 1
    result = container.dispatcher.dispatch(Command.IMPORT_SUBMISSIONS, payload=[entry])
    assert result.imported_count == 0

    with pytest.raises(ImportFormatError):
        container.dispatcher.dispatch(Command.IMPORT_SUBMISSIONS, payload='{"not": "a list"}')


def test_logout_command_clears_session(container):
    _login(container, "90000001", "cabinet1")
    container.dispatcher.dispatch("logout")
    assert container.sessions.get_session() is None
