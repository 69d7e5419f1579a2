from __future__ import annotations

from datetime import date

import pytest

from src.governance_tracker.governance_tracker.core.enums import StorageKey
from src.governance_tracker.governance_tracker.core.exceptions import ValidationError
from src.governance_tracker.governance_tracker.meetings.model import Meeting
from src.governance_tracker.governance_tracker.meetings.service import MeetingService, generate_meeting_id


def _m(mid):
    return Meeting(id=mid, committee="A", name="x", date="2026-01-01")


def test_generate_meeting_id_uses_highest_numeric_suffix():
    assert generate_meeting_id([_m("m1"), _m("m3")]) == "m4"


def test_generate_meeting_id_ignores_ids_without_digits():
    assert generate_meeting_id([]) == "m1"
    assert generate_meeting_id([_m("intro"), _m("m0")]) == "m1"
    assert generate_meeting_id([_m("meeting-12"), _m("m2")]) == "m13"


def _service(store, loader):
    return MeetingService(store, loader, today=lambda: date(2026, 3, 1))


def test_list_meetings_defaults_to_static_file(store, loader):
    assert [m.id for m in _service(store, loader).list_meetings()] == ["m1", "m2", "m3"]


def test_add_meeting_defaults(store, loader):
    svc = _service(store, loader)
    meeting = svc.add_meeting()

    assert meeting.id == "m4"
    assert meeting.committee == "Student Affairs"
    assert meeting.name == "New Meeting"
    assert meeting.date == "2026-03-01"
    assert store.get(StorageKey.MEETINGS_OVERRIDE.value) is not None
    assert svc.get_meeting("m4") == meeting


def test_add_meeting_rejects_bad_date(store, loader):
    with pytest.raises(ValidationError):
        _service(store, loader).add_meeting(committee="Equity", date="03/01/2026")


def test_update_meeting_field(store, loader):
    svc = _service(store, loader)
    updated = svc.update_meeting("m2", location="  Newman 101 ")

    assert updated.location == "Newman 101"
    assert svc.get_meeting("m2").location == "Newman 101"
    assert svc.get_meeting("m1").location == "Squires 219"


def test_update_meeting_validates_field_and_id(store, loader):
    svc = _service(store, loader)
    with pytest.raises(ValidationError):
        svc.update_meeting("m1", id="m99")
    with pytest.raises(ValidationError):
        svc.update_meeting("m1", date="tomorrow")
    with pytest.raises(ValidationError):
        svc.update_meeting("m404", name="Ghost")


def test_remove_meeting_persists_override(store, loader):
    svc = _service(store, loader)
    svc.remove_meeting("m1")

    assert [m.id for m in svc.list_meetings()] == ["m2", "m3"]
    # A later add keeps numbering above the remaining ids.
    assert svc.add_meeting(committee="Equity").id == "m4"


def test_meetings_for_committees(store, loader):
    svc = _service(store, loader)
    assert [m.id for m in svc.meetings_for_committees(["Equity", "Undergraduate Studies"])] == ["m2", "m3"]
    assert svc.meetings_for_committees([]) == []


def test_clearing_override_restores_static_meetings(store, loader):
    svc = _service(store, loader)
    svc.remove_meeting("m1")
    svc.overrides.clear()
    assert len(svc.list_meetings()) == 3


def test_meetings_for_senator_uses_assignments(store, loader):
    svc = _service(store, loader)
    assignments = loader.load_assignments()

    assert [m.id for m in svc.meetings_for_senator("12345678", assignments)] == ["m1", "m2"]
    assert svc.meetings_for_senator("00000000", assignments) == []


def test_update_meeting_applies_several_fields_in_one_write(store, loader):
    svc = _service(store, loader)
    updated = svc.update_meeting("m1", committee="Equity", name="Joint Session", time="5:00 PM")

    assert (updated.committee, updated.name, updated.time) == ("Equity", "Joint Session", "5:00 PM")
    assert svc.get_meeting("m1") == updated


def test_invalid_date_leaves_whole_edit_unsaved(store, loader):
    svc = _service(store, loader)
    before = svc.get_meeting("m1")

    with pytest.raises(ValidationError):
        svc.update_meeting("m1", committee="Equity", name="Joint Session", date="bad")

    assert svc.get_meeting("m1") == before
    assert store.get(StorageKey.MEETINGS_OVERRIDE.value) is None


def test_meeting_name_cannot_be_blank(store, loader):
    svc = _service(store, loader)
    with pytest.raises(ValidationError):
        svc.update_meeting("m1", name="   ")
    with pytest.raises(ValidationError):
        svc.add_meeting(committee="Equity", name="")
    assert svc.get_meeting("m1").name == "CSA Meeting"
