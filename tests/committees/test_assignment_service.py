from __future__ import annotations

import json

import pytest

from src.governance_tracker.governance_tracker.committees.model import CommitteeAssignment
from src.governance_tracker.governance_tracker.committees.service import AssignmentService, get_assigned_committees
from src.governance_tracker.governance_tracker.core.enums import StorageKey
from src.governance_tracker.governance_tracker.core.exceptions import ValidationError
from src.governance_tracker.governance_tracker.meetings.model import Meeting


def test_get_assigned_committees_scenario():
    assignments = [
        CommitteeAssignment(pid="12345678", committees=("A", "B")),
        CommitteeAssignment(pid="23456789", committees=("C",)),
    ]
    assert get_assigned_committees("12345678", assignments) == ["A", "B"]
    assert get_assigned_committees("99999999", assignments) == []


def test_list_assignments_reads_static_file_until_edited(store, loader):
    svc = AssignmentService(store, loader)
    assert svc.committees_for("12345678") == ["Student Affairs", "Equity"]
    assert store.get(StorageKey.ASSIGNMENTS_OVERRIDE.value) is None


def test_add_assignment_sorts_and_deduplicates(store, loader):
    svc = AssignmentService(store, loader)

    svc.add_assignment("12345678", "Budget")
    svc.add_assignment("12345678", "Budget")

    assert svc.committees_for("12345678") == ["Budget", "Equity", "Student Affairs"]
    raw = json.loads(store.get(StorageKey.ASSIGNMENTS_OVERRIDE.value))
    assert {"pid": "12345678", "committees": ["Budget", "Equity", "Student Affairs"]} in raw


def test_add_assignment_creates_record_for_new_pid(store, loader):
    svc = AssignmentService(store, loader)
    svc.add_assignment(" 55555555 ", " Equity ")
    assert svc.committees_for("55555555") == ["Equity"]


def test_remove_last_committee_drops_record(store, loader):
    svc = AssignmentService(store, loader)
    svc.remove_assignment("23456789", "Undergraduate Studies")

    assert svc.committees_for("23456789") == []
    assert "23456789" not in [a.pid for a in svc.list_assignments()]


def test_remove_for_unknown_pid_writes_nothing(store, loader):
    svc = AssignmentService(store, loader)
    svc.remove_assignment("00000000", "Equity")
    assert store.get(StorageKey.ASSIGNMENTS_OVERRIDE.value) is None


@pytest.mark.parametrize("pid,committee", [("", "Equity"), ("12345678", "   ")])
def test_blank_inputs_are_rejected(store, loader, pid, committee):
    with pytest.raises(ValidationError):
        AssignmentService(store, loader).add_assignment(pid, committee)


def test_known_committees_merges_meetings_and_allowed_list(store, loader):
    svc = AssignmentService(store, loader)
    meetings = [Meeting(id="m1", committee="Budget", name="x", date="2026-01-01")]
    assert svc.known_committees(meetings) == [
        "Budget",
        "Equity",
        "Student Affairs",
        "Undergraduate Studies",
        "University Council",
    ]
