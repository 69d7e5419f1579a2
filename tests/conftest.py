from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from src.governance_tracker.governance_tracker.reference.loader import StaticReferenceLoader
from src.governance_tracker.governance_tracker.storage.memory_store import InMemoryKeyValueStore

USERS = [
    {"pid": "12345678", "password": "senator1", "role": "senator"},
    {"pid": "23456789", "password": "senator2", "role": "senator"},
    {"pid": "90000001", "password": "cabinet1", "role": "admin"},
]

ASSIGNMENTS = [
    {"pid": "12345678", "committees": ["Student Affairs", "Equity"]},
    {"pid": "23456789", "committees": ["Undergraduate Studies"]},
]

MEETINGS = [
    {"id": "m1", "committee": "Student Affairs", "name": "CSA Meeting", "date": "2026-03-05", "time": "2:30 PM", "location": "Squires 219"},
    {"id": "m2", "committee": "Equity", "name": "CEI Meeting", "date": "2026-03-12", "time": "", "location": ""},
    {"id": "m3", "committee": "Undergraduate Studies", "name": "CUSP Meeting", "date": "2026-04-02", "time": "4:00 PM", "location": "Burruss"},
]

COMMITTEES = [{"name": "Student Affairs"}, {"name": "Equity"}, "Undergraduate Studies", {"name": "University Council"}]


@pytest.fixture
def fixed_now():
    return datetime(2026, 3, 5, 14, 30, 0, 123000, tzinfo=timezone.utc)


@pytest.fixture
def data_dir(tmp_path):
    root = tmp_path / "data"
    root.mkdir()
    for name, payload in (
        ("users.json", USERS),
        ("assignments.json", ASSIGNMENTS),
        ("meetings.json", MEETINGS),
        ("committees.json", COMMITTEES),
    ):
        (root / name).write_text(json.dumps(payload), encoding="utf-8")
    return root


@pytest.fixture
def loader(data_dir):
    return StaticReferenceLoader(data_dir)


@pytest.fixture
def store():
    return InMemoryKeyValueStore()
