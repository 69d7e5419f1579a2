from __future__ import annotations

import io
import json

import pytest

from src.governance_tracker.governance_tracker.core.enums import StorageKey
from src.governance_tracker.governance_tracker.main import create_app
from src.governance_tracker.governance_tracker.storage.memory_store import InMemoryKeyValueStore


@pytest.fixture
def app(monkeypatch, data_dir, store):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app({"DATA_DIR": str(data_dir)}, store=store)


@pytest.fixture
def client(app):
    return app.test_client()


def _login(client, pid, password):
    return client.post("/", data={"pid": pid, "password": password})


def test_protected_pages_redirect_to_login(client):
    for path in ("/dashboard", "/admin", "/calendar"):
        resp = client.get(path)
        assert resp.status_code == 302
        assert resp.headers["Location"].endswith("/")


def test_login_page_renders(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert b'name="pid"' in resp.data


def test_bad_login_shows_error(client):
    resp = _login(client, "12345678", "wrong")
    assert resp.status_code == 200
    assert b"Invalid PID or password." in resp.data


def test_senator_flow(client, store):
    resp = _login(client, " 12345678 ", "senator1")
    assert resp.headers["Location"].endswith("/dashboard")

    page = client.get("/dashboard")
    assert page.status_code == 200
    assert b"CSA Meeting" in page.data
    assert b"CUSP Meeting" not in page.data

    resp = client.post(
        "/dashboard/submit/m1",
        data={
            "attendance": "confirmed",
            "notes": "Voted on the budget",
            "attachment": (io.BytesIO(b"%PDF-1.4"), "minutes.pdf"),
        },
        content_type="multipart/form-data",
    )
    assert resp.status_code == 302

    saved = json.loads(store.get(StorageKey.SUBMISSIONS.value))
    assert saved[0]["pid"] == "12345678"
    assert saved[0]["attendanceConfirmed"] is True
    assert saved[0]["attachmentName"] == "minutes.pdf"

    # A senator hitting the admin page lands back on their dashboard.
    resp = client.get("/admin")
    assert resp.headers["Location"].endswith("/dashboard")


def test_oversized_attachment_is_refused(client, store):
    _login(client, "12345678", "senator1")
    resp = client.post(
        "/dashboard/submit/m1",
        data={"attachment": (io.BytesIO(b"x" * (2 * 1024 * 1024 + 1)), "big.pdf")},
        content_type="multipart/form-data",
        follow_redirects=True,
    )
    assert b"File too large. Maximum size is 2MB." in resp.data
    assert store.get(StorageKey.SUBMISSIONS.value) is None


def test_admin_flow(client):
    resp = _login(client, "90000001", "cabinet1")
    assert resp.headers["Location"].endswith("/admin")

    page = client.get("/admin?month=2026-03")
    assert page.status_code == 200
    assert b"March 2026" in page.data

    client.post("/admin/meetings/add", data={"committee": "Equity", "name": "Retreat", "date": "2026-05-01"})
    client.post("/admin/meetings/m4/update", data={"location": "Newman 101"})
    client.post("/admin/assignments/add", data={"pid": "23456789", "committee": "Equity"})

    page = client.get("/admin")
    assert b"Retreat" in page.data
    assert b"Newman 101" in page.data

    payload = [{"pid": "1", "meetingName": "M", "timestamp": "2026-01-01T00:00:00.000Z", "meetingId": "m1"}]
    resp = client.post(
        "/admin/submissions/import",
        data={"file": (io.BytesIO(json.dumps(payload).encode("utf-8")), "backup.json")},
        content_type="multipart/form-data",
        follow_redirects=True,
    )
    assert b"Imported 1 submissions. Total: 1" in resp.data

    for fmt, magic in (("json", b"["), ("pdf", b"%PDF"), ("doc", b"\xef\xbb\xbf"), ("csv", b"\xef\xbb\xbf"), ("xlsx", b"PK")):
        resp = client.get(f"/admin/submissions/export.{fmt}")
        assert resp.status_code == 200
        assert resp.data.startswith(magic)
        assert "governance-submissions-" in resp.headers["Content-Disposition"]


def test_calendar_is_filtered_for_senators(client):
    _login(client, "23456789", "senator2")
    page = client.get("/calendar?month=2026-04")
    assert page.status_code == 200
    assert b"April 2026" in page.data
    assert b"CUSP Meeting" in page.data

    page = client.get("/calendar?month=2026-03")
    assert b"CSA Meeting" not in page.data


def test_logout_clears_profile_session(client, store):
    _login(client, "12345678", "senator1")
    client.get("/logout")
    assert store.get(StorageKey.SESSION.value) is None


def test_missing_reference_data_renders_error_page(monkeypatch, tmp_path):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app({"DATA_DIR": str(tmp_path / "nowhere")}, store=InMemoryKeyValueStore())
    resp = app.test_client().post("/", data={"pid": "1", "password": "x"})
    assert resp.status_code == 500
    assert b"Failed to load users.json" in resp.data


def test_meeting_edit_with_bad_date_saves_nothing(client, store):
    _login(client, "90000001", "cabinet1")
    resp = client.post(
        "/admin/meetings/m1/update",
        data={"committee": "Equity", "name": "Renamed", "date": "not-a-date"},
        follow_redirects=True,
    )

    assert b"Date must be a date (YYYY-MM-DD)" in resp.data
    assert store.get(StorageKey.MEETINGS_OVERRIDE.value) is None
