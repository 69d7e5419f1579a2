from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for access control."""

    SENATOR = "senator"
    ADMIN = "admin"


class StorageKey(str, Enum):
    """Keys of the persisted profile blobs, one per entity type."""

    SESSION = "vt_gov_session"
    SUBMISSIONS = "vt_gov_submissions"
    MEETINGS_OVERRIDE = "vt_gov_meetings_override"
    ASSIGNMENTS_OVERRIDE = "vt_gov_assignments_override"


class Command(str, Enum):
    """User actions understood by the dispatcher."""

    LOGIN = "login"
    LOGOUT = "logout"
    SUBMIT_ATTENDANCE = "submit_attendance"
    ADD_ASSIGNMENT = "add_assignment"
    REMOVE_ASSIGNMENT = "remove_assignment"
    ADD_MEETING = "add_meeting"
    UPDATE_MEETING = "update_meeting"
    REMOVE_MEETING = "remove_meeting"
    IMPORT_SUBMISSIONS = "import_submissions"
    RESET_OVERRIDES = "reset_overrides"


class Page(str, Enum):
    """Entry points a guard can send the user to (Flask endpoint names)."""

    LOGIN = "login"
    SENATOR_DASHBOARD = "dashboard"
    ADMIN_DASHBOARD = "admin_dashboard"
