"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MAX_ATTACHMENT_BYTES = 2 * 1024 * 1024

USERS_FILE = "users.json"
ASSIGNMENTS_FILE = "assignments.json"
MEETINGS_FILE = "meetings.json"
COMMITTEES_FILE = "committees.json"

EXPORT_BASENAME = "governance-submissions"
EXPORT_TITLE = "VT Shared Governance - Submissions"

DEFAULT_COMMITTEE_NAME = "New Committee"
DEFAULT_MEETING_NAME = "New Meeting"

CALENDAR_PALETTE = (
    "#861f41",
    "#e87722",
    "#2a9d8f",
    "#457b9d",
    "#7b2cbf",
    "#ef476f",
    "#118ab2",
    "#6a994e",
    "#bc6c25",
    "#3a86ff",
    "#ff6b6b",
    "#2b9348",
)
CALENDAR_FALLBACK_COLOR = "#6c757d"
