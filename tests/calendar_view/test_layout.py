from __future__ import annotations

from datetime import date

from src.governance_tracker.governance_tracker.calendar_view.layout import (
    build_committee_colors,
    build_month,
    first_meeting_month,
    parse_month,
    shift_month,
)
from src.governance_tracker.governance_tracker.core.constants import CALENDAR_PALETTE
from src.governance_tracker.governance_tracker.meetings.model import Meeting

MEETINGS = [
    Meeting(id="m1", committee="Student Affairs", name="CSA Meeting", date="2026-03-05", time="2:30 PM"),
    Meeting(id="m2", committee="Equity", name="Equity", date="2026-03-05"),
    Meeting(id="m3", committee="Undergraduate Studies", name="CUSP", date="2026-04-02", time="4:00 PM"),
    Meeting(id="m4", committee="Budget", name="No date yet", date=""),
]


def test_grid_starts_on_sunday_with_leading_blanks():
    # 2026-04-01 is a Wednesday.
    month = build_month(MEETINGS, date(2026, 4, 1), today=date(2026, 4, 20))

    assert month.label == "April 2026"
    assert [c.is_blank for c in month.cells[:4]] == [True, True, True, False]
    assert month.cells[3].day == 1
    assert len(month.cells) == 3 + 30
    assert all(len(week) == 7 for week in month.weeks)


def test_month_starting_on_sunday_has_no_blanks():
    month = build_month(MEETINGS, date(2026, 3, 15), today=date(2026, 3, 5))
    assert month.month == date(2026, 3, 1)
    assert month.cells[0].day == 1
    assert month.cells[4].is_today


def test_events_land_on_their_day_with_committee_colors():
    month = build_month(MEETINGS, date(2026, 3, 1), today=date(2026, 1, 1))
    fifth = month.cells[4]

    assert fifth.has_events
    assert [e.meeting.id for e in fifth.events] == ["m1", "m2"]
    csa, equity = fifth.events
    assert csa.label == "Student Affairs"
    assert csa.secondary_label == "CSA Meeting"
    assert csa.time_label == "2:30 PM"
    # Name equal to committee is not repeated; missing time shows a placeholder.
    assert equity.secondary_label == ""
    assert equity.time_label == "Time TBD"
    assert month.meetings_in_month == 2
    assert month.hint == "2 meetings in this month."


def test_committee_colors_follow_sorted_names():
    colors = build_committee_colors(MEETINGS)
    assert colors["Budget"] == CALENDAR_PALETTE[0]
    assert colors["Equity"] == CALENDAR_PALETTE[1]
    assert colors["Undergraduate Studies"] == CALENDAR_PALETTE[3]


def test_empty_month_hint_and_first_meeting_month():
    month = build_month(MEETINGS, date(2026, 7, 1), today=date(2026, 7, 1))
    assert month.meetings_in_month == 0
    assert "Jump to First Meeting" in month.hint
    assert month.first_meeting_month == date(2026, 3, 1)
    assert first_meeting_month([MEETINGS[3]]) is None


def test_shift_month_crosses_years():
    assert shift_month(date(2026, 1, 1), -1) == date(2025, 12, 1)
    assert shift_month(date(2026, 12, 1), 1) == date(2027, 1, 1)
    month = build_month([], date(2026, 12, 1), today=date(2026, 12, 1))
    assert month.next_month == date(2027, 1, 1)
    assert month.previous_month == date(2026, 11, 1)


def test_parse_month():
    default = date(2026, 10, 1)
    assert parse_month("2026-03", default) == date(2026, 3, 1)
    assert parse_month("2026-03-19", default) == date(2026, 3, 1)
    assert parse_month("March", default) == default
    assert parse_month(None, default) == default
