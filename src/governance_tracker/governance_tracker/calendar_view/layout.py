"""Month-view calendar layout.

Pure functions: given meetings and a month, build the grid the template
renders. Nothing here keeps state between renders besides the month the
caller passes in.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from ..common.datetime_utils import today_local, try_parse_iso_date
from ..core.constants import CALENDAR_FALLBACK_COLOR, CALENDAR_PALETTE
from ..meetings.model import Meeting

WEEKDAY_HEADERS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


@dataclass(frozen=True)
class CalendarEvent:
    meeting: Meeting
    color: str
    label: str
    secondary_label: str
    time_label: str


@dataclass(frozen=True)
class DayCell:
    day: Optional[int]
    events: Sequence[CalendarEvent] = ()
    is_today: bool = False

    @property
    def is_blank(self) -> bool:
        return self.day is None

    @property
    def has_events(self) -> bool:
        return bool(self.events)


@dataclass(frozen=True)
class CalendarMonth:
    month: date
    label: str
    cells: Sequence[DayCell]
    legend: Sequence[tuple]
    meetings_in_month: int
    first_meeting_month: Optional[date]
    headers: Sequence[str] = field(default=WEEKDAY_HEADERS)

    @property
    def weeks(self) -> List[List[DayCell]]:
        rows = [list(self.cells[i : i + 7]) for i in range(0, len(self.cells), 7)]
        if rows and len(rows[-1]) < 7:
            rows[-1].extend(DayCell(day=None) for _ in range(7 - len(rows[-1])))
        return rows

    @property
    def hint(self) -> str:
        if self.meetings_in_month == 0:
            return "No meetings in this month. Use Jump to First Meeting."
        plural = "" if self.meetings_in_month == 1 else "s"
        return f"{self.meetings_in_month} meeting{plural} in this month."

    @property
    def previous_month(self) -> date:
        return shift_month(self.month, -1)

    @property
    def next_month(self) -> date:
        return shift_month(self.month, 1)


def month_start(value: date) -> date:
    return value.replace(day=1)


def current_month(today: Optional[date] = None) -> date:
    return month_start(today or today_local())


def shift_month(month: date, delta: int) -> date:
    index = month.year * 12 + (month.month - 1) + delta
    return date(index // 12, index % 12 + 1, 1)


def parse_month(value: Optional[str], default: date) -> date:
    """Parse ``YYYY-MM`` (or a full ISO date); fall back to ``default``."""
    text = (value or "").strip()
    if len(text) == 7:
        text = f"{text}-01"
    parsed = try_parse_iso_date(text)
    return month_start(parsed) if parsed else default


def dated_meetings(meetings: Iterable[Meeting]) -> List[Meeting]:
    out = [m for m in meetings if m is not None and try_parse_iso_date(m.date)]
    out.sort(key=lambda m: m.date)
    return out


def build_committee_colors(meetings: Iterable[Meeting]) -> Dict[str, str]:
    committees = sorted({m.committee for m in meetings if m.committee})
    return {name: CALENDAR_PALETTE[i % len(CALENDAR_PALETTE)] for i, name in enumerate(committees)}


def first_meeting_month(meetings: Iterable[Meeting]) -> Optional[date]:
    dated = dated_meetings(meetings)
    if not dated:
        return None
    return month_start(try_parse_iso_date(dated[0].date))


def _to_event(meeting: Meeting, colors: Dict[str, str]) -> CalendarEvent:
    label = meeting.committee or meeting.name or "Meeting"
    secondary = meeting.name if meeting.name and meeting.name != label else ""
    return CalendarEvent(
        meeting=meeting,
        color=colors.get(meeting.committee, CALENDAR_FALLBACK_COLOR),
        label=label,
        secondary_label=secondary,
        time_label=meeting.time or "Time TBD",
    )


def build_month(meetings: Iterable[Meeting], month: date, *, today: Optional[date] = None) -> CalendarMonth:
    today = today or today_local()
    month = month_start(month)
    dated = dated_meetings(meetings)
    colors = build_committee_colors(dated)

    by_day: Dict[str, List[Meeting]] = {}
    for meeting in dated:
        key = try_parse_iso_date(meeting.date).isoformat()
        by_day.setdefault(key, []).append(meeting)

    # calendar.weekday: Monday == 0; the grid starts on Sunday.
    offset = (calendar.weekday(month.year, month.month, 1) + 1) % 7
    total_days = calendar.monthrange(month.year, month.month)[1]

    cells: List[DayCell] = [DayCell(day=None) for _ in range(offset)]
    in_month = 0
    for day in range(1, total_days + 1):
        current = month.replace(day=day)
        day_meetings = by_day.get(current.isoformat(), [])
        in_month += len(day_meetings)
        cells.append(
            DayCell(
                day=day,
                events=tuple(_to_event(m, colors) for m in day_meetings),
                is_today=current == today,
            )
        )

    return CalendarMonth(
        month=month,
        label=f"{calendar.month_name[month.month]} {month.year}",
        cells=tuple(cells),
        legend=tuple(sorted(colors.items())),
        meetings_in_month=in_month,
        first_meeting_month=first_meeting_month(dated),
    )
