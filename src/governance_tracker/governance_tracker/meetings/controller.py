from __future__ import annotations

from flask import Flask, flash, g, redirect, render_template, request, url_for

from ..calendar_view.layout import build_month, current_month, parse_month
from ..common.guards import role_required
from ..container import Container
from ..core.enums import Command, Role
from ..core.exceptions import ValidationError
from .model import EDITABLE_FIELDS


def register(app: Flask, container: Container) -> None:
    @app.route("/admin/meetings/add", methods=["POST"], endpoint="add_meeting")
    @role_required(container, Role.ADMIN)
    def add_meeting():
        fields = {f: request.form.get(f, "").strip() for f in EDITABLE_FIELDS if request.form.get(f, "").strip()}
        try:
            meeting = container.dispatcher.dispatch(Command.ADD_MEETING, **fields)
            flash(f"Added meeting {meeting.id}.", "success")
        except ValidationError as e:
            flash(str(e), "warning")
        return redirect(url_for("admin_dashboard", _anchor="meetings"))

    @app.route("/admin/meetings/<meeting_id>/update", methods=["POST"], endpoint="update_meeting")
    @role_required(container, Role.ADMIN)
    def update_meeting(meeting_id: str):
        changes = {f: request.form.get(f, "") for f in EDITABLE_FIELDS if f in request.form}
        try:
            container.dispatcher.dispatch(Command.UPDATE_MEETING, meeting_id=meeting_id, **changes)
            flash("Meeting saved.", "success")
        except ValidationError as e:
            flash(str(e), "warning")
        return redirect(url_for("admin_dashboard", _anchor="meetings"))

    @app.route("/admin/meetings/<meeting_id>/delete", methods=["POST"], endpoint="delete_meeting")
    @role_required(container, Role.ADMIN)
    def delete_meeting(meeting_id: str):
        container.dispatcher.dispatch(Command.REMOVE_MEETING, meeting_id=meeting_id)
        flash("Meeting removed.", "success")
        return redirect(url_for("admin_dashboard", _anchor="meetings"))

    @app.route("/calendar", endpoint="calendar")
    @role_required(container)
    def calendar():
        session = g.current_session
        if session.role == Role.ADMIN:
            meetings = container.meeting_service.list_meetings()
        else:
            assignments = container.assignment_service.list_assignments()
            meetings = container.meeting_service.meetings_for_senator(session.pid, assignments)

        month = parse_month(request.args.get("month"), current_month())

        return render_template(
            "calendar.html",
            session=session,
            calendar=build_month(meetings, month),
            active_page="calendar",
        )
