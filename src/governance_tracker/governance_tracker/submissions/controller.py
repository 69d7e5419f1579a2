from __future__ import annotations

import io
import logging

from flask import Flask, flash, g, redirect, render_template, request, send_file, url_for

from ..calendar_view.layout import build_month, current_month, parse_month
from ..committees.service import get_assigned_committees
from ..common.guards import role_required
from ..container import Container
from ..core.enums import Command, Role
from ..core.exceptions import AuthorizationError, ImportFormatError, LoadError, ValidationError
from ..exports.service import EXPORTERS
from .model import Attachment
from .service import filter_submissions

LOGGER = logging.getLogger("governance_tracker.submissions")


def _read_attachment(storage) -> Attachment | None:
    if storage is None or not storage.filename:
        return None
    return Attachment(
        filename=storage.filename,
        content=storage.read(),
        mimetype=storage.mimetype or "application/octet-stream",
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/dashboard", endpoint="dashboard")
    @role_required(container, Role.SENATOR)
    def dashboard():
        session = g.current_session
        assignments = container.assignment_service.list_assignments()
        committees = get_assigned_committees(session.pid, assignments)
        meetings = container.meeting_service.meetings_for_senator(session.pid, assignments)
        history = container.submission_recorder.submissions_for(session.pid)
        return render_template(
            "dashboard.html",
            session=session,
            committees=sorted(committees),
            meetings=meetings,
            history=history,
            max_attachment_mb=container.submission_recorder.max_attachment_bytes // (1024 * 1024),
            active_page="dashboard",
        )

    @app.route("/dashboard/submit/<meeting_id>", methods=["POST"], endpoint="submit_attendance")
    @role_required(container, Role.SENATOR)
    def submit_attendance(meeting_id: str):
        try:
            container.dispatcher.dispatch(
                Command.SUBMIT_ATTENDANCE,
                meeting_id=meeting_id,
                attended=request.form.get("attendance") == "confirmed",
                notes=request.form.get("notes", ""),
                attachment=_read_attachment(request.files.get("attachment")),
            )
            flash("Submission received. Thank you!", "success")
        except ValidationError as e:
            flash(str(e), "warning")
        except LoadError:
            raise
        except Exception:
            LOGGER.exception("Submission failed")
            flash("System error while saving your submission.", "danger")
        return redirect(url_for("dashboard"))

    @app.route("/admin", endpoint="admin_dashboard")
    @role_required(container, Role.ADMIN)
    def admin_dashboard():
        filters = {
            "pid": request.args.get("pid", ""),
            "committee": request.args.get("committee", ""),
            "meeting": request.args.get("meeting", ""),
        }
        submissions = container.submission_recorder.list_submissions()
        # Keep the position in the full log so attachment links stay stable.
        indexed = {id(s): i for i, s in enumerate(submissions)}
        rows = [(indexed[id(s)], s) for s in filter_submissions(submissions, **filters)]

        meetings = container.meeting_service.list_meetings()
        month = parse_month(request.args.get("month"), current_month())
        return render_template(
            "admin/dashboard.html",
            filters=filters,
            rows=rows,
            total=len(submissions),
            assignments=container.assignment_service.list_assignments(),
            committees=container.assignment_service.known_committees(meetings),
            meetings=meetings,
            calendar=build_month(meetings, month),
            active_page="admin_dashboard",
        )

    @app.route("/admin/submissions/export.<fmt>", endpoint="export_submissions")
    @role_required(container, Role.ADMIN)
    def export_submissions(fmt: str):
        exporter = EXPORTERS.get(fmt)
        if exporter is None:
            flash("Unsupported export format.", "warning")
            return redirect(url_for("admin_dashboard"))
        export = exporter(container.submission_recorder.list_submissions())
        LOGGER.info("Exported submissions as %s", fmt)
        return send_file(
            io.BytesIO(export.content),
            mimetype=export.mimetype,
            as_attachment=True,
            download_name=export.filename,
        )

    @app.route("/admin/submissions/import", methods=["POST"], endpoint="import_submissions")
    @role_required(container, Role.ADMIN)
    def import_submissions():
        upload = request.files.get("file")
        if upload is None or not upload.filename:
            flash("Please choose a submissions JSON export to import.", "warning")
            return redirect(url_for("admin_dashboard"))
        try:
            result = container.dispatcher.dispatch(Command.IMPORT_SUBMISSIONS, payload=upload.read())
            flash(f"Imported {result.imported_count} submissions. Total: {result.total_count}", "success")
        except ImportFormatError as e:
            flash(str(e), "danger")
        except AuthorizationError as e:
            flash(str(e), "danger")
        return redirect(url_for("admin_dashboard"))

    @app.route("/admin/submissions/<int:index>/attachment", endpoint="download_attachment")
    @role_required(container, Role.ADMIN)
    def download_attachment(index: int):
        try:
            filename, mimetype, content = container.submission_recorder.get_attachment(index)
        except ValidationError as e:
            flash(str(e), "warning")
            return redirect(url_for("admin_dashboard"))
        return send_file(io.BytesIO(content), mimetype=mimetype, as_attachment=True, download_name=filename)

    @app.route("/admin/reset", methods=["POST"], endpoint="reset_overrides")
    @role_required(container, Role.ADMIN)
    def reset_overrides():
        container.dispatcher.dispatch(Command.RESET_OVERRIDES)
        flash("Local meeting and assignment edits cleared.", "info")
        return redirect(url_for("admin_dashboard"))
