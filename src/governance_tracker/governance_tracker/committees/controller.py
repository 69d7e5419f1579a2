from __future__ import annotations

from flask import Flask, flash, redirect, request, url_for

from ..common.guards import role_required
from ..container import Container
from ..core.enums import Command, Role
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    def _form_values() -> tuple[str, str]:
        return request.form.get("pid", ""), request.form.get("committee", "")

    @app.route("/admin/assignments/add", methods=["POST"], endpoint="add_assignment")
    @role_required(container, Role.ADMIN)
    def add_assignment():
        pid, committee = _form_values()
        try:
            container.dispatcher.dispatch(Command.ADD_ASSIGNMENT, pid=pid, committee=committee)
            flash(f"Assigned {pid.strip()} to {committee.strip()}.", "success")
        except ValidationError as e:
            flash(str(e), "warning")
        return redirect(url_for("admin_dashboard", _anchor="assignments"))

    @app.route("/admin/assignments/remove", methods=["POST"], endpoint="remove_assignment")
    @role_required(container, Role.ADMIN)
    def remove_assignment():
        pid, committee = _form_values()
        try:
            container.dispatcher.dispatch(Command.REMOVE_ASSIGNMENT, pid=pid, committee=committee)
            flash(f"Removed {pid.strip()} from {committee.strip()}.", "success")
        except ValidationError as e:
            flash(str(e), "warning")
        return redirect(url_for("admin_dashboard", _anchor="assignments"))
