from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..container import Container
from ..core.enums import Command
from ..core.exceptions import AuthenticationError, LoadError
from .service import dashboard_for

LOGGER = logging.getLogger("governance_tracker.users")


def register(app: Flask, container: Container) -> None:
    @app.route("/", methods=["GET", "POST"], endpoint="login")
    def login():
        session = container.sessions.get_session()
        if session is not None:
            return redirect(url_for(dashboard_for(session.role).value))

        if request.method == "POST":
            pid = request.form.get("pid", "")
            password = request.form.get("password", "")
            try:
                session = container.dispatcher.dispatch(Command.LOGIN, pid=pid, password=password)
                return redirect(url_for(dashboard_for(session.role).value))
            except AuthenticationError as e:
                flash(str(e), "danger")
            except LoadError:
                raise
            except Exception:
                LOGGER.exception("Login failed unexpectedly")
                flash("System error while logging in.", "danger")

        return render_template("login.html")

    @app.route("/logout", endpoint="logout")
    def logout():
        container.dispatcher.dispatch(Command.LOGOUT)
        flash("You have been logged out.", "info")
        return redirect(url_for("login"))
