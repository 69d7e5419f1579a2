from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import flash, g, redirect, url_for

from ..core.enums import Page, Role


def role_required(container, role: Optional[Role] = None):
    """Flask view guard backed by the profile session.

    A missing session goes to login; a session with another role is sent to
    its own dashboard instead of getting an error page.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            decision = container.sessions.require_auth(role)
            if not decision.allowed:
                if decision.redirect_to == Page.LOGIN:
                    flash("Please log in to continue.", "warning")
                return redirect(url_for(decision.redirect_to.value))
            g.current_session = decision.session
            return view(*args, **kwargs)

        return wrapper

    return decorator
