from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..common.datetime_utils import epoch_millis
from ..core.enums import Page, Role, StorageKey
from ..core.exceptions import AuthenticationError, StorageCorruptError
from ..overrides.store import OverrideStore
from ..storage.repository import KeyValueStore
from .model import Session, User
from .repository import UserDirectory

LOGGER = logging.getLogger("governance_tracker.users")


def validate(pid: str, password: str, users: Sequence[User]) -> Optional[User]:
    """Match trimmed pid and exact password against the directory.

    Returns None for both unknown pid and wrong password.
    """

    wanted = str(pid if pid is not None else "").strip()
    for user in users:
        if str(user.pid).strip() == wanted and user.password == password:
            return user
    return None


def dashboard_for(role: Role) -> Page:
    return Page.ADMIN_DASHBOARD if role == Role.ADMIN else Page.SENATOR_DASHBOARD


@dataclass(frozen=True)
class AuthDecision:
    """Outcome of a page guard: either allowed (with session) or a redirect."""

    session: Optional[Session]
    redirect_to: Optional[Page] = None

    @property
    def allowed(self) -> bool:
        return self.session is not None and self.redirect_to is None


class SessionManager:
    """Use case: keep the single session record of a profile."""

    def __init__(self, store: KeyValueStore):
        self._sessions: OverrideStore[Optional[Session]] = OverrideStore(
            store,
            StorageKey.SESSION,
            serialize=lambda s: s.to_dict() if s else None,
            deserialize=Session.from_dict,
        )

    def create_session(self, user: User) -> Session:
        session = Session(pid=user.pid, role=user.role, timestamp=epoch_millis())
        self._sessions.write(session)
        return session

    def get_session(self) -> Optional[Session]:
        try:
            return self._sessions.load()
        except StorageCorruptError:
            LOGGER.warning("Discarding corrupt session record")
            return None

    def clear_session(self) -> None:
        self._sessions.clear()

    def require_auth(self, expected_role: Optional[Role] = None) -> AuthDecision:
        session = self.get_session()
        if session is None:
            return AuthDecision(session=None, redirect_to=Page.LOGIN)
        if expected_role is not None and session.role != expected_role:
            return AuthDecision(session=session, redirect_to=dashboard_for(session.role))
        return AuthDecision(session=session)


class AuthService:
    """Use case: authenticate a user (login) and open a session."""

    def __init__(self, users: UserDirectory, sessions: SessionManager):
        self._users = users
        self._sessions = sessions

    def validate(self, pid: str, password: str) -> Optional[User]:
        return validate(pid, password, self._users.list_users())

    def login(self, pid: str, password: str) -> Session:
        user = self.validate(pid, password)
        if user is None:
            LOGGER.info("Login failed for pid %s", str(pid).strip())
            raise AuthenticationError("Invalid PID or password.")
        session = self._sessions.create_session(user)
        LOGGER.info("Login succeeded for pid %s (%s)", user.pid, user.role.value)
        return session

    def logout(self) -> None:
        self._sessions.clear_session()
