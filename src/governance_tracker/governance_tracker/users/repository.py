from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import User


class UserDirectory(Protocol):
    """Read-only source of users (the static ``users.json`` directory)."""

    def list_users(self) -> Sequence[User]:
        raise NotImplementedError


class StaticUserDirectory(UserDirectory):
    def __init__(self, loader):
        self._loader = loader
        self._users: Optional[Sequence[User]] = None

    def list_users(self) -> Sequence[User]:
        # Loaded lazily so a missing file fails the login view, not app start-up.
        if self._users is None:
            self._users = self._loader.load_users()
        return self._users
