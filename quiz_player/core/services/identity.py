"""Identity collaborators that report the signed-in user."""

from __future__ import annotations

import getpass
import socket
from typing import Protocol

from quiz_player.core.models import UserIdentity


class IdentityProvider(Protocol):
    """Read-only source of the current user's id and email."""

    def current_user(self) -> UserIdentity:
        ...


class StaticIdentityProvider:
    """Identity provider that always reports the same user."""

    def __init__(self, user: UserIdentity) -> None:
        self._user = user

    def current_user(self) -> UserIdentity:
        return self._user


def local_identity() -> StaticIdentityProvider:
    """Build an identity from the operating-system account running the app."""
    try:
        username = getpass.getuser()
    except (KeyError, OSError):
        username = "anonymous"
    host = socket.gethostname() or "localhost"
    return StaticIdentityProvider(UserIdentity(user_id=username, email=f"{username}@{host}"))
