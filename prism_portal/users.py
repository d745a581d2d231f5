"""
Identity store: in-memory user accounts consumed by the auth layer.
"""

from __future__ import annotations

import copy
import logging
import threading
from datetime import datetime, timezone
from typing import Any, ContextManager, Dict, Optional

from prism_portal.errors import Conflict, NotFound
from prism_portal.models import Role, User

logger = logging.getLogger(__name__)


class UserStore:
    """Users keyed by integer id, with unique usernames."""

    def __init__(self, lock: Optional[ContextManager[Any]] = None) -> None:
        self._lock = lock if lock is not None else threading.RLock()
        self._users: Dict[int, User] = {}
        self._next_id = 1

    # PUBLIC_INTERFACE
    def create_user(self, *, username: str, password_hash: str, role: Role = Role.ARTIST) -> User:
        """Create a user. Raises Conflict if the username is taken."""
        with self._lock:
            if any(u.username == username for u in self._users.values()):
                raise Conflict("Username is already registered.")
            user = User(
                id=self._next_id,
                username=username,
                password_hash=password_hash,
                role=role,
                created_at=datetime.now(timezone.utc),
            )
            self._users[user.id] = user
            self._next_id += 1

        logger.info("user_created: id=%s role=%s", user.id, role.value)
        return copy.copy(user)

    # PUBLIC_INTERFACE
    def get(self, user_id: int) -> User:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                raise NotFound(f"User {user_id} not found.")
            return copy.copy(user)

    # PUBLIC_INTERFACE
    def get_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            for user in self._users.values():
                if user.username == username:
                    return copy.copy(user)
        return None
