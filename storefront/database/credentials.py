"""
In-memory credential table for the admin account.

Holds at most one credential per username; nothing survives a restart.
"""

from __future__ import annotations

from dataclasses import dataclass
import threading
import uuid
from typing import Dict, Optional


@dataclass
class User:
    id: str
    username: str
    password: str


class CredentialStore:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._users: Dict[str, User] = {}

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            return self._users.get(username)

    def create_user(self, username: str, password: str) -> User:
        with self._lock:
            if username in self._users:
                raise ValueError(f"User already exists: {username}")
            user = User(id=str(uuid.uuid4()), username=username, password=password)
            self._users[username] = user
            return user

    def set_password(self, username: str, password: str) -> User:
        """Overwrite the password in place, creating the user if absent."""
        with self._lock:
            user = self._users.get(username)
            if user is None:
                user = User(id=str(uuid.uuid4()), username=username, password=password)
                self._users[username] = user
            else:
                user.password = password
            return user
