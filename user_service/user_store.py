from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from itertools import islice
from typing import Dict, List, Optional

logger = logging.getLogger("user_service.store")

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class User:
    id: int
    username: str
    age: int


class UserStoreError(Exception):
    """Base class for failures the store reports to its callers."""


class UserNotFoundError(UserStoreError):
    def __init__(self, user_id: int):
        super().__init__(f"User with ID {user_id} not found.")
        self.user_id = user_id


class UserValidationError(UserStoreError):
    pass


class UsernameConflictError(UserStoreError):
    def __init__(self, username: str):
        super().__init__(f"Username '{username}' is already taken.")
        self.username = username


def _check_age(age: int) -> None:
    if age < 0:
        raise UserValidationError("Age must be a non-negative integer.")


class InMemoryUserStore:
    """Thread-safe in-memory user repository with a unique username index.

    State:
    - ``_by_id``: id -> User (primary map).
    - ``_by_username``: username -> id (secondary index derived from ``_by_id``).
    - ``_next_id``: next id to hand out; never reused, even after deletes.

    Every mutation does its check-then-act under one lock, so both maps always
    describe the same set of users and two callers racing for one username
    can't both win. Users are immutable; an update swaps in a new value, so a
    reader holding a User never sees it change underneath them.

    Stored only in process memory (cleared on restart).
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._by_id: Dict[int, User] = {}
        self._by_username: Dict[str, int] = {}
        self._next_id = 1

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_id)

    def list(self, *, page: Optional[int] = None, size: Optional[int] = None) -> List[User]:
        # Non-positive or missing values fall back to defaults instead of erroring.
        page = page if page and page > 0 else DEFAULT_PAGE
        size = size if size and size > 0 else DEFAULT_PAGE_SIZE
        with self._lock:
            snapshot = list(self._by_id.values())
        start = (page - 1) * size
        return list(islice(snapshot, start, start + size))

    def get(self, user_id: int) -> User:
        with self._lock:
            user = self._by_id.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def create(self, *, username: str, age: int) -> User:
        if not (username or "").strip():
            raise UserValidationError("Username is required.")
        _check_age(age)

        with self._lock:
            if username in self._by_username:
                raise UsernameConflictError(username)
            user = User(id=self._next_id, username=username, age=age)
            self._next_id += 1
            self._by_id[user.id] = user
            self._by_username[username] = user.id

        logger.debug("Created user id=%s", user.id)
        return user

    def update(self, user_id: int, *, username: Optional[str] = None, age: Optional[int] = None) -> User:
        """Apply a partial update.

        ``None`` leaves a field unchanged. A blank username is treated the same
        way (create rejects it, update ignores it). All checks run before
        anything is written, so a failed update leaves the user untouched.
        """
        if username is not None and not username.strip():
            username = None

        with self._lock:
            current = self._by_id.get(user_id)
            if current is None:
                raise UserNotFoundError(user_id)

            if username is not None and username != current.username:
                owner = self._by_username.get(username)
                if owner is not None and owner != user_id:
                    raise UsernameConflictError(username)
            if age is not None:
                _check_age(age)

            updated = replace(
                current,
                username=current.username if username is None else username,
                age=current.age if age is None else age,
            )
            if updated.username != current.username:
                del self._by_username[current.username]
                self._by_username[updated.username] = user_id
            self._by_id[user_id] = updated

        logger.debug("Updated user id=%s", user_id)
        return updated

    def delete(self, user_id: int) -> User:
        with self._lock:
            removed = self._by_id.pop(user_id, None)
            if removed is None:
                raise UserNotFoundError(user_id)
            del self._by_username[removed.username]

        logger.debug("Deleted user id=%s", user_id)
        return removed
