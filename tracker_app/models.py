"""
In-memory models and stores for the task tracker service.

Two stores back the service, both owned by the application factory and
injected into request handlers:

* :class:`CredentialStore` -- registered identities and password checks.
* :class:`TaskRepository` -- the single, global pool of tasks shared by
  every authenticated caller.

Neither store survives a restart.  Each guards its collection with its own
lock so that threaded WSGI servers never observe a half-applied mutation or
hand out the same identifier twice from concurrent creates.

Key behaviours:
- Usernames are not unique; login matches the first registration.
- Task ids are ``len(tasks) + 1`` at creation time, so ids can repeat after
  a delete.  Lookups always act on the first task with a given id.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from typing import Any

from werkzeug.security import check_password_hash, generate_password_hash

from .errors import InvalidCredentialsError, MissingFieldError, TaskNotFoundError

logger = logging.getLogger(__name__)


class _Missing:
    """Marker for an update field the caller did not supply."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


# =====================================================================
# Identities
# =====================================================================


@dataclass(frozen=True)
class Identity:
    """
    A registered username and its password hash.

    Identities are immutable once created and are never serialised, so the
    hash never leaves the store.
    """

    username: str
    password_hash: str

    def check_password(self, password: str) -> bool:
        """Return ``True`` if *password* matches the stored hash."""
        return check_password_hash(self.password_hash, password)

    def __repr__(self) -> str:
        return f"<Identity {self.username}>"


class CredentialStore:
    """
    Holds registered identities in insertion order.

    Args:
        hash_method: Werkzeug hash method string passed to
            ``generate_password_hash`` (e.g. ``"scrypt"`` or
            ``"pbkdf2:sha256:600000"``).
    """

    def __init__(self, hash_method: str = "scrypt"):
        self._hash_method = hash_method
        self._identities: list[Identity] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._identities)

    def register(self, username: str | None, password: str | None) -> Identity:
        """
        Hash *password* and append a new identity.

        No uniqueness check is made: registering an existing username adds a
        second record that login will never reach.

        Raises:
            MissingFieldError: If either field is empty or absent.
        """
        if not username or not password:
            raise MissingFieldError("Username and password are required")

        # Hashing is deliberately slow; keep it outside the lock.
        identity = Identity(
            username=username,
            password_hash=generate_password_hash(password, method=self._hash_method),
        )
        with self._lock:
            self._identities.append(identity)
        logger.info("Registered identity username=%s", username)
        return identity

    def find(self, username: str) -> Identity | None:
        """Return the first identity registered under *username*, if any."""
        with self._lock:
            for identity in self._identities:
                if identity.username == username:
                    return identity
        return None

    def verify(self, username: str | None, password: str | None) -> Identity:
        """
        Authenticate *username* / *password* against the first match.

        Raises:
            MissingFieldError: If either field is empty or absent.
            InvalidCredentialsError: If the username is unknown or the
                password does not match.
        """
        if not username or not password:
            raise MissingFieldError("Username and password are required")

        identity = self.find(username)
        if identity is None or not identity.check_password(password):
            logger.info("Rejected login for username=%s", username)
            raise InvalidCredentialsError()
        return identity

    def clear(self) -> None:
        with self._lock:
            self._identities.clear()


# =====================================================================
# Tasks
# =====================================================================


@dataclass
class Task:
    """
    A unit of trackable work.

    Attributes:
        id: Count-derived identifier (see :meth:`TaskRepository.create`).
        title: Short title of the task.
        description: Free-text description.
        completed: Completion flag; new tasks start incomplete.
    """

    id: int
    title: str
    description: str
    completed: Any = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "completed": self.completed,
        }

    def __repr__(self) -> str:
        return f"<Task {self.id}: {self.title}>"


class TaskRepository:
    """
    Owns the mutable collection of tasks.

    Every read-modify-write sequence runs under a single lock.  Methods
    return copies, so callers never hold a reference into the live
    collection.
    """

    def __init__(self) -> None:
        self._tasks: list[Task] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    def _index(self, task_id: int) -> int:
        """Position of the first task with *task_id*. Caller holds the lock."""
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        raise TaskNotFoundError()

    def create(self, title: str | None, description: str | None) -> Task:
        """
        Append a new incomplete task.

        The id is the current task count plus one.  After a delete this can
        repeat an id issued earlier, or one still held by a later task.

        Raises:
            MissingFieldError: If either field is empty or absent.
        """
        if not title or not description:
            raise MissingFieldError("Title and description are required")

        with self._lock:
            task = Task(id=len(self._tasks) + 1, title=title, description=description)
            self._tasks.append(task)
            created = replace(task)
        logger.info("Created task id=%s", created.id)
        return created

    def list(self) -> list[Task]:
        """Return every task in insertion order."""
        with self._lock:
            return [replace(task) for task in self._tasks]

    def update(
        self,
        task_id: int,
        title: Any = MISSING,
        description: Any = MISSING,
        completed: Any = MISSING,
    ) -> Task:
        """
        Partially update the first task with *task_id*.

        ``title`` and ``description`` replace the stored value only when a
        truthy value is given.  ``completed`` replaces it whenever it is
        supplied at all, so ``completed=False`` clears the flag.

        Raises:
            TaskNotFoundError: If no task has that id.
        """
        with self._lock:
            task = self._tasks[self._index(task_id)]
            if title is not MISSING and title:
                task.title = title
            if description is not MISSING and description:
                task.description = description
            if completed is not MISSING:
                task.completed = completed
            updated = replace(task)
        logger.info("Updated task id=%s", task_id)
        return updated

    def delete(self, task_id: int) -> Task:
        """
        Remove the first task with *task_id* and return it.

        Ids of the remaining tasks are left untouched.

        Raises:
            TaskNotFoundError: If no task has that id.
        """
        with self._lock:
            task = self._tasks.pop(self._index(task_id))
        logger.info("Deleted task id=%s", task_id)
        return task

    def clear(self) -> None:
        with self._lock:
            self._tasks.clear()
