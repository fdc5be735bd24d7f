"""In-memory record stores.

Free-threading safety:
    - Records are frozen dataclasses (immutable, safe to share)
    - RecordStore uses one Lock around id assignment + append
    - list() returns a tuple snapshot taken under the same lock, so a
      reader never observes a half-added record
"""

import logging
import threading
from collections.abc import Callable, Iterable
from datetime import date
from typing import Generic, Protocol, TypeVar

from wren.data.models import SEED_PROJECTS, SEED_USERS, Project, User
from wren.errors import ToolFailure

logger = logging.getLogger("wren.data")


class _Record(Protocol):
    @property
    def id(self) -> int: ...


T = TypeVar("T", bound=_Record)


class RecordStore(Generic[T]):
    """A lock-guarded, append-only collection of records keyed by integer id.

    Ids start at 1 and each new record gets the current highest id + 1.
    """

    __slots__ = ("_lock", "_records")

    def __init__(self, records: Iterable[T] = ()) -> None:
        self._lock = threading.Lock()
        self._records: dict[int, T] = {r.id: r for r in records}

    def add(self, build: Callable[[int], T]) -> T:
        """Assign the next id, build the record with it, and append it atomically."""
        with self._lock:
            record = build(self._next_id())
            self._records[record.id] = record
        return record

    def get(self, record_id: int) -> T | None:
        with self._lock:
            return self._records.get(record_id)

    def list(self) -> tuple[T, ...]:
        """Snapshot of all records in id order."""
        with self._lock:
            return tuple(self._records[k] for k in sorted(self._records))

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def _next_id(self) -> int:
        # Caller holds the lock
        return max(self._records, default=0) + 1


class UserStore(RecordStore[User]):
    """Users, seeded with the three sample accounts."""

    __slots__ = ()

    def __init__(self, records: Iterable[User] = SEED_USERS) -> None:
        super().__init__(records)

    def create(self, name: str, email: str, role: str) -> User:
        """Add a user stamped with today's date.

        Raises ``ToolFailure`` if the email is already taken. The check and
        the append happen under one lock acquisition.
        """
        with self._lock:
            wanted = email.casefold()
            if any(u.email.casefold() == wanted for u in self._records.values()):
                msg = f"A user with email {email!r} already exists"
                raise ToolFailure(msg)
            user = User(
                id=self._next_id(),
                name=name,
                email=email,
                role=role,
                created=date.today().isoformat(),
            )
            self._records[user.id] = user
        logger.info("Created user %d (%s)", user.id, user.email)
        return user


class ProjectStore(RecordStore[Project]):
    """Projects, seeded with the three sample projects."""

    __slots__ = ()

    def __init__(self, records: Iterable[Project] = SEED_PROJECTS) -> None:
        super().__init__(records)
