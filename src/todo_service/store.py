"""In-memory todo store.

Holds every todo for the lifetime of the process together with a monotonic
id counter.  All operations are serialized by one lock so concurrent
requests never see a half-applied mutation, and every record handed out is
a copy so callers cannot mutate the stored state behind the lock's back.
"""

from __future__ import annotations

import itertools
import logging
import threading
from typing import Any

from todo_service.errors import InvalidTodoError, TodoNotFoundError
from todo_service.schemas.todo import Todo

logger = logging.getLogger(__name__)

_MUTABLE_FIELDS = frozenset({"title", "completed"})


class TodoStore:
    """Own the todo collection and the id counter."""

    def __init__(self) -> None:
        # dict keeps insertion order, updates in place never reorder
        self._todos: dict[int, Todo] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._todos)

    # -- queries -------------------------------------------------------------

    def list(self) -> list[Todo]:
        """Return all todos in insertion order."""
        with self._lock:
            return [todo.model_copy() for todo in self._todos.values()]

    def get(self, todo_id: int) -> Todo:
        """Return the todo with *todo_id* or raise ``TodoNotFoundError``."""
        with self._lock:
            return self._find(todo_id).model_copy()

    # -- mutations -----------------------------------------------------------

    def create(self, title: str | None, completed: bool | None = None) -> Todo:
        """Append a new todo and return it.

        Raises ``InvalidTodoError`` without touching the counter when
        *title* is missing or empty.
        """
        if not title:
            raise InvalidTodoError()

        with self._lock:
            todo = Todo(id=next(self._ids), title=title, completed=bool(completed))
            self._todos[todo.id] = todo
            created = todo.model_copy()

        logger.info("Created todo %d", created.id)
        return created

    def update(self, todo_id: int, changes: dict[str, Any]) -> Todo:
        """Overwrite the fields in *changes* on an existing todo.

        Fields missing from *changes* are left alone.  An empty title is
        accepted here, unlike in ``create``.  Only ``title`` and
        ``completed`` may change; any other key, ``id`` included, raises
        ``ValueError`` before the store is touched.
        """
        unknown = set(changes) - _MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update todo field(s): {', '.join(sorted(unknown))}")

        with self._lock:
            current = self._find(todo_id)
            # validate the whole record first so a bad value changes nothing
            updated = Todo.model_validate({**current.model_dump(), **changes})
            self._todos[todo_id] = updated
            updated = updated.model_copy()

        logger.info("Updated todo %d (%s)", todo_id, ", ".join(sorted(changes)) or "no fields")
        return updated

    def delete(self, todo_id: int) -> None:
        """Remove the todo with *todo_id* permanently."""
        with self._lock:
            self._find(todo_id)
            del self._todos[todo_id]

        logger.info("Deleted todo %d", todo_id)

    # -- internals -----------------------------------------------------------

    def _find(self, todo_id: int) -> Todo:
        """Look up *todo_id*; caller must hold the lock."""
        try:
            return self._todos[todo_id]
        except KeyError:
            logger.debug("Todo %r not found", todo_id)
            raise TodoNotFoundError(todo_id) from None
