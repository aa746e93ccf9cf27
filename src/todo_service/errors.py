"""Domain errors raised by the todo store.

The store only signals *what* went wrong.  Mapping each error to an HTTP
status and body is the job of the API layer (see ``todo_service.api``).
"""

from __future__ import annotations


class TodoServiceError(Exception):
    """Base class for every error the store can raise."""

    message = "Todo service error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class InvalidTodoError(TodoServiceError):
    """A create request did not carry a usable title."""

    message = "Title is required"


class TodoNotFoundError(TodoServiceError):
    """No todo matches the requested id."""

    message = "Todo not found"

    def __init__(self, todo_id: object = None) -> None:
        super().__init__()
        self.todo_id = todo_id


class InvalidRequestBodyError(TodoServiceError):
    """A request body is not JSON of the expected shape."""

    message = "Invalid request body"
