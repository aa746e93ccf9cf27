"""Pydantic models for the /todos resource.

``Todo`` is both the stored record and the response shape.  The request
models keep every field optional so the API layer, not FastAPI's default
422 handling, decides what a missing title means.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Todo(BaseModel):
    id: int = Field(..., ge=1)
    title: str
    completed: bool = False


class TodoCreate(BaseModel):
    """Body of ``POST /todos``."""

    title: str | None = None
    completed: bool | None = None


class TodoUpdate(BaseModel):
    """Body of ``PUT /todos/{id}``.

    Only fields present in the request are applied.  Presence is read from
    ``model_fields_set``, so ``{"completed": false}`` and ``{"title": ""}``
    count as supplied while an omitted key does not.

    Two deliberate looseness rules apply.  An empty ``title`` is accepted
    here although ``POST /todos`` rejects it.  An explicit ``null`` is NOT
    a supplied value: it is dropped like an omitted key, so a stored todo
    never ends up with a null title or completed flag.
    """

    title: str | None = None
    completed: bool | None = None

    def changes(self) -> dict[str, object]:
        """Return the supplied, non-null fields as a dict."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }


class ErrorResponse(BaseModel):
    error: str
