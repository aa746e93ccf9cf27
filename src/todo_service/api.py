"""HTTP layer — maps /todos requests onto a ``TodoStore``.

The store is created once per app by ``create_app`` and reaches the handlers
through FastAPI dependency injection.  Store errors are turned into fixed
status/body pairs by the exception handlers registered here; nothing else in
the package knows about HTTP.
"""

from __future__ import annotations

import json
import logging
import re

from fastapi import APIRouter, Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from pydantic import ValidationError

from todo_service.errors import (
    InvalidRequestBodyError,
    InvalidTodoError,
    TodoNotFoundError,
    TodoServiceError,
)
from todo_service.models import ServiceConfig
from todo_service.schemas.todo import ErrorResponse, Todo, TodoCreate, TodoUpdate
from todo_service.store import TodoStore

logger = logging.getLogger(__name__)

_ID_PATTERN = re.compile(r"[0-9]+")

_ERROR_STATUS: dict[type[TodoServiceError], int] = {
    InvalidTodoError: 400,
    InvalidRequestBodyError: 400,
    TodoNotFoundError: 404,
}

INVALID_BODY_MESSAGE = InvalidRequestBodyError.message

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Todo not found"}}


def get_store(request: Request) -> TodoStore:
    return request.app.state.store


def parse_todo_id(raw: str) -> int:
    """Parse a path id; anything that is not a plain integer matches nothing."""
    if not _ID_PATTERN.fullmatch(raw):
        raise TodoNotFoundError(raw)
    try:
        return int(raw)
    except ValueError:
        # longer than the interpreter's int conversion limit
        raise TodoNotFoundError(raw) from None


router = APIRouter(prefix="/todos", tags=["Todos"])


@router.get("", response_model=list[Todo], summary="List all todos")
def list_todos(store: TodoStore = Depends(get_store)) -> list[Todo]:
    return store.list()


@router.get("/{todo_id}", response_model=Todo, responses=_NOT_FOUND, summary="Get a single todo")
def get_todo(todo_id: str, store: TodoStore = Depends(get_store)) -> Todo:
    return store.get(parse_todo_id(todo_id))


@router.post(
    "",
    response_model=Todo,
    status_code=201,
    responses={400: {"model": ErrorResponse, "description": "Title is required"}},
    summary="Create a new todo",
)
def create_todo(
    payload: TodoCreate | None = None,
    store: TodoStore = Depends(get_store),
) -> Todo:
    payload = payload or TodoCreate()
    return store.create(payload.title, payload.completed)


async def _read_update(request: Request) -> TodoUpdate:
    """Parse the PUT body; an empty body is an update with no fields."""
    body = await request.body()
    if not body:
        return TodoUpdate()
    try:
        data = json.loads(body)
        return TodoUpdate() if data is None else TodoUpdate.model_validate(data)
    except (ValueError, ValidationError):
        raise InvalidRequestBodyError() from None


@router.put(
    "/{todo_id}",
    response_model=Todo,
    responses=_NOT_FOUND,
    summary="Update a todo",
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": TodoUpdate.model_json_schema()}},
        },
    },
)
async def update_todo(
    todo_id: str,
    request: Request,
    store: TodoStore = Depends(get_store),
) -> Todo:
    # the id is resolved before the body is read, so an unknown id is a 404
    # whatever the body holds
    parsed_id = parse_todo_id(todo_id)
    store.get(parsed_id)
    payload = await _read_update(request)
    return store.update(parsed_id, payload.changes())


@router.delete(
    "/{todo_id}",
    status_code=204,
    response_class=Response,
    responses=_NOT_FOUND,
    summary="Delete a todo",
)
def delete_todo(todo_id: str, store: TodoStore = Depends(get_store)) -> Response:
    store.delete(parse_todo_id(todo_id))
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------

async def _todo_error_handler(request: Request, exc: TodoServiceError) -> JSONResponse:
    status = _ERROR_STATUS.get(type(exc), 400)
    logger.debug("%s %s -> %d %s", request.method, request.url.path, status, exc)
    return JSONResponse(status_code=status, content={"error": str(exc)})


async def _validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.debug("%s %s -> 400 %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": INVALID_BODY_MESSAGE})


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------

def create_app(
    config: ServiceConfig | None = None,
    store: TodoStore | None = None,
) -> FastAPI:
    """Build the FastAPI app around *store* (a fresh one when omitted)."""
    config = config or ServiceConfig()
    info = config.service

    app = FastAPI(
        title=info.title,
        description=info.description,
        version=info.api_version,
        docs_url=info.docs_url,
        redoc_url=None,
    )
    app.state.store = store if store is not None else TodoStore()

    if config.cors.enabled:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors.allow_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(router)
    app.add_exception_handler(TodoServiceError, _todo_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    return app


def list_routes(app: FastAPI) -> list[tuple[str, str]]:
    """Return ``(methods, path)`` pairs for every API route of *app*."""
    return [
        (",".join(sorted(route.methods)), route.path)
        for route in app.routes
        if isinstance(route, APIRoute)
    ]
