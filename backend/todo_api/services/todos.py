"""
Todo handlers.

Each handler is a single validate-then-delegate step over ``db.crud``; they
are what the HTTP routes call and what the tests exercise directly.
"""
import logging
from typing import List, Optional

from sqlmodel import Session

from ..core.errors import NotFound, ValidationError
from ..db import crud
from ..db.models import TITLE_MAX_LENGTH, Todo
from ..schemas.todos import DeleteResult, TodoCreate, TodoDelete, TodoFilter, TodoUpdate

logger = logging.getLogger(__name__)


def validate_title(title: str) -> str:
    if not title:
        raise ValidationError("title must not be empty")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(f"title must be at most {TITLE_MAX_LENGTH} characters")
    return title


def create_todo(session: Session, body: TodoCreate) -> Todo:
    title = validate_title(body.title)
    todo = crud.insert_todo(session, title)
    logger.info("Todo created id=%s", todo.id)
    return todo


def get_todos(session: Session, params: Optional[TodoFilter] = None) -> List[Todo]:
    completed = params.completed if params is not None else None
    todos = crud.select_todos(session, completed=completed)
    logger.debug("Todos listed completed=%s count=%d", completed, len(todos))
    return todos


def get_todo(session: Session, todo_id: int) -> Todo:
    todo = crud.select_todo(session, todo_id)
    if todo is None:
        raise NotFound("todo not found")
    return todo


def update_todo(session: Session, body: TodoUpdate) -> Todo:
    patch = body.patch()
    if patch.is_empty():
        raise ValidationError("nothing to update: provide title or completed")
    if patch.title is not None:
        validate_title(patch.title)

    todo = crud.update_todo(session, body.id, patch)
    logger.info(
        "Todo updated id=%s fields=%s",
        todo.id,
        ",".join(sorted(patch.model_dump(exclude_none=True))),
    )
    return todo


def delete_todo(session: Session, body: TodoDelete) -> DeleteResult:
    removed = crud.delete_todo(session, body.id)
    if removed:
        logger.info("Todo deleted id=%s", body.id)
    else:
        logger.debug("Delete skipped, no todo id=%s", body.id)
    return DeleteResult(success=removed)
