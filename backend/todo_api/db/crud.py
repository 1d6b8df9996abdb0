import logging
from contextlib import contextmanager
from datetime import timedelta
from typing import Iterator, List, Optional

from sqlalchemy.exc import OperationalError
from sqlmodel import Session, select

from ..core.errors import NotFound, StorageUnavailable
from ..schemas.todos import TodoPatch
from .models import Todo, utcnow

logger = logging.getLogger(__name__)


@contextmanager
def storage_errors(session: Session) -> Iterator[None]:
    """Roll back and surface driver-level failures as StorageUnavailable."""
    try:
        yield
    except OperationalError as e:
        session.rollback()
        logger.exception("Storage failure")
        raise StorageUnavailable(str(e.orig or e)) from e


def insert_todo(session: Session, title: str) -> Todo:
    now = utcnow()
    todo = Todo(title=title, completed=False, created_at=now, updated_at=now)
    with storage_errors(session):
        session.add(todo)
        session.commit()
        session.refresh(todo)
    return todo


def select_todos(session: Session, completed: Optional[bool] = None) -> List[Todo]:
    stmt = select(Todo)
    if completed is not None:
        stmt = stmt.where(Todo.completed == completed)
    with storage_errors(session):
        return list(session.exec(stmt.order_by(Todo.id)).all())


def select_todo(session: Session, todo_id: int) -> Optional[Todo]:
    with storage_errors(session):
        return session.get(Todo, todo_id)


def update_todo(session: Session, todo_id: int, patch: TodoPatch) -> Todo:
    with storage_errors(session):
        todo = session.get(Todo, todo_id)
        if todo is None:
            raise NotFound("todo not found")

        if patch.title is not None:
            todo.title = patch.title
        if patch.completed is not None:
            todo.completed = patch.completed

        now = utcnow()
        if now <= todo.updated_at:
            # clock resolution: two writes in the same microsecond
            now = todo.updated_at + timedelta(microseconds=1)
        todo.updated_at = now

        session.add(todo)
        session.commit()
        session.refresh(todo)
    return todo


def delete_todo(session: Session, todo_id: int) -> bool:
    with storage_errors(session):
        todo = session.get(Todo, todo_id)
        if todo is None:
            return False
        session.delete(todo)
        session.commit()
    return True
