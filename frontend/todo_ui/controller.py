# frontend/todo_ui/controller.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Protocol, TypeVar

from todo_api.core.errors import TodoError
from todo_api.schemas.todos import DeleteResult, TodoOut

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TodoApi(Protocol):
    def create_todo(self, title: str) -> TodoOut: ...

    def get_todos(self, completed: Optional[bool] = None) -> List[TodoOut]: ...

    def update_todo(
        self, todo_id: int, title: Optional[str] = None, completed: Optional[bool] = None
    ) -> TodoOut: ...

    def delete_todo(self, todo_id: int) -> DeleteResult: ...


class Filter(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    @property
    def completed(self) -> Optional[bool]:
        """The ``completed`` query value for this filter (None for ``all``)."""
        if self is Filter.ALL:
            return None
        return self is Filter.COMPLETED

    def matches(self, todo: TodoOut) -> bool:
        return self.completed is None or todo.completed == self.completed


@dataclass
class EditState:
    id: int
    title: str


class TodoController:
    """
    Client-side state for the todo page.

    ``todos`` is the single local cache. It is replaced by ``load`` and
    patched by the other actions, always from a confirmed server response;
    nothing is mutated optimistically. Failures are logged and kept in
    ``last_error``, the cache is left as it was.
    """

    def __init__(self, api: TodoApi) -> None:
        self.api = api
        self.todos: List[TodoOut] = []
        self.filter: Filter = Filter.ALL
        self.editing: Optional[EditState] = None
        self.new_title: str = ""
        self.loading: bool = False
        self.last_error: Optional[TodoError] = None

    # ---- plumbing ----

    def _call(self, action: str, fn: Callable[..., T], *args, **kwargs) -> Optional[T]:
        self.loading = True
        try:
            result = fn(*args, **kwargs)
        except TodoError as e:
            logger.warning("Failed to %s: %s", action, e)
            self.last_error = e
            return None
        finally:
            self.loading = False
        self.last_error = None
        return result

    def _find(self, todo_id: int) -> Optional[TodoOut]:
        return next((t for t in self.todos if t.id == todo_id), None)

    def _replace(self, updated: TodoOut) -> None:
        self.todos = [updated if t.id == updated.id else t for t in self.todos]

    # ---- actions ----

    def load(self) -> bool:
        result = self._call("load todos", self.api.get_todos, self.filter.completed)
        if result is None:
            return False
        self.todos = list(result)
        return True

    def set_filter(self, value: Filter | str) -> bool:
        self.filter = Filter(value)
        return self.load()

    def create(self, title: Optional[str] = None) -> Optional[TodoOut]:
        title = (self.new_title if title is None else title).strip()
        if not title:
            return None
        todo = self._call("create todo", self.api.create_todo, title)
        if todo is None:
            return None
        self.todos = [todo, *self.todos]
        self.new_title = ""
        return todo

    def toggle(self, todo_id: int) -> Optional[TodoOut]:
        current = self._find(todo_id)
        if current is None:
            return None
        todo = self._call(
            "toggle todo", self.api.update_todo, todo_id, completed=not current.completed
        )
        if todo is not None:
            self._replace(todo)
        return todo

    def start_edit(self, todo_id: int) -> None:
        current = self._find(todo_id)
        if current is not None:
            self.editing = EditState(id=current.id, title=current.title)

    def change_edit(self, title: str) -> None:
        if self.editing is not None:
            self.editing.title = title

    def commit_edit(self) -> Optional[TodoOut]:
        if self.editing is None:
            return None
        title = self.editing.title.strip()
        if not title:
            return None
        todo = self._call("update todo", self.api.update_todo, self.editing.id, title=title)
        if todo is None:
            return None
        self._replace(todo)
        self.editing = None
        return todo

    def cancel_edit(self) -> None:
        self.editing = None

    def delete(self, todo_id: int) -> bool:
        result = self._call("delete todo", self.api.delete_todo, todo_id)
        if result is None:
            return False
        # success=False means the row was already gone server-side
        self.todos = [t for t in self.todos if t.id != todo_id]
        return result.success

    # ---- derived view values ----

    @property
    def visible(self) -> List[TodoOut]:
        return [t for t in self.todos if self.filter.matches(t)]

    @property
    def active_count(self) -> int:
        return sum(1 for t in self.todos if not t.completed)

    @property
    def completed_count(self) -> int:
        return sum(1 for t in self.todos if t.completed)

    @property
    def total(self) -> int:
        return len(self.todos)
