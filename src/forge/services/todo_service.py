"""Todo list view."""

import logging
from datetime import date
from typing import List, Optional

from pydantic import BaseModel

from ..db.backends import Backend
from ..db.repositories import TodoRepository
from ..exceptions import NotFoundError, ValidationError
from ..models import Todo, TodoCreate, TodoUpdate


logger = logging.getLogger(__name__)


class TodosView(BaseModel):
    """Todos ordered by due date, with counts."""

    todos: List[Todo]
    pending: int = 0
    completed: int = 0


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class TodoService:
    """Service for managing todos."""

    def __init__(self, backend: Backend):
        self.todos = TodoRepository(backend)

    def get_view(self, user_id: str) -> TodosView:
        todos = self.todos.list(user_id)
        done = sum(1 for t in todos if t.completed)
        return TodosView(todos=todos, pending=len(todos) - done, completed=done)

    def create(self, user_id: str, request: TodoCreate, today: Optional[date] = None) -> Todo:
        """
        Create a todo, due today unless a date is given.

        Raises:
            ValidationError: If the title is blank
        """
        title = request.title.strip()
        if not title:
            raise ValidationError("Todo title is required", field="title")

        due = request.due_date or today or date.today()
        todo = self.todos.create(user_id, {
            "title": title,
            "description": _blank_to_none(request.description),
            "due_date": due.isoformat(),
            "priority": request.priority.value,
            "category": request.category.strip() or Todo.model_fields["category"].default,
            "completed": False,
        })
        logger.info(f"Created todo {todo.id} for user {user_id}")
        return todo

    def update(self, user_id: str, todo_id: str, request: TodoUpdate) -> Todo:
        changes = request.model_dump(exclude_unset=True)
        if "title" in changes:
            changes["title"] = (changes["title"] or "").strip()
            if not changes["title"]:
                raise ValidationError("Todo title is required", field="title")
        if "description" in changes:
            changes["description"] = _blank_to_none(changes["description"])
        if "due_date" in changes:
            changes["due_date"] = request.due_date.isoformat() if request.due_date else None
        if "priority" in changes:
            if request.priority is None:
                raise ValidationError("Priority cannot be empty", field="priority")
            changes["priority"] = request.priority.value
        if "category" in changes:
            changes["category"] = (
                (changes["category"] or "").strip() or Todo.model_fields["category"].default
            )
        if "completed" in changes and changes["completed"] is None:
            del changes["completed"]

        todo = self.todos.update(user_id, todo_id, changes)
        if todo is None:
            raise NotFoundError("Todo", todo_id)
        return todo

    def set_completed(self, user_id: str, todo_id: str, completed: bool) -> Todo:
        """Set the completion state; calling twice with the same value is a no-op."""
        todo = self.todos.set_completed(user_id, todo_id, completed)
        if todo is None:
            raise NotFoundError("Todo", todo_id)
        return todo

    def delete(self, user_id: str, todo_id: str) -> None:
        if not self.todos.delete(user_id, todo_id):
            raise NotFoundError("Todo", todo_id)
        logger.info(f"Deleted todo {todo_id}")
