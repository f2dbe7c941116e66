"""Repository for todos."""

from typing import Optional

from ...models import Todo
from .base import UserScopedRepository


class TodoRepository(UserScopedRepository[Todo]):
    """Todos ordered by due date, undated ones last."""

    table = "todos"
    model = Todo
    order_by = "due_date"

    def set_completed(self, user_id: str, todo_id: str, completed: bool) -> Optional[Todo]:
        """Write the target completion state; repeating the call changes nothing."""
        return self.update(user_id, todo_id, {"completed": completed})
