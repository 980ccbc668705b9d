from datetime import datetime
from typing import Any, Dict, List, Optional

from circles.db.repositories import todos as todo_repo
from circles.db.schemas import TodoOut
from circles.services._guards import storage_guard
from circles.services.plugins.base import CirclePluginService
from circles.utils.errors import NotFound

TODO_NOT_FOUND = "To-do not found."


class TodoService(CirclePluginService):
    """Personal to-dos of a user inside a circle."""

    def add(self, user_id: int, circle_id: int, description: str) -> Dict[str, int]:
        self._require_member(user_id, circle_id)
        with storage_guard(self.db, "add_todo"):
            todo_id = todo_repo.add_todo(self.db, user_id, circle_id, description)
        return {"id": todo_id}

    def mark_as_done(self, user_id: int, circle_id: int, todo_id: int) -> None:
        self._require_member(user_id, circle_id)
        with storage_guard(self.db, "mark_todo_done"):
            if not todo_repo.mark_as_done(self.db, todo_id, user_id, circle_id):
                raise NotFound(TODO_NOT_FOUND)

    def remove(self, user_id: int, circle_id: int, todo_id: int) -> None:
        self._require_member(user_id, circle_id)
        with storage_guard(self.db, "remove_todo"):
            if not todo_repo.remove_todo(self.db, todo_id, user_id, circle_id):
                raise NotFound(TODO_NOT_FOUND)

    def update(self, user_id: int, circle_id: int, todo_id: int, description: str) -> None:
        self._require_member(user_id, circle_id)
        with storage_guard(self.db, "update_todo"):
            if not todo_repo.update_todo(self.db, todo_id, user_id, circle_id, description):
                raise NotFound(TODO_NOT_FOUND)

    def list(self, user_id: int, circle_id: int, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
        self._require_member(user_id, circle_id)
        with storage_guard(self.db, "list_todos"):
            todos = todo_repo.get_todos(self.db, circle_id, user_id, self.config.display_retention_days, now)
        if not todos:
            raise NotFound("There are no To-dos.")
        return [
            TodoOut(
                id=t.id,
                description=t.description,
                created_on=t.created_on,
                done=t.done_on is not None,
                removed=t.removed_on is not None,
            ).to_wire()
            for t in todos
        ]
