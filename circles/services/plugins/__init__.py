"""Per-circle plugin services."""

from .todo_service import TodoService
from .shopping_list_service import ShoppingListService
from .poll_service import PollService
from .event_service import EventService
from .expenses_service import ExpensesService
from .tracking_system_service import TrackingSystemService

__all__ = [
    "TodoService",
    "ShoppingListService",
    "PollService",
    "EventService",
    "ExpensesService",
    "TrackingSystemService",
]
