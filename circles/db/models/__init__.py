"""
Domain-split SQLAlchemy models.

Exposes ``Base``, ``now_utc`` and every ORM class so callers can use
``from circles.db import models`` and ``models.Circle``.
"""

from .base import Base, now_utc  # re-export

from .users import User, UserType
from .circles import Circle, CircleMember
from .plugins import Plugin, CirclePlugin
from .todos import Todo
from .shopping import ShoppingItem
from .polls import Poll, PollAnswer, PollVote
from .events import Event, EventMember, EventPhoto
from .expenses import BillCategory, Bill, Budget
from .tracking import TrackingPosition

__all__ = [
    # base
    "Base",
    "now_utc",
    # users/circles
    "User",
    "UserType",
    "Circle",
    "CircleMember",
    # plugin catalogue
    "Plugin",
    "CirclePlugin",
    # plugin domains
    "Todo",
    "ShoppingItem",
    "Poll",
    "PollAnswer",
    "PollVote",
    "Event",
    "EventMember",
    "EventPhoto",
    "BillCategory",
    "Bill",
    "Budget",
    "TrackingPosition",
]
