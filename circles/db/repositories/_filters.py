"""
Query fragments shared by repositories.
"""
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import or_

from circles.db.models import now_utc


def retention_cutoff(days: int, now: Optional[datetime] = None) -> datetime:
    return (now or now_utc()) - timedelta(days=days)


def still_visible(column, cutoff: datetime):
    """Rows never stamped, or stamped after ``cutoff``."""
    return or_(column.is_(None), column > cutoff)
