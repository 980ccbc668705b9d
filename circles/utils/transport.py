"""
Uniform response envelope: ``{"status": {"id", "errors"}, "data"?}``.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

_ABSENT = object()


class Transport:
    """Response envelope.

    ``errors`` is normalized to a list or ``None``; a bare value becomes a
    one-element list. When errors are present (or no payload was given) the
    ``data`` key is left out of the serialized form entirely.
    """

    def __init__(self, status_id: int, errors: Any = None, data: Any = _ABSENT):
        self.status_id = int(status_id)
        if errors is None:
            self.errors: Optional[List[Any]] = None
        elif isinstance(errors, (list, tuple)):
            self.errors = list(errors)
        else:
            self.errors = [errors]
        self.data = _ABSENT if self.errors is not None else data

    @property
    def has_data(self) -> bool:
        return self.data is not _ABSENT

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"status": {"id": self.status_id, "errors": self.errors}}
        if self.has_data:
            body["data"] = self.data
        return body


def ok(data: Any = _ABSENT) -> Dict[str, Any]:
    """Serialized 200 envelope, with or without a payload."""
    return Transport(200, None, data).to_dict()
