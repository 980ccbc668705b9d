"""
Domain error taxonomy.

Services raise these; the HTTP layer renders them into the transport
envelope with the matching status code (see ``circles.api.errors``).
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Union

GENERIC_ERROR_MESSAGE = "An error occurred, please try again later."


class CirclesError(Exception):
    """Base class for errors that map onto a transport status code."""

    status_code: int = 500
    default_message: str = GENERIC_ERROR_MESSAGE

    def __init__(self, messages: Optional[Union[str, Iterable[str]]] = None):
        if messages is None:
            self.messages: List[str] = [self.default_message]
        elif isinstance(messages, str):
            self.messages = [messages]
        else:
            self.messages = [str(m) for m in messages] or [self.default_message]
        super().__init__("; ".join(self.messages))

    @property
    def message(self) -> str:
        return self.messages[0]


class ValidationFailed(CirclesError):
    """Input shape or a business rule on the input was violated."""
    status_code = 422
    default_message = "Invalid request."


class Unauthorized(CirclesError):
    """Authentication missing/invalid, or the caller lacks rights on the target."""
    status_code = 401
    default_message = "Unauthorized"


class NotFound(CirclesError):
    status_code = 404
    default_message = "Not found."


class Conflict(CirclesError):
    """A state-transition precondition does not hold."""
    status_code = 409
    default_message = "Conflict."


class Internal(CirclesError):
    """Infrastructure or unexpected failure.

    The message is always the generic one so storage details never reach
    API consumers; the cause is kept on ``__cause__`` for logging.
    """
    status_code = 500

    def __init__(self, messages=None):
        super().__init__(GENERIC_ERROR_MESSAGE)
