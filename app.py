"""
App assembly entry point.

Re-exports the FastAPI `app` from `circles.api.main` for ``uvicorn app:app``.
"""

from circles.api.main import app  # noqa: F401
