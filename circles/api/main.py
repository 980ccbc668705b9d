"""
FastAPI app assembly: logging, middleware, error handlers and router wiring.
"""
import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from circles.api.auth import router as auth_router
from circles.api.circles import router as circles_router
from circles.api.errors import register_exception_handlers
from circles.api.event import router as event_router
from circles.api.expenses import router as expenses_router
from circles.api.plugins import router as plugins_router
from circles.api.poll import router as poll_router
from circles.api.shopping_list import router as shopping_list_router
from circles.api.todo import router as todo_router
from circles.api.tracking import router as tracking_router
from circles.api.users import router as users_router
from circles.utils.config import get_config
from circles.utils.transport import ok

# Configure logging
LOG_LEVEL_NAME = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)
logger.info("app_startup: log_level=%s", LOG_LEVEL_NAME)

for problem in get_config().validate():
    logger.warning("config: %s", problem)

# Database schema is managed by Alembic migrations.

app = FastAPI(
    title="Circles Back-End",
    description="API for private circles of users sharing to-dos, shopping lists, polls, events, expenses and positions.",
    version="1.0.0",
)

origins = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost,http://localhost:3000,http://localhost:8000").split(",")
    if origin.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth_router)
app.include_router(users_router)
app.include_router(circles_router)
app.include_router(plugins_router)
app.include_router(todo_router)
app.include_router(shopping_list_router)
app.include_router(poll_router)
app.include_router(event_router)
app.include_router(expenses_router)
app.include_router(tracking_router)


@app.get("/")
def root():
    return ok("Circles Back-End")


@app.get("/health")
def health_check():
    return {"status": "ok"}
