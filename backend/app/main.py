"""FastAPI application entry point with startup initialisation and logging."""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.db.session import engine
from app.db.init_db import init_db
from app.errors import register_error_handlers
from app.routers import (
    admin_router,
    ads_router,
    assistant_router,
    auth_router,
    course_admin_router,
    courses_router,
    departments_router,
    leaderboard_router,
    messages_router,
    presence_router,
    roles_router,
)


def _configure_logging() -> None:
    """Set up structured logging for the application."""
    root_logger = logging.getLogger("lumora")
    root_logger.setLevel(logging.INFO)

    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for name in ("app.routers", "app.ai", "app.services", "app.db"):
        logging.getLogger(name).setLevel(logging.INFO)


_configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle startup and shutdown events."""
    await init_db()
    yield
    await engine.dispose()


app = FastAPI(title="Lumora", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_error_handlers(app)

app.include_router(auth_router)
app.include_router(roles_router)
app.include_router(admin_router)
app.include_router(messages_router)
app.include_router(ads_router)
app.include_router(presence_router)
app.include_router(departments_router)
app.include_router(leaderboard_router)
app.include_router(assistant_router)
app.include_router(courses_router)
app.include_router(course_admin_router)


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
