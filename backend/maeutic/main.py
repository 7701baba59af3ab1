"""MaeutIC API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map MaeuticError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database and message cipher initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Importing message_encryption registers the Message ORM hooks; the lifespan
      only installs the key
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from maeutic import __version__
from maeutic.api.error_handlers import register_error_handlers
from maeutic.api.routes import (
    auth, chat, comments, conversations, forums, health, library, maps, network,
    notifications, resources, users,
)
from maeutic.config import get_settings
from maeutic.infrastructure import database
from maeutic.infrastructure.message_encryption import init_message_encryption
from maeutic.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    init_message_encryption(settings.message_encryption_key)
    logger.info("MaeutIC API started")
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("MaeutIC API shutting down")


app = FastAPI(title="MaeutIC API", version=__version__, lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(network.router)
app.include_router(notifications.router)
app.include_router(conversations.router)
app.include_router(chat.router)
app.include_router(forums.router)
app.include_router(comments.router)
app.include_router(maps.router)
app.include_router(library.router)
app.include_router(resources.router)
