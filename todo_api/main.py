"""Todo API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TodoApiError → structured JSON responses
    - CORS configured from settings; the auth header is exposed to browsers
    - Database manager, token service, and password hasher are built in the
      lifespan from Settings and stored on app.state (no module-level secrets)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from todo_api.api.error_handlers import register_error_handlers
from todo_api.api.routes import health, todos, users
from todo_api.config import get_settings
from todo_api.infrastructure.database import DatabaseSessionManager
from todo_api.infrastructure.observability import setup_logging
from todo_api.infrastructure.password_hasher import PasswordHasher
from todo_api.infrastructure.token_service import TokenService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    app.state.token_service = TokenService(
        settings.jwt_secret, settings.jwt_algorithm,
    )
    app.state.password_hasher = PasswordHasher(settings.bcrypt_rounds)
    logger.info("Todo API started")
    yield
    await app.state.db_manager.dispose()
    logger.info("Todo API shutting down")


app = FastAPI(title="Todo API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[settings.auth_header],
)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(todos.router)

register_error_handlers(app)
