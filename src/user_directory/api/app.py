"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from user_directory.api.error_handlers import register_error_handlers
from user_directory.api.schemas import (
    CreateUserRequest,
    UpdateUserRequest,
    serialize_changes,
    serialize_user,
)
from user_directory.app_logging import configure_logging
from user_directory.config import parse_cors_origins
from user_directory.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("User directory API ready")
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_cors_origins(container.settings.cors_allow_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    @app.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        """Welcome message."""
        return "Welcome to the User Management API!"

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/users", status_code=status.HTTP_201_CREATED)
    async def create_user(body: CreateUserRequest, request: Request) -> dict:
        """Create a user, resolving its location from the zip code."""
        state_container: AppContainer = request.app.state.container
        record = await state_container.user_service.create_user(
            body.name, body.zip_code, body.country
        )
        return serialize_user(record)

    @app.get("/users")
    def list_users(request: Request) -> dict:
        """Return all users keyed by id."""
        state_container: AppContainer = request.app.state.container
        users = state_container.user_service.list_users()
        return {user_id: serialize_user(record) for user_id, record in users.items()}

    @app.get("/users/{user_id}")
    def get_user(user_id: str, request: Request) -> dict:
        """Return a single user."""
        state_container: AppContainer = request.app.state.container
        return serialize_user(state_container.user_service.get_user(user_id))

    @app.put("/users/{user_id}")
    async def update_user(
        user_id: str, body: UpdateUserRequest, request: Request
    ) -> dict:
        """Update a user; location is re-fetched only when the zip code changes."""
        state_container: AppContainer = request.app.state.container
        update = await state_container.user_service.update_user(
            user_id, body.to_patch()
        )
        return {
            "message": "User updated successfully",
            "updates": serialize_changes(update.changes),
        }

    @app.delete("/users/{user_id}")
    def delete_user(user_id: str, request: Request) -> dict[str, str]:
        """Delete a user."""
        state_container: AppContainer = request.app.state.container
        state_container.user_service.delete_user(user_id)
        return {"message": "User deleted successfully"}

    return app
