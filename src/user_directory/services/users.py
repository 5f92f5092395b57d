"""User-related business logic."""

import logging
from dataclasses import dataclass
from typing import Protocol

from starlette.concurrency import run_in_threadpool

from user_directory.domain.models import UserPatch, UserRecord, UserUpdate
from user_directory.services.reconciler import RecordReconciler

_logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def generate_id(self) -> str:
        """Return a fresh, unused user id."""

    def put(self, record: UserRecord) -> None:
        """Store a full user record."""

    def get(self, user_id: str) -> UserRecord:
        """Return the user, raising ``NotFoundError`` when absent."""

    def list_all(self) -> dict[str, UserRecord]:
        """Return all users keyed by id."""

    def update_fields(self, user_id: str, changes: dict[str, object]) -> None:
        """Write the given fields of a user in one operation."""

    def delete(self, user_id: str) -> None:
        """Delete the user, raising ``NotFoundError`` when absent."""


@dataclass
class UserService:
    """Application service for user lifecycle actions.

    Repository calls are blocking; the async paths hand them to a worker thread.
    """

    repository: UserRepository
    reconciler: RecordReconciler

    async def create_user(
        self, name: str | None, zip_code: str | None, country: str | None = None
    ) -> UserRecord:
        """Create, resolve and persist a new user."""
        record = await self.reconciler.create(name, zip_code, country)
        await run_in_threadpool(self.repository.put, record)
        _logger.info("Created user %s (zip=%s)", record.id, record.zip_code)
        return record

    def list_users(self) -> dict[str, UserRecord]:
        """Return all users keyed by id."""
        return self.repository.list_all()

    def get_user(self, user_id: str) -> UserRecord:
        """Return a single user."""
        return self.repository.get(user_id)

    async def update_user(self, user_id: str, patch: UserPatch) -> UserUpdate:
        """Apply a patch to a stored user and persist the changed fields."""
        existing = await run_in_threadpool(self.repository.get, user_id)
        update = await self.reconciler.apply(existing, patch)
        await run_in_threadpool(self.repository.update_fields, user_id, update.changes)
        _logger.info(
            "Updated user %s (fields=%s)", user_id, ",".join(sorted(update.changes))
        )
        return update

    def delete_user(self, user_id: str) -> None:
        """Remove a user."""
        self.repository.delete(user_id)
        _logger.info("Deleted user %s", user_id)
