"""Supabase-backed user repository."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import TypeVar
from uuid import uuid4

import httpx
from supabase import Client, PostgrestAPIError

from user_directory.domain.models import UserRecord
from user_directory.errors import NotFoundError, StoreError
from user_directory.services.users import UserRepository

_COLUMNS = "id, name, zip_code, country, lat, lon, timezone, created_at, updated_at"

_FIELD_COLUMNS = {
    "name": "name",
    "zip_code": "zip_code",
    "country": "country",
    "latitude": "lat",
    "longitude": "lon",
    "timezone": "timezone",
    "created_at": "created_at",
    "updated_at": "updated_at",
}

T = TypeVar("T")


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client
    table_name: str = "users"

    def generate_id(self) -> str:
        """Return a fresh key for a new user row."""
        return uuid4().hex

    def put(self, record: UserRecord) -> None:
        """Write a full user row."""
        self._run(
            "put",
            lambda: self.client.table(self.table_name)
            .upsert(_record_to_row(record))
            .execute(),
        )

    def get(self, user_id: str) -> UserRecord:
        """Return the user stored under ``user_id``."""
        response = self._run(
            "get",
            lambda: self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("id", user_id)
            .limit(1)
            .execute(),
        )
        if not response.data:
            raise NotFoundError(user_id)
        return _row_to_record(response.data[0])

    def list_all(self) -> dict[str, UserRecord]:
        """Return every stored user keyed by id."""
        response = self._run(
            "list",
            lambda: self.client.table(self.table_name)
            .select(_COLUMNS)
            .order("created_at")
            .execute(),
        )
        records = [_row_to_record(row) for row in response.data or []]
        return {record.id: record for record in records}

    def update_fields(self, user_id: str, changes: dict[str, object]) -> None:
        """Write the changed fields of a user in a single update."""
        payload = {
            _FIELD_COLUMNS[field]: _to_column_value(value)
            for field, value in changes.items()
        }
        response = self._run(
            "update",
            lambda: self.client.table(self.table_name)
            .update(payload)
            .eq("id", user_id)
            .execute(),
        )
        if not response.data:
            raise NotFoundError(user_id)

    def delete(self, user_id: str) -> None:
        """Delete a user row."""
        response = self._run(
            "delete",
            lambda: self.client.table(self.table_name)
            .delete()
            .eq("id", user_id)
            .execute(),
        )
        if not response.data:
            raise NotFoundError(user_id)

    def _run(self, operation: str, call: Callable[[], T]) -> T:
        try:
            return call()
        except (PostgrestAPIError, httpx.HTTPError) as exc:
            raise StoreError(operation, str(exc)) from exc


def _to_column_value(value: object) -> object:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def _record_to_row(record: UserRecord) -> dict[str, object]:
    return {
        "id": record.id,
        "name": record.name,
        "zip_code": record.zip_code,
        "country": record.country,
        "lat": record.latitude,
        "lon": record.longitude,
        "timezone": record.timezone,
        "created_at": record.created_at.isoformat(),
        "updated_at": record.updated_at.isoformat(),
    }


def _row_to_record(row: dict[str, object]) -> UserRecord:
    return UserRecord(
        id=str(row["id"]),
        name=str(row["name"]),
        zip_code=str(row["zip_code"]),
        country=str(row["country"]),
        latitude=float(row["lat"]),
        longitude=float(row["lon"]),
        timezone=str(row["timezone"]),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        updated_at=datetime.fromisoformat(str(row["updated_at"])),
    )
