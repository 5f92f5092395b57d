"""Domain models for the user directory."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Location:
    """Geolocation resolved for a zip code and country pair."""

    name: str
    latitude: float
    longitude: float
    country: str
    timezone: str


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: str
    name: str
    zip_code: str
    country: str
    latitude: float
    longitude: float
    timezone: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class UserPatch:
    """Requested edit of a user; ``None`` or empty means keep the stored value."""

    name: str | None = None
    zip_code: str | None = None
    country: str | None = None


@dataclass(frozen=True)
class UserUpdate:
    """Result of applying a patch: the next record and the fields that were set."""

    record: UserRecord
    changes: dict[str, object]
