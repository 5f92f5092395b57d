"""Request and response shapes for the users API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from user_directory.domain.models import UserPatch, UserRecord

_WIRE_KEYS = {
    "id": "id",
    "name": "name",
    "zip_code": "zipCode",
    "country": "country",
    "latitude": "lat",
    "longitude": "lon",
    "timezone": "timezone",
    "created_at": "createdAt",
    "updated_at": "updatedAt",
}


class CreateUserRequest(BaseModel):
    """Body of POST /users. Presence is checked by the reconciler."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    zip_code: str | None = Field(default=None, alias="zipCode")
    country: str | None = None


class UpdateUserRequest(BaseModel):
    """Body of PUT /users/{id}."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    zip_code: str | None = Field(default=None, alias="zipCode")
    country: str | None = None

    def to_patch(self) -> UserPatch:
        return UserPatch(name=self.name, zip_code=self.zip_code, country=self.country)


def serialize_user(record: UserRecord) -> dict[str, object]:
    """Render a record in the camelCase wire format."""
    return {
        "id": record.id,
        "name": record.name,
        "zipCode": record.zip_code,
        "country": record.country,
        "lat": record.latitude,
        "lon": record.longitude,
        "timezone": record.timezone,
        "createdAt": record.created_at.isoformat(),
        "updatedAt": record.updated_at.isoformat(),
    }


def serialize_changes(changes: dict[str, object]) -> dict[str, object]:
    """Render applied update fields with wire keys."""
    rendered: dict[str, object] = {}
    for field, value in changes.items():
        if isinstance(value, datetime):
            value = value.isoformat()
        rendered[_WIRE_KEYS[field]] = value
    return rendered
