"""Create and update policy for user records.

Derived fields (latitude, longitude, country, timezone) always come from the
latest resolution of the record's zip code. They are re-resolved only when
the zip code changes value, and replaced together or not at all.
"""

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime

from user_directory.domain.models import UserPatch, UserRecord, UserUpdate
from user_directory.errors import ValidationError
from user_directory.services.geolocation import GeolocationResolver


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def _provided(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


@dataclass
class RecordReconciler:
    """Produces the next state of a user record."""

    resolver: GeolocationResolver
    id_factory: Callable[[], str]
    clock: Callable[[], datetime] = field(default=_utc_now)
    default_country: str = "US"

    async def create(
        self, name: str | None, zip_code: str | None, country: str | None = None
    ) -> UserRecord:
        """Build a new record, resolving its location."""
        clean_name = _provided(name)
        clean_zip = _provided(zip_code)
        if clean_name is None or clean_zip is None:
            raise ValidationError()

        requested_country = (_provided(country) or self.default_country).upper()
        location = await self.resolver.resolve(clean_zip, requested_country)
        now = self.clock()
        return UserRecord(
            id=self.id_factory(),
            name=clean_name,
            zip_code=clean_zip,
            country=location.country or requested_country,
            latitude=location.latitude,
            longitude=location.longitude,
            timezone=location.timezone,
            created_at=now,
            updated_at=now,
        )

    async def apply(self, existing: UserRecord, patch: UserPatch) -> UserUpdate:
        """Merge a patch into an existing record."""
        name = _provided(patch.name) or existing.name
        zip_code = _provided(patch.zip_code)

        changes: dict[str, object] = {"name": name}
        if zip_code is not None and zip_code != existing.zip_code:
            requested_country = _provided(patch.country)
            country = (
                requested_country.upper() if requested_country else existing.country
            )
            location = await self.resolver.resolve(zip_code, country)
            changes.update(
                zip_code=zip_code,
                country=location.country or country,
                latitude=location.latitude,
                longitude=location.longitude,
                timezone=location.timezone,
            )
        changes["updated_at"] = self.clock()

        return UserUpdate(record=replace(existing, **changes), changes=changes)
