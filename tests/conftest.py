"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta

import httpx
import pytest

from user_directory.adapters.openweather_client import OpenWeatherClient
from user_directory.config import Settings
from user_directory.containers import AppContainer
from user_directory.domain.models import UserRecord
from user_directory.errors import NotFoundError, StoreError
from user_directory.services.geolocation import GeolocationResolver
from user_directory.services.reconciler import RecordReconciler
from user_directory.services.users import UserRepository, UserService


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[str, UserRecord] = field(default_factory=dict)
    writes: list[str] = field(default_factory=list)
    failing: set[str] = field(default_factory=set)
    _counter: int = 0

    def _check(self, operation: str) -> None:
        if operation in self.failing:
            raise StoreError(operation, f"{operation} unavailable")

    def generate_id(self) -> str:
        self._counter += 1
        return f"user-{self._counter}"

    def put(self, record: UserRecord) -> None:
        self._check("put")
        self.writes.append(record.id)
        self.users[record.id] = record

    def get(self, user_id: str) -> UserRecord:
        self._check("get")
        if user_id not in self.users:
            raise NotFoundError(user_id)
        return self.users[user_id]

    def list_all(self) -> dict[str, UserRecord]:
        self._check("list")
        return dict(self.users)

    def update_fields(self, user_id: str, changes: dict[str, object]) -> None:
        self._check("update")
        current = self.get(user_id)
        self.writes.append(user_id)
        self.users[user_id] = replace(current, **changes)

    def delete(self, user_id: str) -> None:
        self._check("delete")
        if user_id not in self.users:
            raise NotFoundError(user_id)
        del self.users[user_id]


@dataclass
class FakeOpenWeatherClient(OpenWeatherClient):
    """Fake OpenWeather client serving canned payloads per zip code."""

    locations: dict[str, dict[str, object]] = field(
        default_factory=lambda: {
            "94105": {
                "zip": "94105",
                "name": "San Francisco",
                "lat": 37.78,
                "lon": -122.39,
                "country": "US",
            },
            "10001": {
                "zip": "10001",
                "name": "New York",
                "lat": 40.75,
                "lon": -73.99,
                "country": "US",
            },
        }
    )
    timezones: dict[tuple[float, float], object] = field(
        default_factory=lambda: {
            (37.78, -122.39): "America/Los_Angeles",
            (40.75, -73.99): "America/New_York",
        }
    )
    zip_calls: list[tuple[str, str]] = field(default_factory=list)
    weather_calls: list[tuple[float, float]] = field(default_factory=list)

    async def get_zip_location(self, zip_code: str, country: str) -> dict[str, object]:
        self.zip_calls.append((zip_code, country))
        if zip_code not in self.locations:
            request = httpx.Request("GET", "https://api.test/geo/1.0/zip")
            response = httpx.Response(
                404, json={"cod": "404", "message": "not found"}, request=request
            )
            raise httpx.HTTPStatusError(
                "Client error '404 Not Found'", request=request, response=response
            )
        return self.locations[zip_code]

    async def get_current_weather(
        self, latitude: float, longitude: float
    ) -> dict[str, object]:
        self.weather_calls.append((latitude, longitude))
        return {"timezone": self.timezones.get((latitude, longitude), 0)}


@dataclass
class TickingClock:
    """Clock advancing one minute per call."""

    current: datetime = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        now = self.current
        self.current = now + timedelta(minutes=1)
        return now


def make_record(**overrides: object) -> UserRecord:
    """Build a stored San Francisco record."""
    created = datetime(2025, 12, 1, 9, 0, tzinfo=UTC)
    fields: dict[str, object] = {
        "id": "user-1",
        "name": "Ana",
        "zip_code": "94105",
        "country": "US",
        "latitude": 37.78,
        "longitude": -122.39,
        "timezone": "America/Los_Angeles",
        "created_at": created,
        "updated_at": created,
    }
    fields.update(overrides)
    return UserRecord(**fields)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=(
            "eyJhbGciOiJIUzI1NiJ9.eyJyb2xlIjoic2VydmljZV9yb2xlIn0.signature"
        ),
        openweather_api_key="weather-key",
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def weather_client() -> FakeOpenWeatherClient:
    return FakeOpenWeatherClient()


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def reconciler(
    weather_client: FakeOpenWeatherClient,
    user_repository: InMemoryUserRepository,
    clock: TickingClock,
) -> RecordReconciler:
    return RecordReconciler(
        resolver=GeolocationResolver(weather_client),
        id_factory=user_repository.generate_id,
        clock=clock,
    )


@pytest.fixture
def user_service(
    user_repository: InMemoryUserRepository, reconciler: RecordReconciler
) -> UserService:
    return UserService(repository=user_repository, reconciler=reconciler)


@pytest.fixture
def container(settings: Settings, user_service: UserService) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        user_service=user_service,
        close_resources=close_resources,
    )
