"""Error taxonomy shared by services and the HTTP layer.

Every error carries the HTTP status it maps to and renders the
``{"error": ..., "details": ...}`` envelope returned to clients.
"""


class UserDirectoryError(Exception):
    """Base exception for all user directory failures."""

    http_status = 500
    default_message = "Something went wrong!"

    def __init__(self, message: str | None = None, details: object = None) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_response(self) -> dict[str, object]:
        """Return the JSON error envelope."""
        body: dict[str, object] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(UserDirectoryError):
    """Required input is missing."""

    http_status = 400
    default_message = "Name and zipCode are required"


class NotFoundError(UserDirectoryError):
    """No user is stored under the requested id."""

    http_status = 404
    default_message = "User not found"

    def __init__(self, user_id: str | None = None) -> None:
        super().__init__()
        self.user_id = user_id


class ResolutionError(UserDirectoryError):
    """Geolocation lookup failed; details carry the upstream message."""

    http_status = 500
    default_message = "Failed to fetch location data"

    def __init__(self, upstream_message: str) -> None:
        super().__init__(details=upstream_message)


class StoreError(UserDirectoryError):
    """The user store rejected or failed an operation."""

    http_status = 500
    default_message = "Failed to access user store"

    def __init__(self, operation: str, backend_message: str) -> None:
        super().__init__(details=backend_message)
        self.operation = operation
