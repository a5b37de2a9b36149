"""Application error taxonomy.

Every error carries the HTTP status the API layer answers with. Handlers in
``nutri_tracker.api.app`` turn them into the ``{success, message, error}``
envelope.
"""


class AppError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, detail: str | None = None):
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or missing input."""

    status_code = 400
    default_message = "Invalid input"


class DuplicateUsername(ValidationError):
    """Signup attempted with a username that is already taken."""

    default_message = "Username already exists"


class Unauthorized(AppError):
    """No usable credential was supplied."""

    status_code = 401
    default_message = "No token provided"


class InvalidToken(Unauthorized):
    """Token failed signature, structure or expiry checks."""

    default_message = "Invalid token"


class InvalidCredentials(Unauthorized):
    """Login failed; the message does not reveal which part was wrong."""

    default_message = "Invalid credentials"


class NotFound(AppError):
    status_code = 404
    default_message = "Not found"


class PredictionUnavailable(AppError):
    """The external prediction service failed; ``detail`` holds its message."""

    status_code = 500
    default_message = (
        "ML model unavailable. Check ML_API_URL and prediction service status."
    )


class InternalError(AppError):
    status_code = 500


class DatabaseUnavailable(RuntimeError):
    """Raised when the database cannot be reached during startup."""
