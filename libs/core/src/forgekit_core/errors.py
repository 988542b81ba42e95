"""Domain errors shared by the API and storage layers.

Each error carries the HTTP status it is surfaced with, so the API edge can
render every failure through one handler.
"""


class ForgekitError(Exception):
    """Base class for expected, client-facing failures."""

    status_code: int = 500
    default_message: str = "An unexpected error occurred."

    def __init__(self, message: str | None = None, errors: list[str] | None = None):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)


class AuthenticationError(ForgekitError):
    """Missing or unknown credential (project token or owner bearer)."""

    status_code = 401
    default_message = "Invalid API token."


class AuthorizationError(ForgekitError):
    """Credential is valid but not allowed to touch the resource."""

    status_code = 403
    default_message = "Access denied."


class NotFoundError(ForgekitError):
    status_code = 404
    default_message = "Resource not found."


class ValidationFailedError(ForgekitError):
    """A payload violated its module schema. Carries every field error."""

    status_code = 400
    default_message = "Validation failed."


class ConflictError(ForgekitError):
    """A unique key was violated."""

    status_code = 409
    default_message = "Resource already exists."


class ModuleAlreadyEnabledError(ConflictError):
    status_code = 400
    default_message = "Module is already enabled for this project."
