"""Service-level errors mapped to HTTP responses by the API layer."""


class PhotoFeedError(Exception):
    """Base class for expected, client-facing failures."""

    status_code = 400

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(PhotoFeedError):
    """A required field is missing or malformed."""

    status_code = 400


class AuthenticationError(PhotoFeedError):
    """The caller's identity is missing or invalid."""

    status_code = 401

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message)


class AuthorizationError(PhotoFeedError):
    """The caller lacks the role or ownership the operation needs."""

    status_code = 403


class NotFoundError(PhotoFeedError):
    """A referenced entity does not exist."""

    status_code = 404


class ConflictError(PhotoFeedError):
    """A unique field is already taken."""

    status_code = 409


class DuplicateRecordError(Exception):
    """Raised by repositories when a conditional insert hits an existing key."""
