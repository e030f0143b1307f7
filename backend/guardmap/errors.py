"""
Error kinds raised by repositories and services.

The API layer maps each kind to a status code, see ``guardmap.main``.
"""


class GuardmapError(Exception):
    """Base class for domain errors."""

    code = "error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(GuardmapError):
    """Malformed input, detected before any storage access."""

    code = "validation_error"
    status_code = 400


class NotFoundError(GuardmapError):
    """A location, personnel record or snapshot token does not exist."""

    code = "not_found"
    status_code = 404


class InvalidReferenceError(GuardmapError):
    """Personnel written with a location id that does not exist."""

    code = "invalid_reference"
    status_code = 400


class StorageUnavailableError(GuardmapError):
    """The database cannot be reached."""

    code = "storage_unavailable"
    status_code = 500


class RandomnessFailureError(StorageUnavailableError):
    """Snapshot token generation failed."""

    code = "randomness_failure"
