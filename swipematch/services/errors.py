from __future__ import annotations

from fastapi import status


class SwipeMatchError(RuntimeError):
    """Base class for errors the API reports with a stable ``code``."""

    code = "error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnauthenticatedError(SwipeMatchError):
    code = "unauthenticated"
    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(SwipeMatchError):
    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class SelfLikeError(SwipeMatchError):
    code = "invalid_target"
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(SwipeMatchError):
    code = "conflict"
    status_code = status.HTTP_409_CONFLICT


class InvalidUploadError(SwipeMatchError):
    code = "invalid_upload"
    status_code = status.HTTP_400_BAD_REQUEST


class UploadTooLargeError(InvalidUploadError):
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE


class PersistenceError(SwipeMatchError):
    """A store write failed for a reason other than a duplicate key. Retryable."""

    code = "persistence_error"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
