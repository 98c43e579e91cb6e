from fastapi import status


class LifecycleError(Exception):
    """Base class for refused test lifecycle operations.

    Each subclass carries a stable ``kind`` used by API clients to tell a
    missing record from a state conflict, and the HTTP status it maps to.
    """

    kind = 'error'
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(LifecycleError):
    kind = 'not_found'
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(LifecycleError):
    kind = 'conflict'
    status_code = status.HTTP_409_CONFLICT


class LimitExceededError(LifecycleError):
    kind = 'limit_exceeded'
    status_code = status.HTTP_429_TOO_MANY_REQUESTS


class UnprocessableError(LifecycleError):
    kind = 'unprocessable'
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
