"""
API error taxonomy
Every handler raises one of these; main.py renders them as JSON envelopes
"""
from fastapi import status


class ApiError(Exception):
    """
    Base class for errors that map onto an HTTP response

    `kind` is the machine readable tag placed in the envelope's `error` field
    """
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    kind: str = "internal"

    def __init__(self, message: str, error: str | None = None):
        self.message = message
        self.error = error or self.kind
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"message": self.message, "error": self.error}


class Unauthenticated(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    kind = "unauthenticated"

    def to_dict(self) -> dict:
        return {"error": self.message}


class InvalidToken(Unauthenticated):
    status_code = status.HTTP_400_BAD_REQUEST
    kind = "invalid_token"


class Forbidden(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    kind = "forbidden"


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    kind = "not_found"


class ValidationFailed(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    kind = "validation_failed"


class InsufficientStock(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    kind = "insufficient_stock"


class Conflict(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    kind = "conflict"


class Internal(ApiError):
    pass
