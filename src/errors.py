"""
API error kinds shared by the services and the web layer.

Every failure that reaches an HTTP response is wrapped once into one of these
kinds and rendered through the uniform `{error, message, code}` envelope.
"""

from http import HTTPStatus
from typing import Optional


def status_phrase(status_code: int) -> str:
    """Return the standard reason phrase for an HTTP status code."""
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


class APIError(Exception):
    """An error with an HTTP status code and a client-facing message."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_response(self) -> dict:
        """Build the error envelope for this error."""
        return {
            "error": status_phrase(self.status_code),
            "message": self.message,
            "code": int(self.status_code),
        }


class BadRequestError(APIError):
    status_code = HTTPStatus.BAD_REQUEST


class UnauthorizedError(APIError):
    status_code = HTTPStatus.UNAUTHORIZED


class NotFoundError(APIError):
    status_code = HTTPStatus.NOT_FOUND


class InternalServerError(APIError):
    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
