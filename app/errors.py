import traceback
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorKind(str, Enum):
    NOT_FOUND = "NotFoundError"
    VALIDATION = "ValidationError"
    UNAUTHORIZED = "UnauthorizedError"
    INTERNAL = "InternalServerError"

    @property
    def status_code(self) -> int:
        return _STATUS[self]

    @property
    def default_message(self) -> str:
        return _DEFAULT_MESSAGE[self]


_STATUS = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.INTERNAL: 500,
}

_DEFAULT_MESSAGE = {
    ErrorKind.NOT_FOUND: "Resource not found",
    ErrorKind.VALIDATION: "Validation failed",
    ErrorKind.UNAUTHORIZED: "Authentication required",
    ErrorKind.INTERNAL: "An unexpected error occurred",
}


class ApiError(Exception):
    """
    A failure that short-circuits the request pipeline.

    The error handler dispatches on `kind`, so every user-facing failure is an
    ApiError with a different tag rather than a different subclass.
    """

    def __init__(self, kind: ErrorKind, message: Optional[str] = None, details: Optional[List[str]] = None):
        self.kind = kind
        self.message = message or kind.default_message
        self.details = list(details or [])
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def to_dict(self, include_trace: bool = False) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.kind.value, "message": self.message}
        if self.details:
            body["details"] = self.details
        if include_trace:
            body["stack"] = format_trace(self)
        return body


def not_found(message: Optional[str] = None) -> ApiError:
    return ApiError(ErrorKind.NOT_FOUND, message)


def validation(message: Optional[str] = None, details: Optional[List[str]] = None) -> ApiError:
    return ApiError(ErrorKind.VALIDATION, message, details)


def unauthorized(message: Optional[str] = None) -> ApiError:
    return ApiError(ErrorKind.UNAUTHORIZED, message)


def format_trace(exc: BaseException) -> str:
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
