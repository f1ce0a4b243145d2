from typing import Any, Dict, Optional


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None, **extra: Any):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.extra: Dict[str, Any] = extra

    def to_content(self) -> Dict[str, Any]:
        return {"message": self.message, **self.extra}


class ValidationError(AppError):
    """Raised when a request is missing fields or has malformed values."""

    status_code = 400


class ConflictError(AppError):
    """Raised when a uniqueness constraint would be violated."""

    status_code = 400


class AuthError(AppError):
    """Raised for bad credentials or a missing/invalid token."""

    status_code = 401


class InternalError(AppError):
    """Raised when storage or another dependency fails."""

    status_code = 500
