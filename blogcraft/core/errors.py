from typing import Optional


class AppError(Exception):
    """Base application error carrying an HTTP status"""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Missing or invalid required field"""

    status_code = 400
    default_message = "Invalid request"


class AuthenticationError(AppError):
    status_code = 401
    default_message = "Could not validate credentials"


class NotFoundError(AppError):
    """Referenced owner or blog does not exist"""

    status_code = 404
    default_message = "Not found"


class ConflictError(AppError):
    status_code = 409
    default_message = "Already exists"


class UpstreamError(AppError):
    """Generation service failure"""

    status_code = 500
    default_message = "Failed to generate content"


class PersistenceError(AppError):
    """Store read/write failure"""

    status_code = 500
    default_message = "Database operation failed"
