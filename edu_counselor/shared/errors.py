"""
Error taxonomy shared by every service.

Crud functions raise these; the gateway turns them into JSON responses
with a stable ``error`` code next to the human readable ``detail``.
"""
from fastapi import status


class CounselorError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "ERROR"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class AuthorizationDenied(CounselorError):
    """A row-level policy rejected the operation."""

    status_code = status.HTTP_403_FORBIDDEN
    error_code = "AUTHORIZATION_DENIED"


class UniquenessViolation(CounselorError):
    status_code = status.HTTP_409_CONFLICT
    error_code = "UNIQUENESS_VIOLATION"


class NotFound(CounselorError):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"

    @classmethod
    def row(cls, resource: str, identifier: object) -> "NotFound":
        return cls(f"{resource} not found: {identifier}")


class ValidationError(CounselorError):
    status_code = 422
    error_code = "VALIDATION_ERROR"


class NotAuthenticated(CounselorError):
    """No valid session; the UI should send the user to ``login_url``."""

    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "NOT_AUTHENTICATED"

    def __init__(self, detail: str, login_url: str | None = None):
        super().__init__(detail)
        self.login_url = login_url
