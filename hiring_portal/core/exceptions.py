"""Domain errors and their HTTP status codes."""

from fastapi import status


class PortalError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Server error"

    def __init__(self, detail: str = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(PortalError):
    """Missing or malformed input, rejected before any mutation."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "All required fields must be provided"


class Unauthenticated(PortalError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "No token provided"


class InvalidCredential(PortalError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Invalid token"


class Forbidden(PortalError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Access denied"


class NotFound(PortalError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class UnknownSender(NotFound):
    default_detail = "Sender not found"


class UnknownConnection(NotFound):
    default_detail = "Connection not found"


class InvalidReference(PortalError):
    """A write referenced an entity that does not exist."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Referenced entity does not exist"


class UnknownProject(InvalidReference):
    default_detail = "Project not found"


class EmailAlreadyExists(PortalError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Email already exists"
