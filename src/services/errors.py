"""Domain errors raised by the service layer.

The API layer maps each error kind to an HTTP status in ``src.main``; services
never raise ``HTTPException`` themselves.
"""

from fastapi import status


class TaskListError(Exception):
    """Base class for request-scoped failures reported to the caller."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_detail: str = "Request failed"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class AuthenticationError(TaskListError):
    """No valid identity is attached to the request."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Authentication required"


class AuthorizationError(TaskListError):
    """The caller is known but is not allowed to touch the resource."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "You don't have access to this task list"


class ConflictError(TaskListError):
    """A unique field (such as an email address) is already taken."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource already exists"


class NotFoundError(TaskListError):
    """A referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"
