from typing import Optional


class TaskApiError(Exception):
    """Base error for everything the task backend can reject."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "")
        self.message = message or ""


class AuthExpired(TaskApiError):
    pass


class NotAuthenticated(TaskApiError):
    pass


class ValidationRejected(TaskApiError):
    pass


class NetworkOrServerError(TaskApiError):
    pass
