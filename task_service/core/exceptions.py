"""
Exception hierarchy for Task Service.

Every error raised while handling a request derives from
``TaskServiceError`` and carries the HTTP status code and the short
message that end up in the response body. A single exception handler
registered on the application renders them as ``{"detail": message}``.

Usage:
    from task_service.core.exceptions import TaskNotFoundError

    if task is None:
        raise TaskNotFoundError(task_id)
"""
from typing import Optional

from fastapi import status


class TaskServiceError(Exception):
    """Base exception for all Task Service errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class DecodeError(TaskServiceError):
    """Request body is not a well-formed task payload."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request body"


class BadRequest(TaskServiceError):
    """Path parameter could not be parsed."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid task ID"


class ValidationError(TaskServiceError):
    """A required task field is missing or empty."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Title and Status are required fields"


class TaskNotFoundError(TaskServiceError):
    """No task row exists for the requested id."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Task not found"

    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__()


class StorageError(TaskServiceError):
    """
    The persistence layer failed.

    ``operation`` names what was attempted (``"create task"``,
    ``"retrieve tasks"``, ...) and is used to build the response message.
    ``original_error`` keeps the underlying database exception for logging.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, operation: str, original_error: Optional[Exception] = None):
        self.operation = operation
        self.original_error = original_error
        super().__init__(f"Failed to {operation}")
