"""
Domain errors raised by the service layer.

Each error carries a stable code and the HTTP status the API maps it to;
app/api/error_handlers.py turns them into JSON responses.
"""
from typing import Optional


class TimesheetAppError(Exception):
    """Base class for all expected, user-facing failures."""

    def __init__(self, message: str, code: str, http_status: int = 400):
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status

    def to_response(self) -> dict:
        return {"error": {"code": self.code, "message": self.message}}


class NotFoundError(TimesheetAppError):
    def __init__(self, resource: str, resource_id: object):
        super().__init__(f"{resource} with ID {resource_id} not found", "NOT_FOUND", 404)
        self.resource = resource
        self.resource_id = resource_id


class ForbiddenError(TimesheetAppError):
    def __init__(self, message: str = "You do not have access to this resource"):
        super().__init__(message, "FORBIDDEN", 403)


class InvalidStateError(TimesheetAppError):
    def __init__(self, message: str):
        super().__init__(message, "INVALID_STATE", 400)


class DuplicateWeekError(TimesheetAppError):
    def __init__(self, message: str = "Timesheet already exists for this week"):
        super().__init__(message, "DUPLICATE_WEEK", 400)


class ValidationError(TimesheetAppError):
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, "VALIDATION_ERROR", 400)
        self.field = field


class ConflictError(TimesheetAppError):
    def __init__(self, message: str):
        super().__init__(message, "CONFLICT", 409)
