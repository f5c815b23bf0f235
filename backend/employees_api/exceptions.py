"""
Employees API — Custom Exception Hierarchy
============================================

What:  Application-specific exceptions for the failures the service layer reports.
Why:   Routes stay free of try/except; one set of global handlers in main.py
       maps each exception type to its HTTP status and response body.
How:   Each exception carries a client-safe message and an optional context
       dict. Context is logged server-side and never returned to the client.

Exception Hierarchy:
    EmployeesAPIError (base)
    ├── NotFoundError     → 404 {"error": "Employee not found"}
    ├── NoResultsError    → 404 {"message": "No employees found for this series"}
    └── DatabaseError     → 500 {"error": "Internal Server Error"}
"""

from typing import Any, Dict, Optional


class EmployeesAPIError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(EmployeesAPIError):
    """
    Raised when no row matches the requested id.

    HTTP:    404 Not Found
    When:    GET, PUT or DELETE on /employees/{id} for an id with no row.

    The message is fixed so clients can match on it; the id goes to context.
    """

    def __init__(
        self,
        resource: str = "Employee",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)


class NoResultsError(EmployeesAPIError):
    """
    Raised when a search legitimately ran but matched nothing.

    HTTP:    404 Not Found, reported under a "message" key rather than "error".
    When:    GET /employees/by-series/{title} with no associated employees.
    """

    def __init__(
        self,
        message: str = "No employees found for this series",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(EmployeesAPIError):
    """
    Raised when a statement fails in the driver or the database.

    HTTP:    500 Internal Server Error
    When:    Connection lost, constraint violation, bad SQL, pool exhausted.

    Security Note:
        The response body is always the generic "Internal Server Error".
        Constraint names and statement text stay in the server log.
    """

    def __init__(
        self,
        message: str = "Internal Server Error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
