"""
Employees API — Pydantic Request/Response Schemas
===================================================

What:  Pydantic models defining the API contract for /employees.
Why:   Required vs optional fields are enforced at the request boundary,
       before any SQL runs. FastAPI also builds /api-docs from these models.
How:   FastAPI validates request bodies against the *Create/*Replace models;
       validation failures are translated to 400 responses in main.py.

Create vs Replace:
    EmployeeCreate requires first_name, last_name and position to be present
    and truthy. EmployeeReplace requires nothing: PUT is a full-record replace
    and every field left out of the body is written as NULL.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Mutable columns, in the order the INSERT and UPDATE bind them
EMPLOYEE_COLUMNS = ("first_name", "last_name", "position", "department_id", "car_id")

# Fields whose absence on create yields "Missing required fields"
REQUIRED_CREATE_FIELDS = ("first_name", "last_name", "position")


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What the client sends
# ══════════════════════════════════════════════════════════════════════════


class EmployeeCreate(BaseModel):
    """
    What:  Body of POST /employees.
    Who:   Validated by FastAPI before create_employee() is called.

    Presence rules:
        - first_name, last_name, position: required and truthy. Absent,
          null, "", 0 and false are all rejected. Other JSON scalars are
          accepted and stored as text (5 → "5"); there is no type or
          length rule beyond that.
        - department_id, car_id: optional foreign keys, default null.
    """
    first_name: str = Field(min_length=1, description="Employee first name")
    last_name: str = Field(min_length=1, description="Employee last name")
    position: str = Field(min_length=1, description="Job title")
    department_id: Optional[int] = Field(default=None, description="Departments.id reference")
    car_id: Optional[int] = Field(default=None, description="Cars.id reference")

    @field_validator(*REQUIRED_CREATE_FIELDS, mode="before")
    @classmethod
    def require_present(cls, v: Any) -> Any:
        """Presence is a truthiness check; truthy numbers and booleans become text."""
        if not v:
            raise ValueError("field is required")
        if isinstance(v, bool):
            return "true"
        if isinstance(v, (int, float)):
            return str(v)
        return v

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "first_name": "Ann",
                "last_name": "Lee",
                "position": "Engineer",
                "department_id": None,
                "car_id": None,
            }
        }
    )


class EmployeeReplace(BaseModel):
    """
    What:  Body of PUT /employees/{id}.

    Every field is optional and defaults to null. The UPDATE statement
    overwrites all five columns, so an omitted field clears the stored value.
    """
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    position: Optional[str] = None
    department_id: Optional[int] = None
    car_id: Optional[int] = None


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns
# ══════════════════════════════════════════════════════════════════════════


class EmployeeResponse(BaseModel):
    """
    What:  One row of the employees table.
    Who:   Returned by every /employees endpoint except DELETE.

    Why extra="allow":
        Rows come from SELECT * / RETURNING *. If the externally owned table
        carries more columns than these six, they are passed through rather
        than silently dropped.
    """
    id: int = Field(description="Server-assigned identifier")
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    position: Optional[str] = None
    department_id: Optional[int] = None
    car_id: Optional[int] = None

    model_config = ConfigDict(extra="allow", from_attributes=True)


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models — documented in /api-docs
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """Body of every 400, 404 (by id) and 500 response."""
    error: str = Field(description="Human-readable error description")


class MessageResponse(BaseModel):
    """Body of the 404 returned by the series search."""
    message: str


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /health for container and load balancer probes.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
