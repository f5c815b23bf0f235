"""
Employees API — Employee Route Handlers
=========================================

What:  The six /employees endpoints.
Why:   Entry point for every CRUD call against the employees table.
How:   Each handler takes the validated path/body, delegates to
       EmployeeService, and sets the success status code. Failures are
       raised as exceptions and turned into responses by the handlers
       registered in main.py, so nothing here catches errors.

Route Inventory:
    GET    /employees                    list all
    GET    /employees/by-series/{title}  employees of a series (title may contain "/")
    GET    /employees/{employee_id}      one employee
    POST   /employees                    create
    PUT    /employees/{employee_id}      full replace
    DELETE /employees/{employee_id}      delete
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status

from employees_api.database import Database, get_database
from employees_api.schemas.employee import (
    EmployeeCreate,
    EmployeeReplace,
    EmployeeResponse,
    ErrorResponse,
    MessageResponse,
)
from employees_api.services.employee_service import employee_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["Employees"])

_SERVER_ERROR = {500: {"description": "Storage error", "model": ErrorResponse}}
_NOT_FOUND = {404: {"description": "Employee not found", "model": ErrorResponse}}


@router.get(
    "",
    response_model=List[EmployeeResponse],
    responses=_SERVER_ERROR,
    summary="List all employees",
)
async def list_employees(db: Database = Depends(get_database)):
    return await employee_service.list_employees(db)


@router.get(
    "/by-series/{title:path}",
    response_model=List[EmployeeResponse],
    responses={
        404: {"description": "No employees for this series", "model": MessageResponse},
        **_SERVER_ERROR,
    },
    summary="List employees who worked on a series",
)
async def list_employees_by_series(title: str, db: Database = Depends(get_database)):
    """
    Match is on the exact series title, e.g. GET /employees/by-series/Dark.
    The title is matched as a path, so "AC/DC" works whether or not the
    slash is percent-encoded.
    An empty result is a 404, not an empty array.
    """
    return await employee_service.list_by_series(db, title)


@router.get(
    "/{employee_id}",
    response_model=EmployeeResponse,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Get an employee by id",
)
async def get_employee(employee_id: int, db: Database = Depends(get_database)):
    return await employee_service.get_employee(db, employee_id)


@router.post(
    "",
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing required fields", "model": ErrorResponse},
        **_SERVER_ERROR,
    },
    summary="Create an employee",
)
async def create_employee(
    payload: EmployeeCreate,
    db: Database = Depends(get_database),
):
    """first_name, last_name and position are required; the id is assigned by the database."""
    return await employee_service.create_employee(db, payload)


@router.put(
    "/{employee_id}",
    response_model=EmployeeResponse,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Replace an employee",
)
async def replace_employee(
    employee_id: int,
    payload: Optional[EmployeeReplace] = None,
    db: Database = Depends(get_database),
):
    """
    Full-record replace. All five fields are written; any field omitted
    from the body is stored as null. No body at all means every field is null.
    """
    return await employee_service.replace_employee(db, employee_id, payload or EmployeeReplace())


@router.delete(
    "/{employee_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Delete an employee",
)
async def delete_employee(employee_id: int, db: Database = Depends(get_database)) -> Response:
    await employee_service.delete_employee(db, employee_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
