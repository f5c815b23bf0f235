"""
Employees API — Employee Service (request-to-SQL mapping)
===========================================================

What:  One method per endpoint, each issuing exactly one parameterized
       SQL statement against the employees table.
Why:   Keeps SQL and row mapping out of the route handlers, and lets the
       statements be tested without HTTP.
How:   Borrows a connection with `async with db.connection()`, executes a
       `text()` statement with bound parameters, and turns the result into
       plain dicts. "No row" outcomes become NotFoundError / NoResultsError;
       driver failures arrive as DatabaseError from Database.connection().
Who:   Called by routes/employees.py.

Statement inventory:
    list_employees   SELECT * FROM employees
    get_employee     SELECT * FROM employees WHERE id = :id
    create_employee  INSERT ... RETURNING *
    replace_employee UPDATE ... SET <all five> ... WHERE id = :id RETURNING *
    delete_employee  DELETE FROM employees WHERE id = :id
    list_by_series   SELECT e.* ... JOIN employee_series ... JOIN series

Design Decision:
    Raw SQL rather than ORM models. The table is owned by another system,
    so there is no model to keep in sync, and RETURNING * hands back whatever
    columns that system defines.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy import text

from employees_api.database import Database
from employees_api.exceptions import NoResultsError, NotFoundError
from employees_api.schemas.employee import EmployeeCreate, EmployeeReplace

logger = logging.getLogger(__name__)


SELECT_ALL = text("SELECT * FROM employees")

SELECT_BY_ID = text("SELECT * FROM employees WHERE id = :id")

INSERT_EMPLOYEE = text(
    "INSERT INTO employees (first_name, last_name, position, department_id, car_id) "
    "VALUES (:first_name, :last_name, :position, :department_id, :car_id) "
    "RETURNING *"
)

UPDATE_EMPLOYEE = text(
    "UPDATE employees "
    "SET first_name = :first_name, last_name = :last_name, position = :position, "
    "department_id = :department_id, car_id = :car_id "
    "WHERE id = :id "
    "RETURNING *"
)

DELETE_EMPLOYEE = text("DELETE FROM employees WHERE id = :id")

# employees ⟷ series is many-to-many through employee_series
SELECT_BY_SERIES = text(
    "SELECT e.* FROM employees e "
    "JOIN employee_series es ON es.employee_id = e.id "
    "JOIN series s ON s.id = es.series_id "
    "WHERE s.title = :title "
    "ORDER BY e.id"
)


class EmployeeService:
    """
    Stateless mapping from API operations to SQL statements.

    Every method takes the process-wide Database and holds a connection only
    for the duration of its single statement.
    """

    async def list_employees(self, db: Database) -> List[Dict[str, Any]]:
        """All rows, unfiltered and unpaginated. May be empty."""
        async with db.connection() as conn:
            result = await conn.execute(SELECT_ALL)
            return [dict(row) for row in result.mappings().all()]

    async def get_employee(self, db: Database, employee_id: int) -> Dict[str, Any]:
        """
        Fetch one row by primary key.

        Raises:
            NotFoundError: No row has this id (→ 404)
        """
        async with db.connection() as conn:
            result = await conn.execute(SELECT_BY_ID, {"id": employee_id})
            row = result.mappings().first()

        if row is None:
            raise NotFoundError(resource_id=employee_id)
        return dict(row)

    async def create_employee(
        self, db: Database, payload: EmployeeCreate
    ) -> Dict[str, Any]:
        """
        Insert a row and return it with the id the database assigned.

        Presence of first_name/last_name/position was enforced by the
        EmployeeCreate schema before this point.
        """
        async with db.connection() as conn:
            result = await conn.execute(INSERT_EMPLOYEE, payload.model_dump())
            row = dict(result.mappings().one())

        logger.info("Employee %s created", row.get("id"))
        return row

    async def replace_employee(
        self, db: Database, employee_id: int, payload: EmployeeReplace
    ) -> Dict[str, Any]:
        """
        Overwrite all five mutable columns of one row.

        Fields missing from the payload are bound as None and written as
        NULL. If the table forbids NULL in a column, the database rejects the
        statement and the caller sees DatabaseError (→ 500).

        Raises:
            NotFoundError: No row has this id (→ 404)
        """
        params = payload.model_dump()
        params["id"] = employee_id

        async with db.connection() as conn:
            result = await conn.execute(UPDATE_EMPLOYEE, params)
            row = result.mappings().first()

        if row is None:
            raise NotFoundError(resource_id=employee_id)
        logger.info("Employee %s replaced", employee_id)
        return dict(row)

    async def delete_employee(self, db: Database, employee_id: int) -> None:
        """
        Delete one row.

        Raises:
            NotFoundError: No row was deleted (→ 404). A second delete of the
                same id therefore fails even though the first succeeded.
        """
        async with db.connection() as conn:
            result = await conn.execute(DELETE_EMPLOYEE, {"id": employee_id})
            deleted = result.rowcount

        if deleted == 0:
            raise NotFoundError(resource_id=employee_id)
        logger.info("Employee %s deleted", employee_id)

    async def list_by_series(self, db: Database, title: str) -> List[Dict[str, Any]]:
        """
        Employees associated with the series whose title matches exactly.

        Raises:
            NoResultsError: Nothing matched (→ 404 with a "message" body)
        """
        async with db.connection() as conn:
            result = await conn.execute(SELECT_BY_SERIES, {"title": title})
            rows = [dict(row) for row in result.mappings().all()]

        if not rows:
            raise NoResultsError(context={"title": title})
        return rows


# Stateless; one shared instance
employee_service = EmployeeService()
