"""
Employees API — Employee Service Unit Tests
=============================================

What:  Tests for EmployeeService without HTTP.
How:   Mocked connections for the statement/bind checks and error mapping;
       the SQLite-backed `database` fixture for full round trips.

What we test:
    ✅ Each operation sends its statement with the expected bind parameters
    ✅ "No row" outcomes raise NotFoundError / NoResultsError
    ✅ DatabaseError from the pool propagates untouched
    ✅ Replace binds omitted fields as None
"""

from unittest.mock import MagicMock

import pytest

from employees_api.exceptions import DatabaseError, NoResultsError, NotFoundError
from employees_api.schemas.employee import EmployeeCreate, EmployeeReplace
from employees_api.services.employee_service import (
    DELETE_EMPLOYEE,
    INSERT_EMPLOYEE,
    SELECT_BY_ID,
    UPDATE_EMPLOYEE,
    EmployeeService,
)


def _result_with_rows(rows):
    """A mock CursorResult whose .mappings() yields the given dicts."""
    result = MagicMock()
    result.mappings.return_value.all.return_value = rows
    result.mappings.return_value.first.return_value = rows[0] if rows else None
    if rows:
        result.mappings.return_value.one.return_value = rows[0]
    return result


class TestEmployeeServiceWithMocks:
    """Statement selection, binds and error mapping."""

    def setup_method(self):
        self.service = EmployeeService()

    @pytest.mark.asyncio
    async def test_get_binds_id(self, mock_database):
        row = {"id": 7, "first_name": "Ann"}
        mock_database.conn.execute.return_value = _result_with_rows([row])

        result = await self.service.get_employee(mock_database, 7)

        assert result == row
        mock_database.conn.execute.assert_awaited_once_with(SELECT_BY_ID, {"id": 7})

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, mock_database):
        mock_database.conn.execute.return_value = _result_with_rows([])

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_employee(mock_database, 7)

        assert exc_info.value.message == "Employee not found"
        assert exc_info.value.context["resource_id"] == 7

    @pytest.mark.asyncio
    async def test_create_binds_all_five_columns(self, mock_database):
        mock_database.conn.execute.return_value = _result_with_rows([{"id": 1}])
        payload = EmployeeCreate(first_name="Ann", last_name="Lee", position="Engineer")

        await self.service.create_employee(mock_database, payload)

        mock_database.conn.execute.assert_awaited_once_with(
            INSERT_EMPLOYEE,
            {
                "first_name": "Ann",
                "last_name": "Lee",
                "position": "Engineer",
                "department_id": None,
                "car_id": None,
            },
        )

    @pytest.mark.asyncio
    async def test_replace_binds_omitted_fields_as_none(self, mock_database):
        mock_database.conn.execute.return_value = _result_with_rows([{"id": 3}])

        await self.service.replace_employee(
            mock_database, 3, EmployeeReplace(first_name="Ann2")
        )

        mock_database.conn.execute.assert_awaited_once_with(
            UPDATE_EMPLOYEE,
            {
                "first_name": "Ann2",
                "last_name": None,
                "position": None,
                "department_id": None,
                "car_id": None,
                "id": 3,
            },
        )

    @pytest.mark.asyncio
    async def test_replace_missing_raises_not_found(self, mock_database):
        mock_database.conn.execute.return_value = _result_with_rows([])

        with pytest.raises(NotFoundError):
            await self.service.replace_employee(mock_database, 3, EmployeeReplace())

    @pytest.mark.asyncio
    async def test_delete_zero_rows_raises_not_found(self, mock_database):
        result = MagicMock()
        result.rowcount = 0
        mock_database.conn.execute.return_value = result

        with pytest.raises(NotFoundError):
            await self.service.delete_employee(mock_database, 5)

        mock_database.conn.execute.assert_awaited_once_with(DELETE_EMPLOYEE, {"id": 5})

    @pytest.mark.asyncio
    async def test_series_empty_raises_no_results(self, mock_database):
        mock_database.conn.execute.return_value = _result_with_rows([])

        with pytest.raises(NoResultsError) as exc_info:
            await self.service.list_by_series(mock_database, "Nothing")

        assert exc_info.value.message == "No employees found for this series"

    @pytest.mark.asyncio
    async def test_database_error_propagates(self, mock_database):
        mock_database.conn.execute.side_effect = DatabaseError(context={"error_type": "X"})

        with pytest.raises(DatabaseError):
            await self.service.list_employees(mock_database)


class TestEmployeeServiceWithSQLite:
    """Full round trips through the real statements."""

    def setup_method(self):
        self.service = EmployeeService()

    @pytest.mark.asyncio
    async def test_create_then_list(self, database):
        created = await self.service.create_employee(
            database,
            EmployeeCreate(first_name="Ann", last_name="Lee", position="Engineer", department_id=1),
        )

        rows = await self.service.list_employees(database)

        assert rows == [created]
        assert created["department_id"] == 1

    @pytest.mark.asyncio
    async def test_replace_then_get(self, database):
        created = await self.service.create_employee(
            database,
            EmployeeCreate(first_name="Ann", last_name="Lee", position="Engineer", car_id=1),
        )

        await self.service.replace_employee(
            database,
            created["id"],
            EmployeeReplace(first_name="Ann", last_name="Lee", position="Director"),
        )
        fetched = await self.service.get_employee(database, created["id"])

        assert fetched["position"] == "Director"
        assert fetched["car_id"] is None

    @pytest.mark.asyncio
    async def test_delete_then_get_raises(self, database):
        created = await self.service.create_employee(
            database,
            EmployeeCreate(first_name="Ann", last_name="Lee", position="Engineer"),
        )

        await self.service.delete_employee(database, created["id"])

        with pytest.raises(NotFoundError):
            await self.service.get_employee(database, created["id"])

    @pytest.mark.asyncio
    async def test_missing_table_raises_database_error(self, bare_database):
        with pytest.raises(DatabaseError) as exc_info:
            await self.service.list_employees(bare_database)

        assert exc_info.value.context["error_type"] == "OperationalError"
