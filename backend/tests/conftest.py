"""
Employees API — Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, fresh per test):
    ├── database: Database on a throwaway SQLite file with the schema created
    ├── bare_database: Database on an empty SQLite file (every query fails)
    ├── test_client: HTTPX AsyncClient wired to an app using `database`
    ├── seed_employee: Inserts one employee through the API and returns it
    └── mock_database: Database stand-in whose connection() yields a mock

Why SQLite:
    The statements under test are plain parameterized SQL with RETURNING,
    which SQLite (3.35+) and PostgreSQL both accept. Running them for real
    catches column and bind-name mistakes that mocks would hide.
"""

import os

# Must be set before the application package is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text

from employees_api.database import Database
from employees_api.main import create_app

# Stand-in for the externally owned schema
SCHEMA = (
    "CREATE TABLE departments (id INTEGER PRIMARY KEY, name TEXT NOT NULL)",
    "CREATE TABLE cars (id INTEGER PRIMARY KEY, model TEXT NOT NULL)",
    """
    CREATE TABLE employees (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        first_name TEXT NOT NULL,
        last_name TEXT NOT NULL,
        position TEXT NOT NULL,
        department_id INTEGER REFERENCES departments(id),
        car_id INTEGER REFERENCES cars(id)
    )
    """,
    "CREATE TABLE series (id INTEGER PRIMARY KEY, title TEXT NOT NULL)",
    """
    CREATE TABLE employee_series (
        employee_id INTEGER NOT NULL REFERENCES employees(id),
        series_id INTEGER NOT NULL REFERENCES series(id),
        PRIMARY KEY (employee_id, series_id)
    )
    """,
    "INSERT INTO departments (id, name) VALUES (1, 'Production'), (2, 'Post')",
    "INSERT INTO cars (id, model) VALUES (1, 'Volvo XC90')",
)


@pytest_asyncio.fixture
async def database(tmp_path):
    """
    Provides a Database backed by a fresh SQLite file with the schema loaded.

    Usage:
        async def test_list(database):
            rows = await employee_service.list_employees(database)
    """
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'employees.db'}")
    async with db.engine.begin() as conn:
        for statement in SCHEMA:
            await conn.execute(text(statement))
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def bare_database(tmp_path):
    """A Database with no tables: every employee statement raises."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def test_client(database):
    """
    Provides an async HTTP test client for endpoint testing.

    Uses ASGITransport to route requests directly to the app; the pool is
    passed to create_app() because ASGITransport does not run the lifespan.
    """
    app = create_app(database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def seed_employee(test_client):
    """Creates Ann Lee, Engineer, in department 1, and returns the response body."""
    response = await test_client.post(
        "/employees",
        json={
            "first_name": "Ann",
            "last_name": "Lee",
            "position": "Engineer",
            "department_id": 1,
            "car_id": 1,
        },
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def mock_database():
    """
    Provides a Database stand-in for unit tests.

    `mock_database.conn` is the AsyncMock yielded by connection(); set
    `mock_database.conn.execute.return_value` (or side_effect) per test.
    """
    conn = AsyncMock()
    db = MagicMock(spec=Database)

    @asynccontextmanager
    async def connection():
        yield conn

    db.connection = connection
    db.conn = conn
    return db
