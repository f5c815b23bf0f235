"""
Employees API — Database Connection Pool
==========================================

What:  A process-scoped wrapper around an async SQLAlchemy engine.
Why:   Handlers run raw parameterized SQL; they need a pooled connection for
       exactly one statement and nothing else.
How:   Database.connection() is an async context manager around
       engine.begin(): borrow a connection, open a transaction, commit on
       success, roll back on error, always return the connection to the pool.
Who:   Built by the app lifespan (or handed to create_app() in tests) and
       injected into routes via get_database().
When:  One instance per process; one connection() scope per statement.

Connection Pooling Strategy:
    pool_size:      Persistent connections for normal load
    max_overflow:   Temporary connections for traffic spikes
    pool_pre_ping:  Validates connections before use (catches stale connections)
    pool_recycle:   Recycles connections hourly

    SQLite URLs (used by the test suite) get SQLAlchemy's default pool for the
    dialect, which does not accept the sizing arguments.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine

from employees_api.config import Settings, settings as default_settings
from employees_api.exceptions import DatabaseError

logger = logging.getLogger(__name__)


class Database:
    """
    Owns the connection pool for the lifetime of the process.

    Usage:
        db = Database("postgresql+asyncpg://user:pw@localhost/hr")
        async with db.connection() as conn:
            result = await conn.execute(text("SELECT * FROM employees"))
        await db.dispose()
    """

    def __init__(
        self,
        url: str,
        pool_size: int = 10,
        max_overflow: int = 5,
        pool_pre_ping: bool = True,
        echo: bool = False,
    ):
        engine_kwargs = {"echo": echo}
        if not url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_pre_ping=pool_pre_ping,
                pool_recycle=3600,
            )
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "Database":
        """Build a pool from application settings."""
        config = config or default_settings
        return cls(
            config.sqlalchemy_url,
            pool_size=config.db_pool_size,
            max_overflow=config.db_max_overflow,
            pool_pre_ping=config.db_pool_pre_ping,
            echo=config.log_level == "DEBUG",
        )

    @asynccontextmanager
    async def connection(self) -> AsyncGenerator[AsyncConnection, None]:
        """
        Borrow one pooled connection inside a transaction.

        How it works:
            1. engine.begin() checks out a connection and starts a transaction
            2. The caller executes its single statement
            3. On normal exit: COMMIT; on exception: ROLLBACK
            4. Always: the connection goes back to the pool

        Raises:
            DatabaseError: Any SQLAlchemyError (or socket-level OSError) raised
                while connecting, executing or committing. The cause is
                chained as __cause__.
        """
        try:
            async with self.engine.begin() as conn:
                yield conn
        except (SQLAlchemyError, OSError) as e:
            # asyncpg raises bare OSError when the server refuses the connection.
            # The DatabaseError handler in main.py logs at ERROR with the traceback.
            logger.debug("Database error (%s): %s", type(e).__name__, e)
            raise DatabaseError(context={"error_type": type(e).__name__}) from e

    async def ping(self) -> bool:
        """Run SELECT 1; True if the database answered."""
        try:
            async with self.connection() as conn:
                await conn.execute(text("SELECT 1"))
        except DatabaseError:
            return False
        return True

    async def dispose(self) -> None:
        """Close every pooled connection. Called on application shutdown."""
        await self.engine.dispose()


# ── Dependency ────────────────────────────────────────────────────────────
def get_database(request: Request) -> Database:
    """
    FastAPI dependency returning the process-wide pool.

    Example usage in a route:
        @router.get("/employees")
        async def list_employees(db: Database = Depends(get_database)):
            return await employee_service.list_employees(db)
    """
    return request.app.state.database
