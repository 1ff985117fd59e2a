import os

# Keep test runs from writing server.log
os.environ.setdefault("LOG_FILE", "")

import pytest
import pytest_asyncio
from sqlalchemy.pool import StaticPool

from hr_admin.core.database import Database
from hr_admin.core.resilience import ResilientExecutor
from hr_admin.core.security import build_password_context
from hr_admin.services.employee_service import EmployeeService
from hr_admin.services.id_generator import EmployeeIdGenerator


class CountingIdGenerator(EmployeeIdGenerator):
    """SQLite has no sequences; hand out numbers from a counter instead."""

    def __init__(self, executor, start=1, **kwargs):
        super().__init__(executor, **kwargs)
        self.value = start - 1

    async def _next_value(self, session):
        self.value += 1
        return self.value


@pytest.fixture
def password_context():
    """Low-cost bcrypt context so tests stay fast"""
    return build_password_context(rounds=4)


@pytest_asyncio.fixture
async def database():
    """In-memory database shared across sessions"""
    db = Database(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await db.create_all()
    yield db
    await db.close()


@pytest.fixture
def executor(database):
    return ResilientExecutor(database, retries=2, initial_delay_ms=1)


@pytest.fixture
def service(executor, password_context):
    return EmployeeService(executor, CountingIdGenerator(executor), password_context)
