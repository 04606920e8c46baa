import asyncio
import os
import tempfile

# Must be set before anything imports fittracker.core.config
_DB_DIR = tempfile.mkdtemp(prefix="fittracker-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["LOG_FORMAT"] = "console"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from fittracker.api.deps import get_now  # noqa: E402
from fittracker.core.database import Base, engine  # noqa: E402
from fittracker.main import app  # noqa: E402

from helpers import NOW  # noqa: E402


async def _drop_tables() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def client():
    app.dependency_overrides[get_now] = lambda: NOW
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    asyncio.run(_drop_tables())
