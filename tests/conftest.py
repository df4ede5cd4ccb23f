import os

os.environ.setdefault("CENSUS_SESSION_SECRET", "test-session-secret-0123456789abcdef")
os.environ.setdefault("CENSUS_DB_PATH", ":memory:")
os.environ.setdefault("CENSUS_API_BASE_URL", "http://census.test")

import aiosqlite  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from census_admin.database import DDL_STATEMENTS  # noqa: E402
from census_admin.dependencies import get_census_api, get_import_registry  # noqa: E402
from census_admin.imports.session import ImportSessionRegistry  # noqa: E402
from census_admin.main import app  # noqa: E402
from tests.fakes import FakeCensusApi  # noqa: E402


@pytest.fixture
def fake_api() -> FakeCensusApi:
    return FakeCensusApi()


@pytest.fixture
def registry() -> ImportSessionRegistry:
    return ImportSessionRegistry()


@pytest.fixture
async def db():
    conn = await aiosqlite.connect(":memory:")
    conn.row_factory = aiosqlite.Row
    for ddl in DDL_STATEMENTS:
        await conn.execute(ddl)
    await conn.commit()
    yield conn
    await conn.close()


@pytest.fixture
def client(fake_api, registry):
    app.dependency_overrides[get_census_api] = lambda: fake_api
    app.dependency_overrides[get_import_registry] = lambda: registry
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client) -> dict[str, str]:
    response = client.post(
        "/api/auth/login", json={"email": "admin@census.test", "password": "secret123"}
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['accessToken']}"}
