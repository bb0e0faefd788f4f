import pytest
from fastapi.testclient import TestClient

from filmorate_api.app.core.config import Settings
from filmorate_api.app.core.db import init_db
from filmorate_api.app.main import create_app
from filmorate_api.app.storage import BACKENDS
from filmorate_api.app.storage.memory import build_memory_storages
from filmorate_api.app.storage.sqlite import build_sqlite_storages


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(params=BACKENDS)
def storages(request, tmp_path):
    if request.param == "memory":
        return build_memory_storages()
    db_path = str(tmp_path / "filmorate.db")
    init_db(db_path)
    return build_sqlite_storages(db_path)


@pytest.fixture(params=BACKENDS)
def client(request, tmp_path):
    settings = Settings(
        storage_backend=request.param,
        database_url=str(tmp_path / "api.db"),
        log_level="WARNING",
        log_file="",
        api_prefix="",
    )
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client
