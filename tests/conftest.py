"""
Shared pytest fixtures: in-memory SQLite + FastAPI TestClient.
"""
import os
import tempfile

# Keep the app's own engine and upload dir away from ./data during tests
_SCRATCH = tempfile.mkdtemp(prefix="photostock-tests-")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("DATA_DIR", _SCRATCH)
os.environ.setdefault("UPLOAD_DIR", os.path.join(_SCRATCH, "uploads"))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from photostock.config import settings  # noqa: E402
from photostock.database import Base, get_db  # noqa: E402
from photostock.models import ResultModel  # noqa: E402,F401  register model
from photostock.main import app  # noqa: E402

# StaticPool ensures all connections share the same in-memory database
_ENGINE = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
_Session = sessionmaker(autocommit=False, autoflush=False, bind=_ENGINE)


@pytest.fixture(autouse=True)
def _reset_tables():
    Base.metadata.create_all(bind=_ENGINE)
    yield
    Base.metadata.drop_all(bind=_ENGINE)


@pytest.fixture()
def upload_dir(tmp_path, monkeypatch):
    path = tmp_path / "uploads"
    path.mkdir()
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(path))
    return path


@pytest.fixture()
def db():
    session = _Session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(db, upload_dir):
    def _override():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = _override
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
