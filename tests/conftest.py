import os

# Settings are read at import time: point the app at SQLite before importing it.
os.environ.setdefault("DB_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker as _sessionmaker
from sqlalchemy.pool import StaticPool

# -----------------------------------------------------------------------------
# IMPORTANT: ensure all ORM tables are registered in metadata before create_all
# (FK targets work_lines / members must exist for assignments / day_site_status)
# -----------------------------------------------------------------------------
import app.models.member  # noqa: F401
import app.models.work_line  # noqa: F401
import app.models.assignment  # noqa: F401
import app.models.day_site_status  # noqa: F401

from app.core.db import get_db, make_engine
from app.core.rbac import ADMIN, VIEWER
from app.main import app
from app.models.base import Base


@pytest.fixture()
def engine():
    """
    Fresh in-memory SQLite database per test.
    StaticPool keeps one connection, so every session (and the TestClient
    thread) sees the same database.
    """
    eng = make_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(eng)
    try:
        yield eng
    finally:
        eng.dispose()


@pytest.fixture()
def db(engine):
    Session = _sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        future=True,
    )
    session = Session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(engine):
    Session = _sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)

    def _override_get_db():
        s = Session()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = _override_get_db
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture()
def admin_headers() -> dict[str, str]:
    return {"X-Role": ADMIN}


@pytest.fixture()
def viewer_headers() -> dict[str, str]:
    return {"X-Role": VIEWER}
