# tests/conftest.py

from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from task_service.core.database import build_engine, get_db, init_db
from task_service.core.task_store import TaskStore
from task_service.main import app


@pytest.fixture()
def engine(tmp_path: Path) -> Generator[Engine, None, None]:
    """Fresh file-backed SQLite database with the tasks table created."""
    db_engine = build_engine(f"sqlite:///{tmp_path / 'tasks.db'}")
    assert init_db(bind=db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory: sessionmaker) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def store(db: Session) -> TaskStore:
    return TaskStore(db)


@pytest.fixture()
def client(session_factory: sessionmaker) -> Generator[TestClient, None, None]:
    """
    TestClient whose requests each get a session on the per-test database.

    The client is not entered as a context manager, so the startup hook that
    bootstraps the configured DATABASE_URL never runs.
    """

    def override_get_db() -> Generator[Session, None, None]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
