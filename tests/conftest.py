"""
Pytest fixtures: settings, in-memory repository, fake database, test clients.
"""

import logging

import pytest
from fastapi.testclient import TestClient

from core.config import Settings
from core.database import Database
from core.exceptions import ConnectivityError
from main import create_app
from repositories import InMemoryStudentRepository, SqlStudentRepository
from utils.logging import configure_logging

JOHN_DOE = {
    "first_name": "John",
    "last_name": "Doe",
    "email": "john.doe@stanford.edu",
    "student_id": "CS001",
    "major": "Computer Science",
    "year": 3,
}


class FakeDatabase:
    """Stands in for Database in handler tests; reachability is toggled per test."""

    def __init__(self, reachable: bool = True) -> None:
        self.reachable = reachable
        self.pings = 0

    def ping(self) -> None:
        self.pings += 1
        if not self.reachable:
            raise ConnectivityError()

    def create_schema(self) -> None:
        pass

    def dispose(self) -> None:
        pass


@pytest.fixture
def settings() -> Settings:
    return Settings(
        APP_NAME="stanford-uni-students-api",
        DATABASE_URL="sqlite://",
        AUTO_MIGRATE=False,
        LOG_LEVEL="CRITICAL",
        LOG_JSON=False,
        LOG_FILE=None,
    )


@pytest.fixture
def logger(settings: Settings) -> logging.Logger:
    return configure_logging(settings, name="students-api-tests")


@pytest.fixture
def repository() -> InMemoryStudentRepository:
    return InMemoryStudentRepository()


@pytest.fixture
def fake_database() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def client(settings, logger, repository, fake_database) -> TestClient:
    """Test client backed by the in-memory repository and a fake database."""
    app = create_app(settings, database=fake_database, repository=repository, logger=logger)
    return TestClient(app)


@pytest.fixture
def sqlite_database(logger: logging.Logger) -> Database:
    database = Database("sqlite://", logger)
    database.create_schema()
    yield database
    database.dispose()


@pytest.fixture
def sql_repository(sqlite_database: Database, logger: logging.Logger) -> SqlStudentRepository:
    return SqlStudentRepository(sqlite_database, logger)


@pytest.fixture
def student_payload() -> dict:
    return dict(JOHN_DOE)
