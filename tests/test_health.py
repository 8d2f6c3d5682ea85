"""
Health check tests: fake database for both outcomes, plus a real SQLite ping.
"""

from fastapi.testclient import TestClient

from core.database import Database
from main import create_app


def test_healthcheck_ok(client: TestClient, fake_database) -> None:
    r = client.get("/healthcheck")
    assert r.status_code == 200
    assert r.json() == {
        "status": "healthy",
        "database": "connected",
        "service": "stanford-uni-students-api",
    }
    assert fake_database.pings == 1


def test_healthcheck_database_down(client: TestClient, fake_database) -> None:
    fake_database.reachable = False
    r = client.get("/healthcheck")
    assert r.status_code == 503
    data = r.json()
    assert data["status"] == "unhealthy"
    assert data["database"] == "disconnected"
    assert data["service"] == "stanford-uni-students-api"


def test_healthcheck_real_sqlite(settings, logger) -> None:
    with TestClient(create_app(settings, logger=logger)) as client:
        r = client.get("/healthcheck")
    assert r.status_code == 200
    assert r.json()["database"] == "connected"


def test_healthcheck_unreachable_store(settings, logger, tmp_path) -> None:
    missing = tmp_path / "no-such-dir" / "students.db"
    database = Database(f"sqlite:///{missing}", logger)
    client = TestClient(create_app(settings, database=database, logger=logger))
    r = client.get("/healthcheck")
    assert r.status_code == 503
    assert r.json()["status"] == "unhealthy"


def test_healthcheck_low_latency(client: TestClient) -> None:
    """
    Smoke check: health should respond quickly.
    Real load: run locust/k6 against /healthcheck and /api/v1/students.
    """
    import time

    start = time.perf_counter()
    r = client.get("/healthcheck")
    elapsed = time.perf_counter() - start
    assert r.status_code == 200
    assert elapsed < 1.0, "Health check should complete under 1s locally"
