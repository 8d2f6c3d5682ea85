"""
Settings parsing and logging configuration.
"""

import json
import logging

from core.config import Settings
from main import create_app
from utils.logging import configure_logging


def test_database_url_normalized() -> None:
    s = Settings(DATABASE_URL="postgres://user:pw@db:5432/stanford_students?sslmode=disable")
    assert s.DATABASE_URL == "postgresql+psycopg2://user:pw@db:5432/stanford_students?sslmode=disable"
    assert not s.is_sqlite
    assert Settings(DATABASE_URL="sqlite://").is_sqlite


def test_blank_log_file_means_stdout() -> None:
    assert Settings(LOG_FILE="  ").LOG_FILE is None


def test_production_flag() -> None:
    assert Settings(ENVIRONMENT="production").is_production
    assert not Settings(ENVIRONMENT="development").is_production


def test_json_logs_to_file(tmp_path) -> None:
    log_file = tmp_path / "api.log"
    settings = Settings(LOG_FILE=str(log_file), LOG_JSON=True, LOG_LEVEL="debug")
    logger = configure_logging(settings, name="students-api-log-test")
    logger.info("student_created", extra={"id": 7})
    for handler in logger.handlers:
        handler.flush()

    record = json.loads(log_file.read_text(encoding="utf-8").strip().splitlines()[-1])
    assert record["message"] == "student_created"
    assert record["level"] == "INFO"
    assert record["id"] == 7


def test_unknown_log_level_falls_back_to_info() -> None:
    settings = Settings(LOG_LEVEL="loud", LOG_JSON=False, LOG_FILE=None)
    logger = configure_logging(settings, name="students-api-level-test")
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    # Same base name, separate logger; the first keeps its single handler
    other = configure_logging(settings, name="students-api-level-test")
    assert other is not logger
    assert len(logger.handlers) == 1
    assert len(other.handlers) == 1


def test_apps_keep_their_own_log_sinks(tmp_path, fake_database) -> None:
    first_log = tmp_path / "a.log"
    second_log = tmp_path / "b.log"
    first = create_app(
        Settings(LOG_FILE=str(first_log), LOG_LEVEL="info", LOG_JSON=False), database=fake_database
    )
    second = create_app(
        Settings(LOG_FILE=str(second_log), LOG_LEVEL="error", LOG_JSON=True), database=fake_database
    )
    assert first.state.logger is not second.state.logger

    first.state.logger.warning("from_first_app")
    second.state.logger.error("from_second_app")
    second.state.logger.warning("below_second_level")
    for app in (first, second):
        for handler in app.state.logger.handlers:
            handler.flush()

    first_text = first_log.read_text(encoding="utf-8")
    second_text = second_log.read_text(encoding="utf-8")
    assert "from_first_app" in first_text
    assert "from_second_app" not in first_text
    assert "from_second_app" in second_text
    assert "from_first_app" not in second_text
    assert "below_second_level" not in second_text
    assert json.loads(second_text.strip().splitlines()[-1])["message"] == "from_second_app"
    # The first app's level is untouched by the second app's configuration
    assert first.state.logger.level == logging.INFO
