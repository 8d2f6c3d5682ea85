"""
FastAPI dependency injection: settings, logger, database, repository.
Everything is constructed once in create_app and read back from app.state,
so tests swap collaborators by passing them to create_app.
"""

import logging
import re
from typing import Annotated

from fastapi import Depends, Path, Request

from core.config import Settings
from core.database import Database
from core.exceptions import InvalidInputError
from repositories import StudentRepository


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_app_logger(request: Request) -> logging.Logger:
    return request.app.state.logger


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_student_repository(request: Request) -> StudentRepository:
    return request.app.state.student_repository


# Signed 64-bit, the widest id any supported store column can hold
MIN_STUDENT_PK = -(2**63)
MAX_STUDENT_PK = 2**63 - 1
_DECIMAL = re.compile(r"[+-]?[0-9]+")


def get_student_pk(
    request: Request,
    id: Annotated[str, Path(description="Student identifier", examples=["1"])],
) -> int:
    """
    Parse the {id} path segment as a base-10 integer in the signed 64-bit range.
    Anything else (floats, padded or out-of-range values) is rejected before the store is touched.
    """
    if _DECIMAL.fullmatch(id) is not None:
        pk = int(id)
        if MIN_STUDENT_PK <= pk <= MAX_STUDENT_PK:
            return pk
    request.app.state.logger.warning(
        "validation_failed",
        extra={"path": request.url.path, "method": request.method, "reason": "Invalid student ID"},
    )
    raise InvalidInputError("Invalid student ID")


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
LoggerDep = Annotated[logging.Logger, Depends(get_app_logger)]
DatabaseDep = Annotated[Database, Depends(get_database)]
StudentRepositoryDep = Annotated[StudentRepository, Depends(get_student_repository)]
StudentPKDep = Annotated[int, Depends(get_student_pk)]
