"""
Student CRUD endpoints. Handlers are sync; Starlette runs them in its threadpool
so blocking database I/O never stalls the event loop.
"""

import logging

from fastapi import APIRouter, Response, status

from core.dependencies import LoggerDep, StudentPKDep, StudentRepositoryDep
from core.exceptions import NotFoundError, StoreError
from models.schemas import ErrorResponse, Student, StudentPayload

router = APIRouter(prefix="/api/v1/students", tags=["students"])

_BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Invalid request body or student ID"}}
_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Student not found"}}
_SERVER_ERROR = {500: {"model": ErrorResponse, "description": "Database failure"}}


def _store_failed(logger: logging.Logger, operation: str, exc: StoreError, message: str, **fields) -> StoreError:
    """Log the underlying failure and return a caller-safe error."""
    cause = exc.__cause__ or exc
    logger.error(
        "student_store_error",
        extra={"operation": operation, "error": str(cause), **fields},
    )
    return StoreError(message)


def _not_found(logger: logging.Logger, operation: str, student_pk: int) -> None:
    logger.warning("student_not_found", extra={"operation": operation, "id": student_pk})


@router.post(
    "",
    response_model=Student,
    status_code=status.HTTP_201_CREATED,
    summary="Create a student",
    responses={**_BAD_REQUEST, **_SERVER_ERROR},
)
def create_student(payload: StudentPayload, repo: StudentRepositoryDep, logger: LoggerDep) -> Student:
    """
    Register a student. The store assigns id, created_at and updated_at.

    Example request body::

        {
            "first_name": "John",
            "last_name": "Doe",
            "email": "john.doe@stanford.edu",
            "student_id": "CS001",
            "major": "Computer Science",
            "year": 3
        }
    """
    try:
        student = repo.create(payload)
    except StoreError as exc:
        raise _store_failed(logger, "create", exc, "Failed to create student") from exc

    logger.info("student_created", extra={"id": student.id})
    return student


@router.get(
    "",
    response_model=list[Student],
    summary="List all students",
    responses={**_SERVER_ERROR},
)
def list_students(repo: StudentRepositoryDep, logger: LoggerDep) -> list[Student]:
    """Return every student ordered by id."""
    try:
        students = repo.get_all()
    except StoreError as exc:
        raise _store_failed(logger, "list", exc, "Failed to retrieve students") from exc

    logger.info("students_listed", extra={"count": len(students)})
    return students


@router.get(
    "/{id}",
    response_model=Student,
    summary="Get a student",
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_SERVER_ERROR},
)
def get_student(student_pk: StudentPKDep, repo: StudentRepositoryDep, logger: LoggerDep) -> Student:
    try:
        student = repo.get_by_id(student_pk)
    except NotFoundError:
        _not_found(logger, "get", student_pk)
        raise
    except StoreError as exc:
        raise _store_failed(logger, "get", exc, "Failed to retrieve student", id=student_pk) from exc

    logger.info("student_retrieved", extra={"id": student_pk})
    return student


@router.put(
    "/{id}",
    response_model=Student,
    summary="Replace a student's fields",
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_SERVER_ERROR},
)
def update_student(
    student_pk: StudentPKDep,
    payload: StudentPayload,
    repo: StudentRepositoryDep,
    logger: LoggerDep,
) -> Student:
    """Rewrite every mutable field. id and created_at never change."""
    try:
        student = repo.update(student_pk, payload)
    except NotFoundError:
        _not_found(logger, "update", student_pk)
        raise
    except StoreError as exc:
        raise _store_failed(logger, "update", exc, "Failed to update student", id=student_pk) from exc

    logger.info("student_updated", extra={"id": student_pk})
    return student


@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a student",
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_SERVER_ERROR},
)
def delete_student(student_pk: StudentPKDep, repo: StudentRepositoryDep, logger: LoggerDep) -> Response:
    try:
        repo.delete(student_pk)
    except NotFoundError:
        _not_found(logger, "delete", student_pk)
        raise
    except StoreError as exc:
        raise _store_failed(logger, "delete", exc, "Failed to delete student", id=student_pk) from exc

    logger.info("student_deleted", extra={"id": student_pk})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
