"""
SQL-backed student repository.
Every operation is one parameterized statement in its own auto-committed transaction.
"""

import logging

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from core.database import Database
from core.exceptions import NotFoundError, StoreError
from models.schemas import Student, StudentPayload
from models.student import StudentRow
from repositories.base import StudentRepository

students = StudentRow.__table__

_COLUMNS = (
    students.c.id,
    students.c.first_name,
    students.c.last_name,
    students.c.email,
    students.c.student_id,
    students.c.major,
    students.c.year,
    students.c.created_at,
    students.c.updated_at,
)


def _to_student(row) -> Student:
    return Student(**row._mapping)


class SqlStudentRepository(StudentRepository):
    """Student CRUD against a relational store through SQLAlchemy Core."""

    def __init__(self, database: Database, logger: logging.Logger) -> None:
        self.database = database
        self.logger = logger

    def create(self, payload: StudentPayload) -> Student:
        stmt = (
            insert(students)
            .values(**payload.model_dump(), created_at=func.now(), updated_at=func.now())
            .returning(*_COLUMNS)
        )
        try:
            with self.database.engine.begin() as conn:
                row = conn.execute(stmt).one()
        except SQLAlchemyError as exc:
            self.logger.debug("insert_failed", extra={"error": str(exc)})
            raise StoreError("Failed to create student") from exc
        return _to_student(row)

    def get_all(self) -> list[Student]:
        stmt = select(*_COLUMNS).order_by(students.c.id)
        try:
            with self.database.engine.connect() as conn:
                rows = conn.execute(stmt).all()
        except SQLAlchemyError as exc:
            raise StoreError("Failed to retrieve students") from exc
        return [_to_student(row) for row in rows]

    def get_by_id(self, student_id: int) -> Student:
        stmt = select(*_COLUMNS).where(students.c.id == student_id)
        try:
            with self.database.engine.connect() as conn:
                row = conn.execute(stmt).one_or_none()
        except SQLAlchemyError as exc:
            raise StoreError("Failed to retrieve student") from exc
        if row is None:
            raise NotFoundError()
        return _to_student(row)

    def update(self, student_id: int, payload: StudentPayload) -> Student:
        stmt = (
            update(students)
            .where(students.c.id == student_id)
            .values(**payload.model_dump(), updated_at=func.now())
            .returning(*_COLUMNS)
        )
        try:
            with self.database.engine.begin() as conn:
                row = conn.execute(stmt).one_or_none()
        except SQLAlchemyError as exc:
            self.logger.debug("update_failed", extra={"id": student_id, "error": str(exc)})
            raise StoreError("Failed to update student") from exc
        if row is None:
            raise NotFoundError()
        return _to_student(row)

    def delete(self, student_id: int) -> None:
        # Affected row count decides not-found; no read before the write
        stmt = delete(students).where(students.c.id == student_id)
        try:
            with self.database.engine.begin() as conn:
                affected = conn.execute(stmt).rowcount
        except SQLAlchemyError as exc:
            raise StoreError("Failed to delete student") from exc
        if affected == 0:
            raise NotFoundError()
