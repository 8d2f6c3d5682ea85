"""
In-memory student repository. Used by handler tests and local experiments;
state lives for the lifetime of the instance only.
"""

import itertools
import threading
from datetime import datetime, timezone

from core.exceptions import NotFoundError
from models.schemas import Student, StudentPayload
from repositories.base import StudentRepository


class InMemoryStudentRepository(StudentRepository):
    """Dict-backed repository with the same contract as the SQL one. Thread-safe."""

    def __init__(self) -> None:
        self._rows: dict[int, Student] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def create(self, payload: StudentPayload) -> Student:
        now = datetime.now(timezone.utc)
        with self._lock:
            student = Student(id=next(self._ids), created_at=now, updated_at=now, **payload.model_dump())
            self._rows[student.id] = student
        return student

    def get_all(self) -> list[Student]:
        with self._lock:
            return [self._rows[key] for key in sorted(self._rows)]

    def get_by_id(self, student_id: int) -> Student:
        with self._lock:
            try:
                return self._rows[student_id]
            except KeyError:
                raise NotFoundError() from None

    def update(self, student_id: int, payload: StudentPayload) -> Student:
        with self._lock:
            current = self._rows.get(student_id)
            if current is None:
                raise NotFoundError()
            updated_at = max(datetime.now(timezone.utc), current.updated_at)
            student = current.model_copy(update={**payload.model_dump(), "updated_at": updated_at})
            self._rows[student_id] = student
        return student

    def delete(self, student_id: int) -> None:
        with self._lock:
            if self._rows.pop(student_id, None) is None:
                raise NotFoundError()
