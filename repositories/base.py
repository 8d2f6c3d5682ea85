"""Abstract student repository."""

from abc import ABC, abstractmethod

from models.schemas import Student, StudentPayload


class StudentRepository(ABC):
    """
    CRUD capability over student records.
    Lookups by id raise NotFoundError when no row matches; store failures raise StoreError.
    """

    @abstractmethod
    def create(self, payload: StudentPayload) -> Student:
        """Insert a student; the store assigns id, created_at and updated_at."""

    @abstractmethod
    def get_all(self) -> list[Student]:
        """Return every student ordered by id. Empty store yields an empty list."""

    @abstractmethod
    def get_by_id(self, student_id: int) -> Student:
        ...

    @abstractmethod
    def update(self, student_id: int, payload: StudentPayload) -> Student:
        """Replace all mutable fields and refresh updated_at in one write."""

    @abstractmethod
    def delete(self, student_id: int) -> None:
        ...
