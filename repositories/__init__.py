"""
Data access layer. Each repository maps typed student operations onto a store
and returns `Student` records; callers depend only on `StudentRepository`.
"""

from repositories.base import StudentRepository
from repositories.memory import InMemoryStudentRepository
from repositories.sql import SqlStudentRepository

__all__ = ["InMemoryStudentRepository", "SqlStudentRepository", "StudentRepository"]
