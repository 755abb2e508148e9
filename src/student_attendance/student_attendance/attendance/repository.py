from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..classes.model import SchoolClass
from ..students.model import Student
from .model import AttendanceRecord, NewAttendance


class AttendanceRepository(Protocol):
    """Storage interface for attendance records.

    Storage is the only arbiter of the (student, class, subject, calendar day)
    key: ``create`` and ``update`` raise DuplicateRecordError when it is taken.
    """

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def find(
        self,
        *,
        class_id: Optional[int] = None,
        student_id: Optional[int] = None,
        subject: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[AttendanceRecord]:
        """Matching records, newest ``date`` first (ties: newest id first)."""

        raise NotImplementedError

    def create(self, record: NewAttendance) -> int:
        raise NotImplementedError

    def update(self, record: AttendanceRecord) -> bool:
        raise NotImplementedError

    def delete(self, attendance_id: int) -> bool:
        raise NotImplementedError


class StudentDirectory(Protocol):
    def resolve_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError


class ClassDirectory(Protocol):
    def resolve_by_id(self, class_id: int) -> Optional[SchoolClass]:
        raise NotImplementedError
