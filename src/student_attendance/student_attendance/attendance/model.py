from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..classes.model import SchoolClass
from ..common.datetime_utils import isoformat_or_none
from ..core.enums import AttendanceStatus, BulkFailureReason
from ..students.model import Student


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's attendance for one subject session."""

    attendance_id: int
    student_id: int
    class_id: int
    subject: str
    date: datetime
    status: AttendanceStatus = AttendanceStatus.PRESENT
    remarks: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class NewAttendance:
    """Validated values for a record that storage has not assigned an id to yet."""

    student_id: int
    class_id: int
    subject: str
    date: datetime
    status: AttendanceStatus
    remarks: Optional[str] = None


@dataclass(frozen=True)
class AttendanceView:
    """Read-model: a record with resolved student/class detail (None when the reference dangles)."""

    record: AttendanceRecord
    student: Optional[Student] = None
    school_class: Optional[SchoolClass] = None
    include_student: bool = True

    def to_dict(self) -> dict:
        r = self.record
        data = {
            "id": r.attendance_id,
            "studentId": r.student_id,
            "classId": r.class_id,
            "class": self.school_class.to_dict() if self.school_class else None,
            "subject": r.subject,
            "date": isoformat_or_none(r.date),
            "status": r.status.value,
            "remarks": r.remarks,
            "createdAt": isoformat_or_none(r.created_at),
            "updatedAt": isoformat_or_none(r.updated_at),
        }
        if self.include_student:
            data["student"] = self.student.to_dict() if self.student else None
        return data


@dataclass(frozen=True)
class BulkFailure:
    index: int
    student_id: Optional[int]
    reason: BulkFailureReason
    message: str

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "studentId": self.student_id,
            "reason": self.reason.value,
            "message": self.message,
        }


@dataclass(frozen=True)
class BulkAttendanceResult:
    inserted: list[AttendanceView] = field(default_factory=list)
    failed: list[BulkFailure] = field(default_factory=list)

    @property
    def all_duplicates(self) -> bool:
        return bool(self.failed) and all(f.reason == BulkFailureReason.DUPLICATE for f in self.failed)

    def to_dict(self) -> dict:
        return {
            "inserted": [v.to_dict() for v in self.inserted],
            "failed": [f.to_dict() for f in self.failed],
        }
