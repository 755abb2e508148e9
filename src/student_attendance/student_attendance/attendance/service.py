from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Iterable, Optional

from ..classes.model import SchoolClass
from ..classes.service import ensure_subject_taught
from ..common.datetime_utils import day_bounds, now_local, truncate_to_millis
from ..common.validators import optional_id
from ..core.enums import BulkFailureReason
from ..core.exceptions import DuplicateRecordError, NotFoundError, StorageError, ValidationError
from ..students.model import Student
from .commands import (
    AttendanceFilter,
    AttendancePatch,
    BulkAttendanceCommand,
    BulkAttendanceEntry,
    CreateAttendanceCommand,
)
from .model import AttendanceRecord, AttendanceView, BulkAttendanceResult, BulkFailure, NewAttendance
from .report import StudentReport, summarize
from .repository import AttendanceRepository, ClassDirectory, StudentDirectory

logger = logging.getLogger(__name__)


class AttendanceService:
    """Attendance ledger: record lifecycle and per-student reports.

    Holds no state between calls. Student and class detail is resolved
    through the directories after each fetch; a dangling reference is
    shown as ``None`` instead of failing the read.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentDirectory,
        classes: ClassDirectory,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._students = students
        self._classes = classes
        self._clock = clock

    # ----- reads -----

    def get_attendance(self, criteria: Optional[AttendanceFilter] = None) -> list[AttendanceView]:
        criteria = criteria or AttendanceFilter()
        start = end = None
        if criteria.day is not None:
            start, end = day_bounds(criteria.day)

        records = self._attendance.find(
            class_id=criteria.class_id,
            student_id=criteria.student_id,
            subject=criteria.subject,
            start=start,
            end=end,
        )
        return self._enrich(records)

    def get_attendance_by_id(self, attendance_id: int) -> AttendanceView:
        return self._enrich([self._get_record(attendance_id)])[0]

    def get_student_report(self, student_id: int) -> StudentReport:
        records = self._attendance.find(student_id=int(student_id))
        return StudentReport(
            student_id=int(student_id),
            records=self._enrich(records, with_student=False),
            summary=summarize(records),
        )

    # ----- writes -----

    def create_attendance(self, command: CreateAttendanceCommand) -> AttendanceView:
        student = self._require_student(command.student_id)
        school_class = self._require_class(command.class_id)
        ensure_subject_taught(school_class, command.subject)

        attendance_id = self._attendance.create(
            NewAttendance(
                student_id=student.student_id,
                class_id=school_class.class_id,
                subject=command.subject,
                date=command.date or truncate_to_millis(self._clock()),
                status=command.status,
                remarks=command.remarks,
            )
        )
        logger.info(
            "Recorded attendance %s: student=%s class=%s subject=%s",
            attendance_id, student.student_id, school_class.class_id, command.subject,
        )
        return AttendanceView(record=self._get_stored(attendance_id), student=student, school_class=school_class)

    def mark_bulk_attendance(self, command: BulkAttendanceCommand) -> BulkAttendanceResult:
        """Insert one record per entry; each entry succeeds or fails on its own."""

        school_class = self._require_class(command.class_id)
        ensure_subject_taught(school_class, command.subject)

        result = BulkAttendanceResult()
        for index, raw in enumerate(command.records):
            student_id = _best_effort_student_id(raw)
            try:
                entry = BulkAttendanceEntry.from_payload(raw)
                student = self._require_student(entry.student_id)
                attendance_id = self._attendance.create(
                    NewAttendance(
                        student_id=student.student_id,
                        class_id=school_class.class_id,
                        subject=command.subject,
                        date=command.date,
                        status=entry.status,
                        remarks=entry.remarks,
                    )
                )
            except DuplicateRecordError as e:
                result.failed.append(BulkFailure(index, student_id, BulkFailureReason.DUPLICATE, str(e)))
                continue
            except ValidationError as e:
                result.failed.append(BulkFailure(index, student_id, BulkFailureReason.INVALID, str(e)))
                continue

            result.inserted.append(
                AttendanceView(record=self._get_stored(attendance_id), student=student, school_class=school_class)
            )

        logger.info(
            "Bulk attendance class=%s subject=%s date=%s: %d inserted, %d rejected",
            school_class.class_id, command.subject, command.date.date(), len(result.inserted), len(result.failed),
        )
        if result.failed:
            logger.warning(
                "Bulk attendance rejected entries: %s",
                ", ".join(f"#{f.index}({f.reason.value})" for f in result.failed),
            )
        return result

    def update_attendance(self, attendance_id: int, patch: AttendancePatch) -> AttendanceView:
        current = self._get_record(attendance_id)
        if not patch.changes:
            return self._enrich([current])[0]

        merged = patch.apply_to(current)
        # Uniqueness is not pre-checked here: an update corrects an existing session.
        if patch.touches("student_id"):
            self._require_student(merged.student_id)
        if patch.touches("class_id", "subject"):
            ensure_subject_taught(self._require_class(merged.class_id), merged.subject)

        if not self._attendance.update(merged):
            raise NotFoundError("Attendance record not found")
        logger.info("Updated attendance %s (%s)", attendance_id, ", ".join(sorted(patch.changes)))
        return self._enrich([self._get_stored(current.attendance_id)])[0]

    def delete_attendance(self, attendance_id: int) -> None:
        if not self._attendance.delete(int(attendance_id)):
            raise NotFoundError("Attendance record not found")
        logger.info("Deleted attendance %s", attendance_id)

    # ----- helpers -----

    def _get_record(self, attendance_id: int) -> AttendanceRecord:
        record = self._attendance.get_by_id(int(attendance_id))
        if not record:
            raise NotFoundError("Attendance record not found")
        return record

    def _get_stored(self, attendance_id: int) -> AttendanceRecord:
        record = self._attendance.get_by_id(attendance_id)
        if not record:
            raise StorageError(f"Attendance record {attendance_id} vanished after write")
        return record

    def _require_student(self, student_id: int) -> Student:
        student = self._students.resolve_by_id(student_id)
        if not student:
            raise ValidationError(f"Student {student_id} does not exist")
        return student

    def _require_class(self, class_id: int) -> SchoolClass:
        school_class = self._classes.resolve_by_id(class_id)
        if not school_class:
            raise ValidationError(f"Class {class_id} does not exist")
        return school_class

    def _enrich(self, records: Iterable[AttendanceRecord], *, with_student: bool = True) -> list[AttendanceView]:
        students: dict[int, Optional[Student]] = {}
        classes: dict[int, Optional[SchoolClass]] = {}

        views = []
        for r in records:
            student = None
            if with_student:
                if r.student_id not in students:
                    students[r.student_id] = self._students.resolve_by_id(r.student_id)
                student = students[r.student_id]
            if r.class_id not in classes:
                classes[r.class_id] = self._classes.resolve_by_id(r.class_id)

            views.append(
                AttendanceView(
                    record=r,
                    student=student,
                    school_class=classes[r.class_id],
                    include_student=with_student,
                )
            )
        return views


def _best_effort_student_id(raw: Any) -> Optional[int]:
    try:
        return optional_id(raw.get("studentId"), "studentId") if hasattr(raw, "get") else None
    except ValidationError:
        return None
