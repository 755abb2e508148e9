from __future__ import annotations

from datetime import datetime

import pytest

from src.student_attendance.student_attendance.attendance.commands import (
    BulkAttendanceCommand,
    CreateAttendanceCommand,
)
from src.student_attendance.student_attendance.attendance.model import AttendanceRecord
from src.student_attendance.student_attendance.attendance.report import summarize
from src.student_attendance.student_attendance.core.enums import AttendanceStatus


def _record(i: int, status: AttendanceStatus) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=i,
        student_id=1,
        class_id=1,
        subject="Math",
        date=datetime(2024, 1, 1 + i),
        status=status,
    )


def test_report_after_marking_grade10(container, grade10):
    container.attendance_service.mark_bulk_attendance(
        BulkAttendanceCommand.from_payload(
            {
                "classId": grade10.school_class.class_id,
                "subject": "Math",
                "date": "2024-01-15",
                "records": [
                    {"studentId": grade10.s1.student_id, "status": "present"},
                    {"studentId": grade10.s2.student_id, "status": "absent"},
                ],
            }
        )
    )

    report = container.attendance_service.get_student_report(grade10.s1.student_id)

    s = report.summary
    assert (s.total, s.present, s.absent, s.late) == (1, 1, 0, 0)
    assert s.attendance_percentage == 100.00
    assert len(report.records) == 1
    assert report.records[0].school_class == grade10.school_class


def test_report_records_carry_class_but_not_student(container, grade10):
    container.attendance_service.create_attendance(
        CreateAttendanceCommand.from_payload(
            {"studentId": grade10.s1.student_id, "classId": grade10.school_class.class_id, "subject": "Math"}
        )
    )

    data = container.attendance_service.get_student_report(grade10.s1.student_id).to_dict()

    assert "student" not in data["records"][0]
    assert data["records"][0]["class"]["name"] == "Grade 10"
    assert data["summary"]["attendancePercentage"] == 100.0


def test_report_is_newest_first(container, grade10):
    for day in (3, 9, 5):
        container.attendance_service.create_attendance(
            CreateAttendanceCommand.from_payload(
                {
                    "studentId": grade10.s1.student_id,
                    "classId": grade10.school_class.class_id,
                    "subject": "Physics",
                    "date": f"2024-02-{day:02d}",
                    "status": "late" if day == 5 else "absent",
                }
            )
        )

    report = container.attendance_service.get_student_report(grade10.s1.student_id)

    assert [v.record.date.day for v in report.records] == [9, 5, 3]
    assert report.summary.attendance_percentage == 33.33


def test_report_for_student_without_records_is_zero(container, grade10):
    report = container.attendance_service.get_student_report(grade10.s2.student_id)

    assert report.records == []
    assert report.summary.total == 0
    assert report.summary.attendance_percentage == 0


def test_late_counts_toward_attendance():
    summary = summarize([_record(1, AttendanceStatus.LATE), _record(2, AttendanceStatus.ABSENT)])

    assert summary.attendance_percentage == 50.0


@pytest.mark.parametrize(
    "statuses",
    [
        [],
        [AttendanceStatus.PRESENT],
        [AttendanceStatus.ABSENT] * 3,
        [AttendanceStatus.PRESENT, AttendanceStatus.LATE, AttendanceStatus.ABSENT],
        [AttendanceStatus.PRESENT] * 2 + [AttendanceStatus.ABSENT] * 4 + [AttendanceStatus.LATE],
    ],
)
def test_summary_invariants(statuses):
    summary = summarize([_record(i, s) for i, s in enumerate(statuses)])

    assert summary.present + summary.absent + summary.late == summary.total == len(statuses)
    if summary.total:
        expected = round((summary.present + summary.late) / summary.total * 100, 2)
        assert summary.attendance_percentage == expected
    else:
        assert summary.attendance_percentage == 0
