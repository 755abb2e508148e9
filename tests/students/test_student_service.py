from __future__ import annotations

import pytest

from src.student_attendance.student_attendance.attendance.commands import CreateAttendanceCommand
from src.student_attendance.student_attendance.core.exceptions import (
    DuplicateRecordError,
    NotFoundError,
    ValidationError,
)


def test_create_student_normalizes_email(container, grade10):
    s = container.student_service.create_student(
        {"name": "Chi Le", "email": "  Chi.Le@Example.EDU ", "rollNumber": " G10A-003 ", "classId": str(grade10.school_class.class_id)}
    )

    assert s.email == "chi.le@example.edu"
    assert s.roll_number == "G10A-003"
    assert s.class_id == grade10.school_class.class_id


@pytest.mark.parametrize(
    "payload",
    [
        {"email": "x@example.edu", "rollNumber": "R1"},
        {"name": "X", "rollNumber": "R1"},
        {"name": "X", "email": "not-an-email", "rollNumber": "R1"},
        {"name": "X", "email": "x@example.edu"},
        {"name": "X", "email": "x@example.edu", "rollNumber": "R1", "classId": 999},
    ],
)
def test_create_student_validation(container, payload):
    with pytest.raises(ValidationError):
        container.student_service.create_student(payload)


def test_duplicate_email_or_roll_number(container, grade10):
    with pytest.raises(DuplicateRecordError):
        container.student_service.create_student(
            {"name": "Copy", "email": "ALICE@example.edu", "rollNumber": "NEW-1"}
        )
    with pytest.raises(DuplicateRecordError):
        container.student_service.create_student(
            {"name": "Copy", "email": "new@example.edu", "rollNumber": "G10A-001"}
        )


def test_update_student_partial_and_class_change(container, grade10):
    other = container.class_service.create_class({"name": "Grade 11"})

    moved = container.student_service.update_student(grade10.s1.student_id, {"classId": other.class_id})

    assert moved.class_id == other.class_id
    assert moved.name == grade10.s1.name
    cleared = container.student_service.update_student(grade10.s1.student_id, {"classId": None})
    assert cleared.class_id is None


def test_list_students_by_class(container, grade10):
    container.student_service.create_student({"name": "Solo", "email": "solo@example.edu", "rollNumber": "Z-1"})

    in_class = container.student_service.list_students(class_id=grade10.school_class.class_id)

    assert [s.roll_number for s in in_class] == ["G10A-001", "G10A-002"]
    assert len(container.student_service.list_students()) == 3


def test_delete_student_keeps_attendance(container, grade10):
    container.attendance_service.create_attendance(
        CreateAttendanceCommand.from_payload(
            {"studentId": grade10.s1.student_id, "classId": grade10.school_class.class_id, "subject": "Math"}
        )
    )

    container.student_service.delete_student(grade10.s1.student_id)

    with pytest.raises(NotFoundError):
        container.student_service.get_student(grade10.s1.student_id)
    report = container.attendance_service.get_student_report(grade10.s1.student_id)
    assert report.summary.total == 1


def test_students_api(client, grade10):
    res = client.get("/api/students", query_string={"classId": grade10.school_class.class_id})
    assert [s["rollNumber"] for s in res.get_json()] == ["G10A-001", "G10A-002"]

    dup = client.post("/api/students", json={"name": "Dup", "email": "bao@example.edu", "rollNumber": "X"})
    assert dup.status_code == 409

    upd = client.put(f"/api/students/{grade10.s2.student_id}", json={"name": "Bao T."})
    assert upd.get_json()["name"] == "Bao T."

    assert client.delete(f"/api/students/{grade10.s2.student_id}").status_code == 200
    assert client.get(f"/api/students/{grade10.s2.student_id}").status_code == 404
    assert client.get("/api/students", query_string={"classId": "abc"}).status_code == 400
