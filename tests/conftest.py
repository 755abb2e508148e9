from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

import pytest

from src.student_attendance.student_attendance.classes.model import SchoolClass
from src.student_attendance.student_attendance.container import Container, wire
from src.student_attendance.student_attendance.main import create_app
from src.student_attendance.student_attendance.students.model import Student
from tests.fakes import InMemoryAttendance, InMemoryClasses, InMemoryStudents


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 1, 15, 9, 30, 0)


@pytest.fixture
def container() -> Container:
    return wire(
        classes_repo=InMemoryClasses(),
        students_repo=InMemoryStudents(),
        attendance_repo=InMemoryAttendance(),
    )


@dataclass(frozen=True)
class Grade10:
    school_class: SchoolClass
    s1: Student
    s2: Student


@pytest.fixture
def grade10(container: Container) -> Grade10:
    """Class "Grade 10" section A (Math, Physics) with two enrolled students."""

    c = container.class_service.create_class({"name": "Grade 10", "section": "A", "subjects": ["Math", "Physics"]})
    s1 = container.student_service.create_student(
        {"name": "Alice Nguyen", "email": "alice@example.edu", "rollNumber": "G10A-001", "classId": c.class_id}
    )
    s2 = container.student_service.create_student(
        {"name": "Bao Tran", "email": "bao@example.edu", "rollNumber": "G10A-002", "classId": c.class_id}
    )
    return Grade10(school_class=c, s1=s1, s2=s2)


@pytest.fixture
def client(container: Container):
    app = create_app(container, settings_module="config.testing")
    return app.test_client()
