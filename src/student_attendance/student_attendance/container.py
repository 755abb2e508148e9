from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .classes.mysql_class_repository import MySQLClassRepository
from .classes.repository import ClassRepository
from .classes.service import ClassService
from .database.connection import DBConfig, DatabaseConnection
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService


@dataclass(frozen=True)
class Container:
    classes_repo: ClassRepository
    students_repo: StudentRepository
    attendance_repo: AttendanceRepository

    class_service: ClassService
    student_service: StudentService
    attendance_service: AttendanceService


def wire(
    *,
    classes_repo: ClassRepository,
    students_repo: StudentRepository,
    attendance_repo: AttendanceRepository,
) -> Container:
    """Build services on top of any repository implementation (MySQL or in-memory)."""

    class_service = ClassService(classes_repo)
    student_service = StudentService(students_repo, classes_repo)
    attendance_service = AttendanceService(attendance_repo, student_service, class_service)

    return Container(
        classes_repo=classes_repo,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        class_service=class_service,
        student_service=student_service,
        attendance_service=attendance_service,
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config))
    return wire(
        classes_repo=MySQLClassRepository(conn),
        students_repo=MySQLStudentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
    )
