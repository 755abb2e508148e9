from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..classes.repository import ClassRepository
from ..common.validators import optional_id, require_email, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from .model import Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)


class StudentService:
    def __init__(self, students: StudentRepository, classes: ClassRepository):
        self._students = students
        self._classes = classes

    def resolve_by_id(self, student_id: int) -> Optional[Student]:
        return self._students.get_by_id(int(student_id))

    def list_students(self, *, class_id: Optional[int] = None) -> Sequence[Student]:
        return self._students.list_all(class_id=class_id)

    def get_student(self, student_id: int) -> Student:
        found = self._students.get_by_id(int(student_id))
        if not found:
            raise NotFoundError("Student not found")
        return found

    def _check_class(self, class_id: Optional[int]) -> Optional[int]:
        if class_id is not None and not self._classes.get_by_id(class_id):
            raise ValidationError(f"Class {class_id} does not exist")
        return class_id

    def create_student(self, payload: Mapping[str, Any]) -> Student:
        name = require_non_empty(payload.get("name"), "name")
        email = require_email(payload.get("email"))
        roll_number = require_non_empty(payload.get("rollNumber"), "rollNumber")
        class_id = self._check_class(optional_id(payload.get("classId"), "classId"))

        student_id = self._students.create(name=name, email=email, roll_number=roll_number, class_id=class_id)
        logger.info("Created student %s (roll %s)", student_id, roll_number)
        return self.get_student(student_id)

    def update_student(self, student_id: int, patch: Mapping[str, Any]) -> Student:
        current = self.get_student(student_id)

        name = require_non_empty(patch["name"], "name") if "name" in patch else current.name
        email = require_email(patch["email"]) if "email" in patch else current.email
        roll_number = (
            require_non_empty(patch["rollNumber"], "rollNumber") if "rollNumber" in patch else current.roll_number
        )
        class_id = current.class_id
        if "classId" in patch:
            class_id = self._check_class(optional_id(patch.get("classId"), "classId"))

        updated = self._students.update(
            student_id=current.student_id,
            name=name,
            email=email,
            roll_number=roll_number,
            class_id=class_id,
        )
        if not updated:
            raise NotFoundError("Student not found")
        return self.get_student(current.student_id)

    def delete_student(self, student_id: int) -> None:
        # Attendance rows are kept; reads show the student as unavailable.
        if not self._students.delete(int(student_id)):
            raise NotFoundError("Student not found")
        logger.info("Deleted student %s", student_id)
