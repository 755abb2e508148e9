from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    """Storage interface for the student directory.

    ``create`` and ``update`` raise DuplicateRecordError when the email or
    roll number is already taken.
    """

    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def list_all(self, *, class_id: Optional[int] = None) -> Sequence[Student]:
        raise NotImplementedError

    def create(self, *, name: str, email: str, roll_number: str, class_id: Optional[int]) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        student_id: int,
        name: str,
        email: str,
        roll_number: str,
        class_id: Optional[int],
    ) -> bool:
        raise NotImplementedError

    def delete(self, student_id: int) -> bool:
        raise NotImplementedError
