from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import isoformat_or_none


@dataclass(frozen=True)
class Student:
    student_id: int
    name: str
    email: str
    roll_number: str
    class_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.student_id,
            "name": self.name,
            "email": self.email,
            "rollNumber": self.roll_number,
            "classId": self.class_id,
            "createdAt": isoformat_or_none(self.created_at),
            "updatedAt": isoformat_or_none(self.updated_at),
        }
