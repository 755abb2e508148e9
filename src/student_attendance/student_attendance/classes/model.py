from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import isoformat_or_none


@dataclass(frozen=True)
class SchoolClass:
    """A class (grade + section) and the subjects taught in it."""

    class_id: int
    name: str
    section: str
    subjects: tuple[str, ...] = ()
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def teaches(self, subject: str) -> bool:
        return subject in self.subjects

    def to_dict(self) -> dict:
        return {
            "id": self.class_id,
            "name": self.name,
            "section": self.section,
            "subjects": list(self.subjects),
            "createdAt": isoformat_or_none(self.created_at),
            "updatedAt": isoformat_or_none(self.updated_at),
        }
