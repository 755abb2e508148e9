from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Attendance status stored per subject session."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"

    @property
    def counts_as_attended(self) -> bool:
        return self in (AttendanceStatus.PRESENT, AttendanceStatus.LATE)


class BulkFailureReason(str, Enum):
    """Why one entry of a bulk attendance request was not stored."""

    DUPLICATE = "duplicate"
    INVALID = "invalid"
