from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable

from ..core.constants import PERCENT_DECIMALS
from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, AttendanceView


@dataclass(frozen=True)
class AttendanceSummary:
    total: int
    present: int
    absent: int
    late: int
    attendance_percentage: float

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "present": self.present,
            "absent": self.absent,
            "late": self.late,
            "attendancePercentage": self.attendance_percentage,
        }


@dataclass(frozen=True)
class StudentReport:
    student_id: int
    records: list[AttendanceView]
    summary: AttendanceSummary

    def to_dict(self) -> dict:
        return {
            "records": [v.to_dict() for v in self.records],
            "summary": self.summary.to_dict(),
        }


def summarize(records: Iterable[AttendanceRecord]) -> AttendanceSummary:
    """Count records per status. Late arrivals count as attended."""

    counts = Counter(r.status for r in records)
    present = counts[AttendanceStatus.PRESENT]
    absent = counts[AttendanceStatus.ABSENT]
    late = counts[AttendanceStatus.LATE]
    total = present + absent + late

    attended = sum(n for status, n in counts.items() if status.counts_as_attended)
    percentage = round(attended / total * 100, PERCENT_DECIMALS) if total else 0.0
    return AttendanceSummary(
        total=total,
        present=present,
        absent=absent,
        late=late,
        attendance_percentage=percentage,
    )
