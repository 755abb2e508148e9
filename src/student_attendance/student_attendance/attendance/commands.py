"""Validated input structures for the attendance ledger.

Each ``from_payload`` reads only the recognized camelCase keys
(studentId, classId, subject, date, status, remarks; bulk also reads
records) and ignores everything else.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import parse_calendar_day, parse_datetime
from ..common.validators import optional_id, optional_trimmed, require_id, require_max_length, require_non_empty
from ..core.constants import MAX_REMARKS_LENGTH, MAX_SUBJECT_LENGTH
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from .model import AttendanceRecord


def parse_status(value: Any) -> AttendanceStatus:
    if isinstance(value, AttendanceStatus):
        return value
    if isinstance(value, str):
        try:
            return AttendanceStatus(value.strip().lower())
        except ValueError:
            pass
    allowed = ", ".join(s.value for s in AttendanceStatus)
    raise ValidationError(f"status must be one of: {allowed}")


def _status_or_default(payload: Mapping[str, Any]) -> AttendanceStatus:
    value = payload.get("status")
    if value is None or value == "":
        return AttendanceStatus.PRESENT
    return parse_status(value)


def _subject(value: Any) -> str:
    return require_max_length(require_non_empty(value, "subject"), "subject", MAX_SUBJECT_LENGTH)


def _remarks(value: Any) -> Optional[str]:
    remarks = optional_trimmed(value, "remarks")
    if remarks:
        require_max_length(remarks, "remarks", MAX_REMARKS_LENGTH)
    return remarks


@dataclass(frozen=True)
class AttendanceFilter:
    class_id: Optional[int] = None
    student_id: Optional[int] = None
    subject: Optional[str] = None
    day: Optional[date] = None

    @classmethod
    def from_query(cls, args: Mapping[str, Any]) -> "AttendanceFilter":
        day = args.get("date")
        return cls(
            class_id=optional_id(args.get("classId"), "classId"),
            student_id=optional_id(args.get("studentId"), "studentId"),
            subject=optional_trimmed(args.get("subject"), "subject"),
            day=parse_calendar_day(day) if day else None,
        )


@dataclass(frozen=True)
class CreateAttendanceCommand:
    student_id: int
    class_id: int
    subject: str
    date: Optional[datetime] = None
    status: AttendanceStatus = AttendanceStatus.PRESENT
    remarks: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "CreateAttendanceCommand":
        raw_date = payload.get("date")
        return cls(
            student_id=require_id(payload.get("studentId"), "studentId"),
            class_id=require_id(payload.get("classId"), "classId"),
            subject=_subject(payload.get("subject")),
            date=parse_datetime(raw_date) if raw_date not in (None, "") else None,
            status=_status_or_default(payload),
            remarks=_remarks(payload.get("remarks")),
        )


@dataclass(frozen=True)
class BulkAttendanceEntry:
    student_id: int
    status: AttendanceStatus = AttendanceStatus.PRESENT
    remarks: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "BulkAttendanceEntry":
        if not isinstance(payload, Mapping):
            raise ValidationError("Each record must be an object")
        return cls(
            student_id=require_id(payload.get("studentId"), "studentId"),
            status=_status_or_default(payload),
            remarks=_remarks(payload.get("remarks")),
        )


@dataclass(frozen=True)
class BulkAttendanceCommand:
    """Shared fields are validated up front; entries stay raw so each one fails on its own."""

    class_id: int
    subject: str
    date: datetime
    records: Sequence[Any] = field(default_factory=tuple)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "BulkAttendanceCommand":
        records = payload.get("records")
        if not isinstance(records, list) or not records:
            raise ValidationError("records must be a non-empty list")
        return cls(
            class_id=require_id(payload.get("classId"), "classId"),
            subject=_subject(payload.get("subject")),
            date=parse_datetime(payload.get("date")),
            records=tuple(records),
        )


_PATCH_PARSERS = {
    "studentId": ("student_id", lambda v: require_id(v, "studentId")),
    "classId": ("class_id", lambda v: require_id(v, "classId")),
    "subject": ("subject", _subject),
    "date": ("date", parse_datetime),
    "status": ("status", parse_status),
    "remarks": ("remarks", _remarks),
}


@dataclass(frozen=True)
class AttendancePatch:
    changes: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "AttendancePatch":
        changes: dict[str, Any] = {}
        for key, (attr, parse) in _PATCH_PARSERS.items():
            if key in payload:
                changes[attr] = parse(payload[key])
        return cls(changes=changes)

    def touches(self, *attrs: str) -> bool:
        return any(a in self.changes for a in attrs)

    def apply_to(self, record: AttendanceRecord) -> AttendanceRecord:
        return replace(record, **self.changes)
