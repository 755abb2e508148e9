from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import AttendanceStatus
from ..core.exceptions import DuplicateRecordError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceRecord, NewAttendance
from .repository import AttendanceRepository

_COLUMNS = (
    "attendance_id, student_id, class_id, subject, attendance_date, status, remarks, created_at, updated_at"
)
_DUPLICATE_MESSAGE = "Attendance already recorded for this student, class and subject on that day"


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        student_id=int(r["student_id"]),
        class_id=int(r["class_id"]),
        subject=r["subject"],
        date=r["attendance_date"],
        status=AttendanceStatus(r["status"]),
        remarks=r.get("remarks"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def find(
        self,
        *,
        class_id: Optional[int] = None,
        student_id: Optional[int] = None,
        subject: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses: list[str] = []
        params: list[object] = []

        if class_id is not None:
            clauses.append("class_id=%s")
            params.append(int(class_id))
        if student_id is not None:
            clauses.append("student_id=%s")
            params.append(int(student_id))
        if subject is not None:
            clauses.append("subject=%s")
            params.append(subject)
        if start is not None:
            clauses.append("attendance_date >= %s")
            params.append(start)
        if end is not None:
            clauses.append("attendance_date <= %s")
            params.append(end)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                {where}
                ORDER BY attendance_date DESC, attendance_id DESC
                """,
                tuple(params),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def create(self, record: NewAttendance) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(student_id, class_id, subject, attendance_date, status, remarks)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        record.student_id,
                        record.class_id,
                        record.subject,
                        record.date,
                        record.status.value,
                        record.remarks,
                    ),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as exc:
            if is_duplicate_key(exc):
                raise DuplicateRecordError(_DUPLICATE_MESSAGE) from exc
            raise

    def update(self, record: AttendanceRecord) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE attendance_records
                    SET student_id=%s, class_id=%s, subject=%s, attendance_date=%s, status=%s, remarks=%s
                    WHERE attendance_id=%s
                    """,
                    (
                        record.student_id,
                        record.class_id,
                        record.subject,
                        record.date,
                        record.status.value,
                        record.remarks,
                        int(record.attendance_id),
                    ),
                )
                # rowcount is 0 when nothing changed; confirm the row exists instead.
                if cur.rowcount > 0:
                    return True
                cur.execute(
                    "SELECT 1 AS found FROM attendance_records WHERE attendance_id=%s",
                    (int(record.attendance_id),),
                )
                return fetchone(cur) is not None
        except mysql.connector.IntegrityError as exc:
            if is_duplicate_key(exc):
                raise DuplicateRecordError(_DUPLICATE_MESSAGE) from exc
            raise

    def delete(self, attendance_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            return cur.rowcount > 0
