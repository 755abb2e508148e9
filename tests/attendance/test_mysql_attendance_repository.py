from __future__ import annotations

from datetime import datetime

import mysql.connector
import pytest
from mysql.connector import errorcode

from src.student_attendance.student_attendance.attendance.model import NewAttendance
from src.student_attendance.student_attendance.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from src.student_attendance.student_attendance.core.enums import AttendanceStatus
from src.student_attendance.student_attendance.core.exceptions import DuplicateRecordError, StorageError


class FakeCursor:
    def __init__(self, *, error=None, rows=None, lastrowid=1):
        self._error = error
        self._rows = rows or []
        self.lastrowid = lastrowid
        self.rowcount = len(self._rows)
        self.executed: list[tuple[str, tuple]] = []

    def execute(self, sql, params=()):
        self.executed.append((" ".join(sql.split()), tuple(params)))
        if self._error is not None:
            raise self._error

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)

    def close(self):
        pass


class FakeConnection:
    def __init__(self, cursor: FakeCursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnFactory:
    def __init__(self, cursor: FakeCursor):
        self.cursor = cursor
        self.connection = FakeConnection(cursor)

    def connect(self):
        return self.connection


def _new(**overrides) -> NewAttendance:
    values = dict(
        student_id=1,
        class_id=2,
        subject="Math",
        date=datetime(2024, 1, 15, 9, 0),
        status=AttendanceStatus.PRESENT,
        remarks=None,
    )
    values.update(overrides)
    return NewAttendance(**values)


def test_create_returns_lastrowid_and_commits():
    factory = FakeConnFactory(FakeCursor(lastrowid=41))

    assert MySQLAttendanceRepository(factory).create(_new()) == 41
    assert factory.connection.committed
    assert factory.connection.closed
    sql, params = factory.cursor.executed[0]
    assert sql.startswith("INSERT INTO attendance_records")
    assert params[-2:] == ("present", None)


def test_duplicate_key_becomes_duplicate_record_error():
    error = mysql.connector.IntegrityError(msg="Duplicate entry", errno=errorcode.ER_DUP_ENTRY)
    factory = FakeConnFactory(FakeCursor(error=error))

    with pytest.raises(DuplicateRecordError):
        MySQLAttendanceRepository(factory).create(_new())
    assert factory.connection.rolled_back
    assert not factory.connection.committed


def test_other_integrity_errors_propagate():
    error = mysql.connector.IntegrityError(msg="Column cannot be null", errno=errorcode.ER_BAD_NULL_ERROR)
    factory = FakeConnFactory(FakeCursor(error=error))

    with pytest.raises(mysql.connector.IntegrityError):
        MySQLAttendanceRepository(factory).create(_new())


def test_connector_failures_become_storage_errors():
    error = mysql.connector.OperationalError(msg="Lost connection", errno=errorcode.CR_SERVER_LOST)
    factory = FakeConnFactory(FakeCursor(error=error))

    with pytest.raises(StorageError):
        MySQLAttendanceRepository(factory).delete(3)
    assert factory.connection.rolled_back


def test_find_builds_day_filter_and_orders_newest_first():
    row = {
        "attendance_id": 5,
        "student_id": 1,
        "class_id": 2,
        "subject": "Math",
        "attendance_date": datetime(2024, 1, 15, 9, 0),
        "status": "late",
        "remarks": "bus",
        "created_at": datetime(2024, 1, 15, 9, 1),
        "updated_at": datetime(2024, 1, 15, 9, 1),
    }
    factory = FakeConnFactory(FakeCursor(rows=[row]))
    start, end = datetime(2024, 1, 15), datetime(2024, 1, 15, 23, 59, 59, 999000)

    records = MySQLAttendanceRepository(factory).find(class_id=2, subject="Math", start=start, end=end)

    sql, params = factory.cursor.executed[0]
    assert "WHERE class_id=%s AND subject=%s AND attendance_date >= %s AND attendance_date <= %s" in sql
    assert sql.endswith("ORDER BY attendance_date DESC, attendance_id DESC")
    assert params == (2, "Math", start, end)
    assert records[0].status == AttendanceStatus.LATE
    assert records[0].remarks == "bus"


def test_find_without_filters_has_no_where_clause():
    factory = FakeConnFactory(FakeCursor())

    assert MySQLAttendanceRepository(factory).find() == []
    assert "WHERE" not in factory.cursor.executed[0][0]
