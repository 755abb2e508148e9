from __future__ import annotations

from typing import Optional, Sequence

import mysql.connector

from ..core.exceptions import DuplicateRecordError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import Student
from .repository import StudentRepository

_COLUMNS = "student_id, name, email, roll_number, class_id, created_at, updated_at"


def _row_to_student(r: dict) -> Student:
    return Student(
        student_id=int(r["student_id"]),
        name=r["name"],
        email=r["email"],
        roll_number=r["roll_number"],
        class_id=int(r["class_id"]) if r.get("class_id") is not None else None,
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_id=%s", (int(student_id),))
            r = fetchone(cur)
            return _row_to_student(r) if r else None

    def list_all(self, *, class_id: Optional[int] = None) -> Sequence[Student]:
        sql = f"SELECT {_COLUMNS} FROM students"
        params: tuple = ()
        if class_id is not None:
            sql += " WHERE class_id=%s"
            params = (int(class_id),)
        sql += " ORDER BY roll_number, student_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_row_to_student(r) for r in fetchall(cur)]

    def create(self, *, name: str, email: str, roll_number: str, class_id: Optional[int]) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO students(name, email, roll_number, class_id)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (name, email, roll_number, class_id),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as exc:
            if is_duplicate_key(exc):
                raise DuplicateRecordError("A student with this email or roll number already exists") from exc
            raise

    def update(
        self,
        *,
        student_id: int,
        name: str,
        email: str,
        roll_number: str,
        class_id: Optional[int],
    ) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE students
                    SET name=%s, email=%s, roll_number=%s, class_id=%s
                    WHERE student_id=%s
                    """,
                    (name, email, roll_number, class_id, int(student_id)),
                )
                if cur.rowcount > 0:
                    return True
                cur.execute("SELECT 1 AS found FROM students WHERE student_id=%s", (int(student_id),))
                return fetchone(cur) is not None
        except mysql.connector.IntegrityError as exc:
            if is_duplicate_key(exc):
                raise DuplicateRecordError("A student with this email or roll number already exists") from exc
            raise

    def delete(self, student_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE student_id=%s", (int(student_id),))
            return cur.rowcount > 0
