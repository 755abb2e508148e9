from __future__ import annotations

import json
from typing import Any, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import SchoolClass
from .repository import ClassRepository

_COLUMNS = "class_id, name, section, subjects, created_at, updated_at"


def _decode_subjects(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        value = json.loads(value or "[]")
    return tuple(str(s) for s in value)


def _row_to_class(r: dict) -> SchoolClass:
    return SchoolClass(
        class_id=int(r["class_id"]),
        name=r["name"],
        section=r["section"],
        subjects=_decode_subjects(r.get("subjects")),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLClassRepository(ClassRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, class_id: int) -> Optional[SchoolClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM classes WHERE class_id=%s", (int(class_id),))
            r = fetchone(cur)
            return _row_to_class(r) if r else None

    def list_all(self) -> Sequence[SchoolClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM classes ORDER BY name, section, class_id")
            return [_row_to_class(r) for r in fetchall(cur)]

    def create(self, *, name: str, section: str, subjects: Sequence[str]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO classes(name, section, subjects) VALUES(%s,%s,%s)",
                (name, section, json.dumps(list(subjects))),
            )
            return int(cur.lastrowid)

    def update(self, *, class_id: int, name: str, section: str, subjects: Sequence[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE classes
                SET name=%s, section=%s, subjects=%s
                WHERE class_id=%s
                """,
                (name, section, json.dumps(list(subjects)), int(class_id)),
            )
            # rowcount is 0 when nothing changed; confirm the row exists instead.
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM classes WHERE class_id=%s", (int(class_id),))
            return fetchone(cur) is not None

    def delete(self, class_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM classes WHERE class_id=%s", (int(class_id),))
            return cur.rowcount > 0
