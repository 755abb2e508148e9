from __future__ import annotations

from pathlib import Path

from src.student_attendance.student_attendance.database.bootstrap import (
    _strip_create_db_and_use,
    _strip_line_comments,
    iter_sql_statements,
)
from src.student_attendance.student_attendance.database.connection import DBConfig

REPO_ROOT = Path(__file__).resolve().parents[2]


def test_splitter_keeps_semicolons_inside_quotes():
    sql = "INSERT INTO t VALUES ('a;b'); INSERT INTO t VALUES (\"c;d\");\nSELECT 1"

    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'INSERT INTO t VALUES ("c;d")',
        "SELECT 1",
    ]


def test_schema_declares_calendar_day_unique_key():
    sql = (REPO_ROOT / "database" / "schema.sql").read_text(encoding="utf-8")
    statements = list(iter_sql_statements(_strip_line_comments(_strip_create_db_and_use(sql))))

    assert len(statements) == 3
    attendance = next(s for s in statements if "attendance_records" in s)
    assert "UNIQUE KEY uq_attendance_session (student_id, class_id, subject, attendance_day)" in attendance
    assert not any(s.upper().startswith(("USE", "CREATE DATABASE")) for s in statements)


def test_db_config_from_mapping_defaults():
    config = DBConfig.from_mapping({"host": "db", "port": "3307", "user": "app"})

    assert config == DBConfig(host="db", port=3307, user="app", password="", database="student_attendance")


def test_attendance_subject_compares_case_sensitively():
    sql = (REPO_ROOT / "database" / "schema.sql").read_text(encoding="utf-8")
    statements = list(iter_sql_statements(_strip_line_comments(_strip_create_db_and_use(sql))))
    attendance = next(s for s in statements if "attendance_records" in s)

    assert "subject VARCHAR(100) COLLATE utf8mb4_bin NOT NULL" in attendance
