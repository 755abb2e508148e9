from __future__ import annotations

import pytest

from src.student_attendance.student_attendance.common.validators import (
    clean_string_list,
    optional_id,
    optional_trimmed,
    require_email,
    require_id,
    require_non_empty,
)
from src.student_attendance.student_attendance.core.exceptions import ValidationError


def test_require_non_empty_trims():
    assert require_non_empty("  Math ", "subject") == "Math"
    with pytest.raises(ValidationError, match="subject is required"):
        require_non_empty("  ", "subject")


@pytest.mark.parametrize("value,expected", [(3, 3), ("12", 12), (" 7 ", 7)])
def test_require_id_accepts_ints_and_digit_strings(value, expected):
    assert require_id(value, "id") == expected


@pytest.mark.parametrize("value", [None, "", "x1", -1, 0, True, 1.5])
def test_require_id_rejects(value):
    with pytest.raises(ValidationError):
        require_id(value, "id")


def test_optional_helpers():
    assert optional_id(None, "id") is None
    assert optional_id("", "id") is None
    assert optional_trimmed("  ", "remarks") is None
    assert optional_trimmed(" ok ", "remarks") == "ok"


def test_email_and_subject_list():
    assert require_email(" A@B.CO ") == "a@b.co"
    with pytest.raises(ValidationError):
        require_email("a@b")
    assert clean_string_list(["b", " a", "b", ""], "subjects") == ("b", "a")
    assert clean_string_list(None, "subjects") == ()
    with pytest.raises(ValidationError):
        clean_string_list([1, 2], "subjects")
