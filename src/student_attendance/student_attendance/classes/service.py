from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import clean_string_list, optional_trimmed, require_non_empty
from ..core.constants import DEFAULT_SECTION
from ..core.exceptions import NotFoundError, ValidationError
from .model import SchoolClass
from .repository import ClassRepository

logger = logging.getLogger(__name__)


class ClassService:
    """Class directory: plain CRUD plus id resolution for the attendance ledger."""

    def __init__(self, classes: ClassRepository):
        self._classes = classes

    def resolve_by_id(self, class_id: int) -> Optional[SchoolClass]:
        return self._classes.get_by_id(int(class_id))

    def list_classes(self) -> Sequence[SchoolClass]:
        return self._classes.list_all()

    def get_class(self, class_id: int) -> SchoolClass:
        found = self._classes.get_by_id(int(class_id))
        if not found:
            raise NotFoundError("Class not found")
        return found

    def create_class(self, payload: Mapping[str, Any]) -> SchoolClass:
        name = require_non_empty(payload.get("name"), "name")
        section = optional_trimmed(payload.get("section"), "section") or DEFAULT_SECTION
        subjects = clean_string_list(payload.get("subjects"), "subjects")

        class_id = self._classes.create(name=name, section=section, subjects=subjects)
        logger.info("Created class %s (%s %s)", class_id, name, section)
        return self.get_class(class_id)

    def update_class(self, class_id: int, patch: Mapping[str, Any]) -> SchoolClass:
        current = self.get_class(class_id)

        name = current.name
        if "name" in patch:
            name = require_non_empty(patch.get("name"), "name")
        section = current.section
        if "section" in patch:
            section = optional_trimmed(patch.get("section"), "section") or DEFAULT_SECTION
        subjects = current.subjects
        if "subjects" in patch:
            subjects = clean_string_list(patch.get("subjects"), "subjects")

        if not self._classes.update(class_id=current.class_id, name=name, section=section, subjects=subjects):
            raise NotFoundError("Class not found")
        return self.get_class(current.class_id)

    def delete_class(self, class_id: int) -> None:
        # Students and attendance keep their class_id; reads show the class as unavailable.
        if not self._classes.delete(int(class_id)):
            raise NotFoundError("Class not found")
        logger.info("Deleted class %s", class_id)


def ensure_subject_taught(school_class: SchoolClass, subject: str) -> None:
    """Reject a subject the class does not list. Classes without a subject list accept any subject."""

    if school_class.subjects and not school_class.teaches(subject):
        raise ValidationError(
            f"Subject '{subject}' is not taught in class {school_class.name} {school_class.section}"
        )
