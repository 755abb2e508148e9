from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import SchoolClass


class ClassRepository(Protocol):
    """Storage interface for the class directory.

    Services depend on this protocol, never on a concrete database.
    """

    def get_by_id(self, class_id: int) -> Optional[SchoolClass]:
        raise NotImplementedError

    def list_all(self) -> Sequence[SchoolClass]:
        raise NotImplementedError

    def create(self, *, name: str, section: str, subjects: Sequence[str]) -> int:
        raise NotImplementedError

    def update(self, *, class_id: int, name: str, section: str, subjects: Sequence[str]) -> bool:
        raise NotImplementedError

    def delete(self, class_id: int) -> bool:
        raise NotImplementedError
