from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..common.pagination import PageOptions, QueryResult
from ..core.enums import VisitStatus
from ..schools.model import School
from .model import Visit


class VisitRepository(Protocol):
    def get_by_id(self, visit_id: int) -> Optional[Visit]:
        raise NotImplementedError

    def find_slot(self, *, trainer_id: int, school_id: str, visit_date: date, time: str) -> Optional[Visit]:
        raise NotImplementedError

    def find_for_school_and_trainer(self, *, school_id: str, trainer_id: int) -> Optional[Visit]:
        """The trainer's earliest open visit at the school, else the latest completed one."""

        raise NotImplementedError

    def create_for_trainer(
        self,
        *,
        trainer_id: int,
        school_id: str,
        visit_date: date,
        time: str,
        standard: Optional[str] = None,
    ) -> Visit:
        """Insert the visit and append it to the trainer's visits, atomically.

        Raises DuplicateRecordError when the slot is already taken.
        """

        raise NotImplementedError

    def save(self, visit: Visit) -> Visit:
        raise NotImplementedError

    def delete_for_trainer(self, *, visit_id: int, trainer_id: int) -> bool:
        """Drop the trainer's back-reference, then the visit, atomically."""

        raise NotImplementedError

    def list_for_trainer_with_school(
        self, *, trainer_id: int, status: Optional[VisitStatus] = None
    ) -> Sequence[tuple[Visit, School]]:
        raise NotImplementedError

    def list_for_school(self, school_id: str) -> Sequence[Visit]:
        raise NotImplementedError

    def school_ids_for_trainer(self, trainer_id: int) -> Sequence[str]:
        raise NotImplementedError

    def status_counts_for_trainer(self, trainer_id: int) -> dict[str, int]:
        raise NotImplementedError

    def query(self, *, filters: dict, options: PageOptions) -> QueryResult:
        raise NotImplementedError
