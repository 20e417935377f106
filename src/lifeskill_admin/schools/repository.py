from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..common.pagination import PageOptions, QueryResult
from .model import NewSchool, School, SchoolAccount


class SchoolRepository(Protocol):
    def get_by_school_id(self, school_id: str) -> Optional[School]:
        raise NotImplementedError

    def get_by_udisecode(self, udisecode: str) -> Optional[School]:
        raise NotImplementedError

    def create_with_account(self, *, school: NewSchool, account: SchoolAccount) -> School:
        """Insert the school and its login in one transaction.

        Raises DuplicateRecordError naming the violated key when either the
        schoolId, the udisecode or the username already exists.
        """

        raise NotImplementedError

    def update(self, school_id: str, fields: dict) -> Optional[School]:
        raise NotImplementedError

    def query(self, *, filters: dict, options: PageOptions) -> QueryResult:
        """Paginated schools (results are School entities)."""

        raise NotImplementedError

    def list_blocks(self, *, district: Optional[str] = None) -> Sequence[str]:
        raise NotImplementedError

    def list_in_block(self, block: str) -> Sequence[dict]:
        raise NotImplementedError
