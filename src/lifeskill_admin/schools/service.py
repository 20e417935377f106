from __future__ import annotations

import logging
import random
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Optional, Sequence

from werkzeug.security import generate_password_hash

from ..common.pagination import PageOptions, QueryResult
from ..common.tabular import read_rows
from ..core.constants import (
    DEFAULT_BULK_UPLOAD_WORKERS,
    DEFAULT_SCHOOL_ID_ATTEMPTS,
    DEFAULT_SCHOOL_PASSWORD,
    SCHOOL_ID_PREFIX,
)
from ..core.exceptions import ConflictError, DuplicateRecordError, NotFoundError
from .model import SCHOOL_FIELDS, NewSchool, School, SchoolAccount
from .repository import SchoolRepository

logger = logging.getLogger(__name__)

# Unique indexes that mean "pick another schoolId" rather than "school exists".
_ID_COLLISION_KEYS = {"uq_schools_school_id", "uq_users_username"}

_DUPLICATE = "duplicate"
_CREATED = "created"
_REJECTED = "rejected"


def generate_school_id() -> str:
    return f"{SCHOOL_ID_PREFIX}{random.randint(100000, 999999)}"


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class SchoolService:
    def __init__(
        self,
        schools: SchoolRepository,
        *,
        default_password: str = DEFAULT_SCHOOL_PASSWORD,
        id_attempts: int = DEFAULT_SCHOOL_ID_ATTEMPTS,
        bulk_workers: int = DEFAULT_BULK_UPLOAD_WORKERS,
        id_generator: Callable[[], str] = generate_school_id,
    ):
        self._schools = schools
        self._default_password = default_password
        self._id_attempts = max(1, int(id_attempts))
        self._bulk_workers = max(1, int(bulk_workers))
        self._id_generator = id_generator

    def _onboard(self, record: dict) -> School:
        """Persist a school plus its login under a freshly generated schoolId.

        Generated ids can collide; a collision on the id (or on the username,
        which equals the id) is retried with a new one.
        """

        fields = {k: _clean(record.get(k)) for k in SCHOOL_FIELDS}
        for _ in range(self._id_attempts):
            school_id = self._id_generator()
            account = SchoolAccount(
                username=school_id,
                password_hash=generate_password_hash(self._default_password),
                first_name=_clean(record.get("firstname") or record.get("firstName")),
                last_name=_clean(record.get("lastname") or record.get("lastName")),
                mob_number=_clean(record.get("mobNumber")),
            )
            try:
                return self._schools.create_with_account(
                    school=NewSchool(school_id=school_id, **fields),
                    account=account,
                )
            except DuplicateRecordError as e:
                if e.key not in _ID_COLLISION_KEYS:
                    raise
                logger.warning("schoolId %s already taken, retrying", school_id)

        raise ConflictError("Could not allocate a unique school id")

    def create_school(self, body: dict) -> School:
        udisecode = _clean(body.get("udisecode"))
        if udisecode and self._schools.get_by_udisecode(udisecode):
            raise ConflictError("School with this udisecode already exists")

        school = self._onboard(body)
        logger.info("created school %s (udisecode=%s)", school.school_id, school.udisecode)
        return school

    def get_school(self, school_id: str) -> School:
        school = self._schools.get_by_school_id(school_id)
        if not school:
            raise NotFoundError("School not found")
        return school

    def query_schools(self, *, filters: dict, options: PageOptions) -> QueryResult:
        return self._schools.query(filters=filters, options=options)

    def update_school(self, school_id: str, update_body: dict) -> School:
        self.get_school(school_id)

        fields = {k: _clean(v) for k, v in update_body.items() if k in SCHOOL_FIELDS}
        udisecode = fields.get("udisecode")
        if udisecode:
            other = self._schools.get_by_udisecode(udisecode)
            if other and other.school_id != school_id:
                raise ConflictError("School with this udisecode already exists")

        school = self._schools.update(school_id, fields)
        if not school:
            raise NotFoundError("School not found")
        return school

    def list_blocks(self, *, district: Optional[str] = None) -> Sequence[str]:
        return self._schools.list_blocks(district=district)

    def list_schools_in_block(self, block: str) -> Sequence[dict]:
        return self._schools.list_in_block(block)

    def _process_group(self, records: list[tuple[int, dict]]) -> list[tuple[int, str, dict]]:
        # Records sharing a udisecode run one after another, so only the first
        # of them can be new.
        outcomes: list[tuple[int, str, dict]] = []
        for index, record in records:
            udisecode = _clean(record.get("udisecode"))
            if self._schools.get_by_udisecode(udisecode):
                outcomes.append((index, _DUPLICATE, record))
                continue
            try:
                school = self._onboard(record)
            except DuplicateRecordError as e:
                if e.key != "uq_schools_udisecode":
                    raise
                outcomes.append((index, _DUPLICATE, record))
                continue
            outcomes.append((index, _CREATED, {**record, "schoolId": school.school_id}))
        return outcomes

    def bulk_upload(self, schools: Optional[Sequence[dict]], file_path: Optional[str] = None) -> dict:
        """Onboard a batch of schools, skipping those whose udisecode exists.

        An empty batch is answered with an error-flagged result instead of an
        exception.
        """

        records = read_rows(file_path) if file_path else list(schools or [])
        if not records:
            return {"error": True, "message": "missing array"}

        groups: dict[str, list[tuple[int, dict]]] = {}
        outcomes: list[tuple[int, str, dict]] = []
        for index, record in enumerate(records):
            udisecode = _clean(record.get("udisecode"))
            if not udisecode:
                outcomes.append((index, _REJECTED, record))
                continue
            groups.setdefault(udisecode, []).append((index, record))

        if groups:
            workers = min(self._bulk_workers, len(groups))
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="school-bulk") as pool:
                futures = [pool.submit(self._process_group, group) for group in groups.values()]
                for future in futures:
                    outcomes.extend(future.result())

        outcomes.sort(key=lambda o: o[0])
        created = [payload for _, kind, payload in outcomes if kind == _CREATED]
        dups = [payload for _, kind, payload in outcomes if kind == _DUPLICATE]
        rejected = [payload for _, kind, payload in outcomes if kind == _REJECTED]

        logger.info(
            "school bulk upload: %d new, %d duplicates, %d rejected", len(created), len(dups), len(rejected)
        )
        return {
            "nonduplicates": {"totalNonDuplicates": len(created), "data": created},
            "duplicates": {"totalDuplicates": len(dups), "data": dups},
            "rejected": {"totalRejected": len(rejected), "data": rejected},
        }
