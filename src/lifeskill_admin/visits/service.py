from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Optional

from ..common.datetime_utils import iso_date, iso_datetime
from ..common.pagination import PageOptions, QueryResult
from ..core.constants import VISIT_NOTIFICATION_TITLE
from ..core.enums import Role, VisitStatus
from ..core.exceptions import ConflictError, DuplicateRecordError, NotFoundError, NotificationError
from ..notifications.push import PushNotifier
from ..schools.repository import SchoolRepository
from ..students.repository import StudentRepository
from ..users.model import User
from ..users.repository import UserRepository
from .model import VISIT_UPDATE_FIELDS, Visit
from .repository import VisitRepository

logger = logging.getLogger(__name__)


class VisitService:
    """Use cases around trainer visits: scheduling, attendance updates, reports."""

    def __init__(
        self,
        visits: VisitRepository,
        users: UserRepository,
        schools: SchoolRepository,
        students: StudentRepository,
        notifier: PushNotifier,
    ):
        self._visits = visits
        self._users = users
        self._schools = schools
        self._students = students
        self._notifier = notifier

    def _require_trainer(self, trainer_id: int) -> User:
        trainer = self._users.get_by_id(int(trainer_id))
        if not trainer:
            raise NotFoundError("Trainer not found")
        return trainer

    def schedule_visit(
        self,
        *,
        trainer_id: int,
        school_id: str,
        visit_date: date,
        time: str,
        standard: Optional[str] = None,
    ) -> Visit:
        trainer = self._require_trainer(trainer_id)
        if not self._schools.get_by_school_id(school_id):
            raise NotFoundError("School not found")

        if self._visits.find_slot(trainer_id=trainer.user_id, school_id=school_id, visit_date=visit_date, time=time):
            raise ConflictError("Visit scheduled already found")

        try:
            visit = self._visits.create_for_trainer(
                trainer_id=trainer.user_id,
                school_id=school_id,
                visit_date=visit_date,
                time=time,
                standard=standard,
            )
        except DuplicateRecordError as e:
            # Lost the race against a concurrent request for the same slot.
            raise ConflictError("Visit scheduled already found") from e

        logger.info("scheduled visit %s: trainer=%s school=%s %s %s", visit.visit_id, trainer.user_id, school_id, visit_date, time)

        if trainer.device_token:
            self._notify_assignment(trainer, visit)
        return visit

    def _notify_assignment(self, trainer: User, visit: Visit) -> None:
        body = f"You have been assigned a visit to {visit.school_id} on {iso_date(visit.visit_date)} at {visit.time}"
        try:
            self._notifier.send_message(trainer.device_token, VISIT_NOTIFICATION_TITLE, body)
        except NotificationError as e:
            # The visit stays scheduled; delivery is best-effort.
            logger.warning("visit %s: notification to trainer %s failed: %s", visit.visit_id, trainer.user_id, e)

    def update_visit(self, *, school_id: str, trainer_id: int, update_body: dict) -> Visit:
        """Merge attendance/evidence fields into the trainer's visit at a school.

        The visit becomes completed once all six attendance fields are set;
        otherwise its status is left as it was.
        """

        visit = self._visits.find_for_school_and_trainer(school_id=school_id, trainer_id=int(trainer_id))
        if not visit:
            raise NotFoundError("Visit not found")

        changes = {k: v for k, v in update_body.items() if k in VISIT_UPDATE_FIELDS}
        updated = replace(visit, **changes)
        if updated.has_attendance():
            updated = replace(updated, status=VisitStatus.COMPLETED)

        if (updated.visit_date, updated.time) != (visit.visit_date, visit.time):
            other = self._visits.find_slot(
                trainer_id=visit.trainer_id,
                school_id=visit.school_id,
                visit_date=updated.visit_date,
                time=updated.time,
            )
            if other and other.visit_id != visit.visit_id:
                raise ConflictError("Visit scheduled already found")

        try:
            return self._visits.save(updated)
        except DuplicateRecordError as e:
            raise ConflictError("Visit scheduled already found") from e

    def delete_visit(self, visit_id: int) -> Visit:
        visit = self._visits.get_by_id(int(visit_id))
        if not visit:
            raise NotFoundError("Visit not found")
        self._require_trainer(visit.trainer_id)

        self._visits.delete_for_trainer(visit_id=visit.visit_id, trainer_id=visit.trainer_id)
        logger.info("deleted visit %s of trainer %s", visit.visit_id, visit.trainer_id)
        return visit

    def get_visit(self, visit_id: int) -> Visit:
        visit = self._visits.get_by_id(int(visit_id))
        if not visit:
            raise NotFoundError("Visit not found")
        return visit

    def query_visits(self, *, filters: dict, options: PageOptions) -> QueryResult:
        return self._visits.query(filters=filters, options=options)

    def get_trainer_visits(self, trainer_id: int, status: Optional[VisitStatus] = None) -> list[dict]:
        rows = self._visits.list_for_trainer_with_school(trainer_id=int(trainer_id), status=status)
        return [
            {
                "id": visit.visit_id,
                "visitDate": iso_date(visit.visit_date),
                "time": visit.time,
                "standard": visit.standard,
                "status": visit.status.value,
                "createdAt": iso_datetime(visit.created_at),
                "school": school.to_dict(),
            }
            for visit, school in rows
        ]

    def get_visits_by_school(self, school_id: str) -> list[dict]:
        visits = self._visits.list_for_school(school_id)
        if not visits:
            raise NotFoundError("Visits not found")

        trainers: dict[int, Optional[User]] = {}
        out: list[dict] = []
        for visit in visits:
            if visit.trainer_id not in trainers:
                trainers[visit.trainer_id] = self._users.get_by_id(visit.trainer_id)
            trainer = trainers[visit.trainer_id]
            counselor = trainer.contact_dict() if trainer and trainer.role == Role.TRAINER else None
            out.append(
                {
                    "visit": visit.to_dict(),
                    "counselor": counselor,
                    "createdAt": iso_datetime(visit.created_at),
                }
            )
        return out

    def get_trainer_summary(self, trainer_id: int) -> dict:
        school_ids = list(dict.fromkeys(self._visits.school_ids_for_trainer(int(trainer_id))))
        return {
            "totalSchools": len(school_ids),
            "totalStudents": self._students.count_for_schools(school_ids),
            "statusCounts": dict(self._visits.status_counts_for_trainer(int(trainer_id))),
        }
