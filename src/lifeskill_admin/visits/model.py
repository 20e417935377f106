from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import iso_date, iso_datetime
from ..core.constants import ATTENDANCE_FIELDS
from ..core.enums import VisitStatus

# Fields a trainer/school may change after scheduling.
VISIT_UPDATE_FIELDS = ("visit_date", "time", "standard") + ATTENDANCE_FIELDS


@dataclass(frozen=True)
class Visit:
    """Domain entity: a life-skill trainer's visit to a school."""

    visit_id: int
    trainer_id: int
    school_id: str
    visit_date: date
    time: str
    standard: Optional[str] = None
    status: VisitStatus = VisitStatus.SCHEDULED
    in_time: Optional[str] = None
    out_time: Optional[str] = None
    in_date: Optional[date] = None
    out_date: Optional[date] = None
    file: Optional[str] = None
    file1: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def has_attendance(self) -> bool:
        """True when every attendance/evidence field is filled in."""
        return all(getattr(self, name) for name in ATTENDANCE_FIELDS)

    def to_dict(self) -> dict:
        return {
            "id": self.visit_id,
            "trainer": self.trainer_id,
            "schoolId": self.school_id,
            "visitDate": iso_date(self.visit_date),
            "time": self.time,
            "standard": self.standard,
            "status": self.status.value,
            "inTime": self.in_time,
            "outTime": self.out_time,
            "inDate": iso_date(self.in_date),
            "outDate": iso_date(self.out_date),
            "file": self.file,
            "file1": self.file1,
            "createdAt": iso_datetime(self.created_at),
            "updatedAt": iso_datetime(self.updated_at),
        }
