from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import iso_date, iso_datetime
from ..core.enums import VisitRequestKind


@dataclass(frozen=True)
class VisitRequest:
    """A school asking for a life-skill trainer or counsellor visit."""

    request_id: int
    kind: VisitRequestKind
    school_id: str
    visit_date: date
    time: Optional[str] = None
    standard: Optional[str] = None
    school_name: Optional[str] = None
    school_cluster: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.request_id,
            "kind": self.kind.value,
            "schoolId": self.school_id,
            "visitDate": iso_date(self.visit_date),
            "time": self.time,
            "standard": self.standard,
            "schoolName": self.school_name,
            "schoolCluster": self.school_cluster,
            "createdAt": iso_datetime(self.created_at),
        }


@dataclass(frozen=True)
class NewVisitRequest:
    kind: VisitRequestKind
    school_id: str
    visit_date: date
    time: Optional[str] = None
    standard: Optional[str] = None
    school_name: Optional[str] = None
    school_cluster: Optional[str] = None
