from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import iso_datetime

STUDENT_FIELDS = ("school_id", "name", "standard", "gender", "mob_number", "roll_number")


@dataclass(frozen=True)
class Student:
    student_id: int
    school_id: str
    name: str
    standard: Optional[str] = None
    gender: Optional[str] = None
    mob_number: Optional[str] = None
    roll_number: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.student_id,
            "schoolId": self.school_id,
            "name": self.name,
            "standard": self.standard,
            "gender": self.gender,
            "mobNumber": self.mob_number,
            "rollNumber": self.roll_number,
            "createdAt": iso_datetime(self.created_at),
        }


@dataclass(frozen=True)
class NewStudent:
    school_id: str
    name: str
    standard: Optional[str] = None
    gender: Optional[str] = None
    mob_number: Optional[str] = None
    roll_number: Optional[str] = None
