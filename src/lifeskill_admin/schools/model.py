from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role

SCHOOL_FIELDS = ("name", "contact_number", "address", "udisecode", "district", "block")


@dataclass(frozen=True)
class School:
    id: int
    school_id: str
    name: Optional[str]
    contact_number: Optional[str] = None
    address: Optional[str] = None
    udisecode: Optional[str] = None
    district: Optional[str] = None
    block: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "schoolId": self.school_id,
            "name": self.name,
            "contact_number": self.contact_number,
            "address": self.address,
            "udisecode": self.udisecode,
            "district": self.district,
            "block": self.block,
        }


@dataclass(frozen=True)
class NewSchool:
    school_id: str
    name: Optional[str]
    contact_number: Optional[str] = None
    address: Optional[str] = None
    udisecode: Optional[str] = None
    district: Optional[str] = None
    block: Optional[str] = None


@dataclass(frozen=True)
class SchoolAccount:
    """Login created alongside every onboarded school (username = schoolId)."""

    username: str
    password_hash: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    mob_number: Optional[str] = None
    role: Role = Role.SCHOOL
