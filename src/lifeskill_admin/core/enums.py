from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account roles."""

    ADMIN = "admin"
    SCHOOL = "school"
    SUPERADMIN = "superadmin"
    STUDENT = "student"
    TRAINER = "trainer"
    BLOCK_OFFICER = "block_officer"


class VisitStatus(str, Enum):
    """Lifecycle of a trainer visit."""

    SCHEDULED = "scheduled"
    COMPLETED = "completed"


class VisitRequestKind(str, Enum):
    LIFE_TRAINER = "life_trainer"
    COUNSELLOR = "counsellor"
