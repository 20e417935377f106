from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..common.schemas import PageQuery
from ..core.enums import VisitStatus


class ScheduleVisitBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    trainer_id: int = Field(alias="trainerId", gt=0)
    school_id: str = Field(alias="schoolId", min_length=1)
    visit_date: date = Field(alias="visitDate")
    time: str = Field(min_length=1)
    standard: Optional[str] = None


class TrainerVisitsQuery(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    trainer_id: int = Field(alias="trainerId", gt=0)
    status: Optional[VisitStatus] = None


class VisitListQuery(PageQuery):
    trainer_id: Optional[int] = Field(default=None, alias="trainerId", gt=0)
    school_id: Optional[str] = Field(default=None, alias="schoolId")
    status: Optional[VisitStatus] = None


class VisitParams(BaseModel):
    visit_id: int = Field(gt=0)


class SchoolVisitsParams(BaseModel):
    school_id: str = Field(min_length=1)


class TrainerParams(BaseModel):
    trainer_id: int = Field(gt=0)


class UpdateVisitParams(BaseModel):
    school_id: str = Field(min_length=1)
    trainer_id: int = Field(gt=0)


class UpdateVisitBody(BaseModel):
    """Attendance/evidence fields filled in by the trainer; status is derived."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    visit_date: Optional[date] = Field(default=None, alias="visitDate")
    time: Optional[str] = Field(default=None, min_length=1)
    standard: Optional[str] = None
    in_time: Optional[str] = Field(default=None, alias="inTime")
    out_time: Optional[str] = Field(default=None, alias="outTime")
    in_date: Optional[date] = Field(default=None, alias="inDate")
    out_date: Optional[date] = Field(default=None, alias="outDate")
    file: Optional[str] = None
    file1: Optional[str] = None

    @model_validator(mode="after")
    def _at_least_one(self):
        if not self.model_fields_set:
            raise ValueError("must have at least 1 key")
        if "visit_date" in self.model_fields_set and self.visit_date is None:
            raise ValueError("visitDate cannot be cleared")
        if "time" in self.model_fields_set and self.time is None:
            raise ValueError("time cannot be cleared")
        return self
