from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..common.schemas import PageQuery
from .model import NewStudent


class CreateStudentBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid", coerce_numbers_to_str=True)

    school_id: str = Field(alias="schoolId", min_length=1)
    name: str = Field(min_length=1)
    standard: Optional[str] = None
    gender: Optional[str] = None
    mob_number: Optional[str] = Field(default=None, alias="mobNumber")
    roll_number: Optional[str] = Field(default=None, alias="rollNumber")

    def to_new_student(self) -> NewStudent:
        return NewStudent(**self.model_dump())


class StudentQuery(PageQuery):
    name: Optional[str] = None
    school_id: Optional[str] = Field(default=None, alias="schoolId")


class StudentParams(BaseModel):
    student_id: int = Field(gt=0)


class UpdateStudentBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid", coerce_numbers_to_str=True)

    school_id: Optional[str] = Field(default=None, alias="schoolId")
    name: Optional[str] = None
    standard: Optional[str] = None
    gender: Optional[str] = None
    mob_number: Optional[str] = Field(default=None, alias="mobNumber")
    roll_number: Optional[str] = Field(default=None, alias="rollNumber")

    @model_validator(mode="after")
    def _at_least_one(self):
        if not self.model_fields_set:
            raise ValueError("must have at least 1 key")
        if "school_id" in self.model_fields_set and not (self.school_id or "").strip():
            raise ValueError("schoolId cannot be cleared")
        if "name" in self.model_fields_set and not (self.name or "").strip():
            raise ValueError("name cannot be cleared")
        return self


class BulkStudentsBody(BaseModel):
    model_config = ConfigDict(extra="forbid")

    students: list[dict] = Field(default_factory=list)
