from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..common.schemas import PageQuery
from ..core.enums import VisitRequestKind
from .model import NewVisitRequest


class CreateVisitRequestBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    kind: VisitRequestKind = VisitRequestKind.LIFE_TRAINER
    school_id: str = Field(alias="schoolId", min_length=1)
    visit_date: date = Field(alias="visitDate")
    time: Optional[str] = None
    standard: Optional[str] = None
    school_name: Optional[str] = Field(default=None, alias="schoolName")
    school_cluster: Optional[str] = Field(default=None, alias="schoolCluster")

    def to_new_request(self) -> NewVisitRequest:
        return NewVisitRequest(**self.model_dump())


class VisitRequestQuery(PageQuery):
    kind: Optional[VisitRequestKind] = None
    school_id: Optional[str] = Field(default=None, alias="schoolId")
