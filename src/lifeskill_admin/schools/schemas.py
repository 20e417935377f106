from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..common.schemas import PageQuery


class CreateSchoolBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid", coerce_numbers_to_str=True)

    name: str = Field(min_length=1)
    contact_number: Optional[str] = None
    address: Optional[str] = None
    udisecode: Optional[str] = None
    district: Optional[str] = None
    block: Optional[str] = None
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    mob_number: Optional[str] = Field(default=None, alias="mobNumber")

    def record(self) -> dict:
        data = self.model_dump(exclude={"first_name", "last_name", "mob_number"})
        data.update(firstname=self.first_name, lastname=self.last_name, mobNumber=self.mob_number)
        return data


class SchoolQuery(PageQuery):
    name: Optional[str] = None
    district: Optional[str] = None
    block: Optional[str] = None


class SchoolParams(BaseModel):
    school_id: str = Field(min_length=1)


class UpdateSchoolBody(BaseModel):
    model_config = ConfigDict(extra="forbid", coerce_numbers_to_str=True)

    name: Optional[str] = None
    contact_number: Optional[str] = None
    address: Optional[str] = None
    udisecode: Optional[str] = None
    district: Optional[str] = None
    block: Optional[str] = None

    @model_validator(mode="after")
    def _at_least_one(self):
        if not self.model_fields_set:
            raise ValueError("must have at least 1 key")
        return self


class BlockQuery(BaseModel):
    model_config = ConfigDict(extra="forbid")

    district: Optional[str] = None


class BlockSchoolsQuery(BaseModel):
    model_config = ConfigDict(extra="forbid")

    block: str = Field(min_length=1)


class BulkSchoolRow(BaseModel):
    # Spreadsheet exports carry arbitrary extra columns; they are kept as-is.
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    name: Optional[str] = None
    udisecode: Optional[str] = None


class BulkSchoolsBody(BaseModel):
    model_config = ConfigDict(extra="forbid")

    schools: list[BulkSchoolRow] = Field(default_factory=list)
