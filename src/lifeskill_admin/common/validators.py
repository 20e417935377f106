from __future__ import annotations

from typing import Any, Optional, Type, TypeVar

import pydantic

from ..core.exceptions import ValidationError

SchemaT = TypeVar("SchemaT", bound=pydantic.BaseModel)


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def validate_payload(schema: Type[SchemaT], data: Any) -> SchemaT:
    """Validate a request body/query/params mapping against a pydantic schema.

    The first failing field is reported; the request never reaches a service.
    """

    try:
        return schema.model_validate(data if data is not None else {})
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        loc = ".".join(str(p) for p in first.get("loc", ())) or "body"
        raise ValidationError(f'"{loc}" {first.get("msg", "is invalid")}') from e
