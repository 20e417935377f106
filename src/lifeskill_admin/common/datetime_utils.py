from __future__ import annotations

from datetime import date, datetime
from typing import Optional


def iso_date(value: Optional[date]) -> Optional[str]:
    return value.strftime("%Y-%m-%d") if value else None


def iso_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None
