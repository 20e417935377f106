"""Read uploaded CSV/XLSX sheets into plain row dicts."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd

from ..core.constants import ALLOWED_UPLOAD_EXTENSIONS
from ..core.exceptions import ValidationError


def read_rows(path: str | Path) -> list[dict[str, Any]]:
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in ALLOWED_UPLOAD_EXTENSIONS:
        raise ValidationError(f"Unsupported file type: {suffix or path.name}")

    if suffix == ".xlsx":
        df = pd.read_excel(path, dtype=str, engine="openpyxl")
    else:
        df = pd.read_csv(path, dtype=str, keep_default_na=False, skipinitialspace=True)

    df = df.fillna("")
    df.columns = [str(c).strip() for c in df.columns]

    rows: list[dict[str, Any]] = []
    for record in df.to_dict(orient="records"):
        row = {k: (str(v).strip() or None) for k, v in record.items() if k}
        if any(v is not None for v in row.values()):
            rows.append(row)
    return rows
