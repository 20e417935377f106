from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from flask import current_app
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from ..core.constants import ALLOWED_UPLOAD_EXTENSIONS
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)


def save_upload(file: Optional[FileStorage]) -> Optional[Path]:
    """Store a multipart upload under UPLOAD_FOLDER and return its path."""

    if file is None or not file.filename:
        return None

    filename = secure_filename(file.filename)
    suffix = Path(filename).suffix.lower()
    if suffix not in ALLOWED_UPLOAD_EXTENSIONS:
        raise ValidationError("Only .csv and .xlsx files are accepted")

    folder = Path(current_app.config["UPLOAD_FOLDER"])
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / f"{uuid.uuid4().hex}_{filename}"
    file.save(path)
    return path


@contextmanager
def uploaded_sheet(file: Optional[FileStorage]) -> Iterator[Optional[Path]]:
    """Yield the saved upload's path (or None) and delete the file afterwards."""

    path = save_upload(file)
    try:
        yield path
    finally:
        if path is not None:
            try:
                path.unlink()
            except FileNotFoundError:
                logger.warning("upload %s already removed", path)
