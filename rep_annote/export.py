# rep_annote/export.py
from __future__ import annotations

import json
import logging
import os
import tempfile
from typing import Dict

from .domain import ExportDocument, InvalidIntervalError, RepInterval, Session
from .timeutils import parse_timestamp
from .validation import INVALID_INTERVAL_MESSAGE, is_valid_session

logger = logging.getLogger(__name__)


# -----------------------------
# Session -> ExportDocument
# -----------------------------

def encode_session(session: Session) -> ExportDocument:
    """
    Project a validated session into the export document.

    Raises InvalidIntervalError (and produces nothing) if any rep is invalid.
    Set and rep order are kept as-is; it is also the playback order.
    """
    if not is_valid_session(session):
        raise InvalidIntervalError(INVALID_INTERVAL_MESSAGE)

    data = tuple(
        tuple(
            RepInterval(start=parse_timestamp(rep.start), end=parse_timestamp(rep.end))
            for rep in s
        )
        for s in session.sets
    )
    return ExportDocument(
        youtube_url=session.youtube_url,
        exercise_type=session.exercise_type.value,
        exercise_data=data,
    )


def export_to_json(doc: ExportDocument) -> str:
    return json.dumps(doc.to_dict(), indent=2, ensure_ascii=False)


# -----------------------------
# Atomic file write
# -----------------------------

def _atomic_write_text(path: str, text: str, encoding: str = "utf-8") -> None:
    d = os.path.dirname(os.path.abspath(path))
    os.makedirs(d, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(prefix=".tmp_", dir=d)
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)


def save_export(path: str, doc: ExportDocument) -> str:
    """Writes the document as 2-space indented UTF-8 JSON. Returns the written path."""
    if not path:
        raise ValueError("export path is required")
    _atomic_write_text(path, export_to_json(doc) + "\n")
    logger.info("Exported %d set(s) to %s", len(doc.exercise_data), path)
    return path


def log_export(doc: ExportDocument) -> Dict:
    """Mirror the document to the log channel. Returns the dict that was logged."""
    payload = doc.to_dict()
    logger.info("Data submitted: %s", export_to_json(doc))
    return payload
