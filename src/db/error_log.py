"""Append-only log of save files that could not be loaded"""

import json
import logging
from datetime import datetime
from enum import StrEnum
from pathlib import Path

from src.core.exceptions import (
    IntegrityViolationError,
    MalformedJsonError,
    MalformedRecordError,
)

logger = logging.getLogger(__name__)


class LoadErrorKind(StrEnum):
    MALFORMED_JSON = "MalformedJson"
    MALFORMED_RECORD = "MalformedRecord"
    IO_ERROR = "IoError"
    ACCESS_DENIED = "AccessDenied"
    INTEGRITY_VIOLATION = "IntegrityViolation"
    UNKNOWN = "Unknown"


def classify(exc: Exception) -> LoadErrorKind:
    # NOTE: PermissionError is an OSError, so it must be checked first
    if isinstance(exc, PermissionError):
        return LoadErrorKind.ACCESS_DENIED
    if isinstance(exc, (MalformedJsonError, json.JSONDecodeError, UnicodeDecodeError)):
        return LoadErrorKind.MALFORMED_JSON
    if isinstance(exc, MalformedRecordError):
        return LoadErrorKind.MALFORMED_RECORD
    if isinstance(exc, IntegrityViolationError):
        return LoadErrorKind.INTEGRITY_VIOLATION
    if isinstance(exc, OSError):
        return LoadErrorKind.IO_ERROR
    return LoadErrorKind.UNKNOWN


def format_timestamp(moment: datetime) -> str:
    """ex. 2024-03-01 14:05:09:042"""
    return f"{moment:%Y-%m-%d %H:%M:%S}:{moment.microsecond // 1000:03d}"


class ErrorLog:
    """One tab-separated line per failure: timestamp, file, kind, message"""

    def __init__(self, path: Path) -> None:
        self.path = path

    def record(self, file_path: Path, exc: Exception) -> LoadErrorKind:
        kind = classify(exc)
        message = " ".join(str(exc).split()) or type(exc).__name__
        line = "\t".join([format_timestamp(datetime.now()), str(file_path), kind, message])

        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as log_file:
            log_file.write(line + "\n")

        logger.warning("Skipped save %s (%s): %s", file_path, kind, message)
        return kind

    def lines(self) -> list[str]:
        if not self.path.exists():
            return []
        return self.path.read_text(encoding="utf-8").splitlines()
