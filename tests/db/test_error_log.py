"""Unit tests for src/db/error_log.py"""

import json
from datetime import datetime
from pathlib import Path

import pytest

from src.core.exceptions import (
    IntegrityViolationError,
    MalformedJsonError,
    MalformedRecordError,
)
from src.db.error_log import ErrorLog, LoadErrorKind, classify, format_timestamp


@pytest.mark.parametrize(
    "exc, kind",
    [
        (MalformedJsonError("bad"), LoadErrorKind.MALFORMED_JSON),
        (json.JSONDecodeError("bad", "{", 0), LoadErrorKind.MALFORMED_JSON),
        (MalformedRecordError("missing"), LoadErrorKind.MALFORMED_RECORD),
        (IntegrityViolationError("tampered"), LoadErrorKind.INTEGRITY_VIOLATION),
        (PermissionError("no access"), LoadErrorKind.ACCESS_DENIED),
        (FileNotFoundError("gone"), LoadErrorKind.IO_ERROR),
        (IsADirectoryError("dir"), LoadErrorKind.IO_ERROR),
        (RuntimeError("???"), LoadErrorKind.UNKNOWN),
    ],
)
def test_classify(exc: Exception, kind: LoadErrorKind) -> None:
    assert classify(exc) == kind


def test_format_timestamp() -> None:
    assert format_timestamp(datetime(2024, 3, 1, 14, 5, 9, 42_000)) == "2024-03-01 14:05:09:042"


def test_record_appends_one_line_per_failure(tmp_path: Path) -> None:
    log = ErrorLog(tmp_path / "logs" / "error.log")
    assert log.lines() == []

    kind = log.record(tmp_path / "a.json", MalformedJsonError("line 1\ncolumn 2"))
    log.record(tmp_path / "b.json", PermissionError("denied"))

    assert kind == LoadErrorKind.MALFORMED_JSON
    lines = log.lines()
    assert len(lines) == 2
    assert lines[0].split("\t")[1:] == [
        str(tmp_path / "a.json"),
        "MalformedJson",
        "line 1 column 2",  # collapsed onto one line
    ]
    assert lines[1].split("\t")[2] == "AccessDenied"


def test_exception_without_message(tmp_path: Path) -> None:
    log = ErrorLog(tmp_path / "error.log")
    log.record(tmp_path / "a.json", RuntimeError())
    assert log.lines()[0].split("\t")[3] == "RuntimeError"
