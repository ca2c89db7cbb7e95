"""
Implementation of SaveRepository using one JSON file per game

Rotation on every save:
1. generate a fresh code (timestamp, millisecond precision)
2. write `<code>.json`
3. only then delete the file of the previous code

A crash between 2. and 3. leaves one stale file behind, never a lost game. On the next load both files show up
as separate records and the most recent code wins.
"""

import logging
import os
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Optional

from src.breakthrough.game_record import GameRecord
from src.breakthrough.leaderboard import LeaderboardSnapshot, recompute
from src.core.config import INTEGRITY_TOLERANCE, StorageSettings
from src.core.exceptions import (
    IntegrityViolationError,
    PersistenceError,
    RepositoryError,
)
from src.db.error_log import ErrorLog
from src.db.schema import SaveData

logger = logging.getLogger(__name__)

CODE_DATETIME_FORMAT = "%Y%m%d%H%M%S"
CODE_LENGTH = 17  # yyyyMMddHHmmss + 3 digits of milliseconds
SAVE_SUFFIX = ".json"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_code(moment: datetime) -> str:
    """ex. 2024-03-01 14:05:09.042 UTC -> '20240301140509042'"""
    return f"{moment.strftime(CODE_DATETIME_FORMAT)}{moment.microsecond // 1000:03d}"


def parse_code(code: str) -> Optional[datetime]:
    """Reverse of format_code. None if the string is not a code."""
    if len(code) != CODE_LENGTH or not code.isdigit():
        return None
    try:
        moment = datetime.strptime(code[:14], CODE_DATETIME_FORMAT)
    except ValueError:
        return None
    return moment.replace(microsecond=int(code[14:]) * 1000, tzinfo=timezone.utc)


class CodeGenerator:
    """
    Strictly increasing codes for as long as this generator lives.

    Two saves within the same millisecond would otherwise get the same name, and the second save would then delete
    the file it just wrote. So a code that is not newer than the last one becomes last one + 1 ms.
    NOTE: no protection against the clock being set back between runs.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        self._clock = clock
        self._last: Optional[datetime] = None

    def generate(self) -> str:
        now = self._clock()
        moment = now.replace(microsecond=now.microsecond // 1000 * 1000)
        if self._last is not None and moment <= self._last:
            moment = self._last + timedelta(milliseconds=1)
        self._last = moment
        return format_code(moment)


class JsonSaveStore:
    """Saves live in `<base_dir>/Saves`, next to the top-scores file and the error log."""

    def __init__(
        self,
        settings: StorageSettings,
        code_generator: Optional[CodeGenerator] = None,
    ) -> None:
        self.settings = settings
        self.codes = code_generator or CodeGenerator()
        self.error_log = ErrorLog(settings.error_log_path)

    def generate_code(self) -> str:
        return self.codes.generate()

    def file_path(self, unique_code: str) -> Path:
        return self.settings.saves_dir / f"{unique_code}{SAVE_SUFFIX}"

    # -- WRITING --
    def persist(self, record: GameRecord) -> GameRecord:
        """Store the record under a fresh code, drop the file of its previous code. Returns the record with the new code."""
        new_code = self.generate_code()
        stored = replace(record, unique_code=new_code)
        new_path = self.file_path(new_code)
        try:
            self._ensure_saves_dir()
            self._write(new_path, SaveData.from_record(stored).to_json())
        except OSError as exc:
            raise PersistenceError(f"Could not save game to {new_path}: {exc}") from exc
        logger.debug("Saved %s (move %d)", new_path.name, stored.move_count)

        if record.unique_code is not None:
            self._delete_stale(self.file_path(record.unique_code))
        return stored

    def _write(self, path: Path, content: str) -> None:
        """Write to a temporary file first, so a reader never sees a half-written save."""
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            tmp_path.write_text(content, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise

    def _delete_stale(self, path: Path) -> None:
        """The new save is already on disk at this point: a leftover file is recoverable, so only warn."""
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not delete previous save %s: %s", path, exc)

    # -- READING --
    def load_all(self) -> list[GameRecord]:
        """Every readable save, most recent first. A broken file is logged and skipped, never aborts the load."""
        self._ensure_saves_dir()
        records: list[GameRecord] = []
        for path in sorted(self.settings.saves_dir.glob(f"*{SAVE_SUFFIX}")):
            try:
                records.append(self._load_file(path))
            except Exception as exc:
                self.error_log.record(path, exc)
        return sorted(records, key=lambda record: record.unique_code or "", reverse=True)

    def load(self, unique_code: str) -> GameRecord:
        for record in self.load_all():
            if record.unique_code == unique_code:
                logger.info("Loaded save %s", unique_code)
                return record
        raise RepositoryError(f"No readable save with code {unique_code!r}.")

    def _load_file(self, path: Path) -> GameRecord:
        data = SaveData.from_json(path.read_text(encoding="utf-8"))
        self._check_integrity(path, data.unique_code)
        return data.to_record()

    def _check_integrity(self, path: Path, stored_code: str) -> None:
        """
        The file name is a timestamp taken right before the file was written.
        Anything that edits the file later moves its modification time away from that timestamp.
        """
        if stored_code != path.stem:
            raise IntegrityViolationError(
                f"UniqueCode {stored_code!r} does not match file name {path.name!r}."
            )
        encoded = parse_code(path.stem)
        if encoded is None:
            return
        modified = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)
        if abs(modified - encoded) > INTEGRITY_TOLERANCE:
            raise IntegrityViolationError(
                f"File write time {modified.isoformat()} and code {path.stem} do not match."
            )

    # -- LEADERBOARD --
    def refresh_top_scores(self) -> LeaderboardSnapshot:
        snapshot = recompute(self.load_all())
        try:
            self.settings.top_scores_path.write_text(
                "\n".join(snapshot.to_lines()) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            raise PersistenceError(
                f"Could not write {self.settings.top_scores_path}: {exc}"
            ) from exc
        return snapshot

    def read_top_scores(self) -> list[str]:
        """Regenerated in full before every read, so the file always exists and is up to date."""
        self.refresh_top_scores()
        return self.settings.top_scores_path.read_text(encoding="utf-8").splitlines()

    def _ensure_saves_dir(self) -> None:
        self.settings.saves_dir.mkdir(parents=True, exist_ok=True)
