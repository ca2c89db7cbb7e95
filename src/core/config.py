"""Configuration: board limits and where files are stored."""

import os
from datetime import timedelta
from pathlib import Path
from typing import Self

from pydantic import BaseModel, ConfigDict

# Board dimensions, bounds inclusive
MIN_HEIGHT = 6
MAX_HEIGHT = 16
MIN_WIDTH = 4
MAX_WIDTH = 16
DEFAULT_HEIGHT = 8
DEFAULT_WIDTH = 8

# A save file whose modification time drifts further than this from its code is considered tampered with
INTEGRITY_TOLERANCE = timedelta(milliseconds=100)

HOME_ENV_VAR = "BREAKTHROUGH_HOME"


class StorageSettings(BaseModel):
    """All file locations derive from a single base directory."""

    model_config = ConfigDict(frozen=True)

    base_dir: Path

    @classmethod
    def from_env(cls) -> Self:
        """Use $BREAKTHROUGH_HOME if set, otherwise the current working directory."""
        base_dir = os.environ.get(HOME_ENV_VAR)
        return cls(base_dir=Path(base_dir) if base_dir else Path.cwd())

    @property
    def saves_dir(self) -> Path:
        return self.base_dir / "Saves"

    @property
    def top_scores_path(self) -> Path:
        return self.base_dir / "top-scores.txt"

    @property
    def error_log_path(self) -> Path:
        return self.base_dir / "error.log"
