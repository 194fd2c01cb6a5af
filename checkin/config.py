"""Environment-variable-based configuration for the daily check-in job."""

from __future__ import annotations

import os
from pathlib import Path

FORGE_USER_ID: str = os.environ.get("FORGE_USER_ID", "default")
FORGE_DATA_DIR: Path = Path(os.environ.get("FORGE_DATA_DIR", "~/.forge")).expanduser()
FORGE_PLAN_DIR: Path = Path(os.environ.get("FORGE_PLAN_DIR", "plans")).expanduser()
FORGE_MAX_PLAN_ATTEMPTS: int = int(os.environ.get("FORGE_MAX_PLAN_ATTEMPTS", "3"))
CHECKIN_HOUR: int = int(os.environ.get("CHECKIN_HOUR", "6"))
CHECKIN_MINUTE: int = int(os.environ.get("CHECKIN_MINUTE", "0"))
