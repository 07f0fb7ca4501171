from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

# Resolve repo root from this file's location:
# app/settings.py → parent = app/ → parent = repo root
REPO_ROOT = Path(__file__).resolve().parents[1]

DEFAULT_DATABASE = REPO_ROOT / "data" / "browser.db"


@dataclass
class Settings:
    """
    Centralized application configuration.

    Does NOT depend on pydantic. Values are loaded from environment
    variables via Settings.from_env().
    """

    # --- Database ---
    database_path: str = str(DEFAULT_DATABASE)
    sqlite_timeout: float = 5.0

    # --- Zero affected rows on update/delete → 404 instead of success ---
    strict_row_match: bool = False

    # --- Logging ---
    log_level: str = "INFO"

    # --- App version ---
    app_version: str = "dev"

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build Settings from environment variables with sane fallbacks.

        DATABASE_PATH can be absolute or relative; relative paths are
        resolved against REPO_ROOT.
        """

        def getenv_float(name: str, default: float) -> float:
            raw = os.getenv(name)
            if raw is None or raw.strip() == "":
                return default
            try:
                return float(raw)
            except ValueError:
                return default

        def getenv_bool(name: str, default: bool) -> bool:
            raw = os.getenv(name)
            if raw is None or raw.strip() == "":
                return default
            return raw.strip().lower() in ("1", "true", "yes", "on")

        raw_db = os.getenv("DATABASE_PATH", "").strip()
        if raw_db:
            db_candidate = Path(raw_db)
            if not db_candidate.is_absolute():
                db_candidate = REPO_ROOT / raw_db
        else:
            db_candidate = DEFAULT_DATABASE

        return cls(
            database_path=str(db_candidate),
            sqlite_timeout=getenv_float("SQLITE_TIMEOUT", cls.sqlite_timeout),
            strict_row_match=getenv_bool("STRICT_ROW_MATCH", cls.strict_row_match),
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
            app_version=os.getenv("APP_VERSION", cls.app_version),
        )


@lru_cache()
def get_settings() -> Settings:
    return Settings.from_env()
