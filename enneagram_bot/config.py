from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent
DATA_DIR = (BASE_DIR / "data").resolve()

DEFAULT_TABLE_FILE = "enneagram_full_combinations.tsv"
DEFAULT_RESTART_KEYWORD = "테스트"


@dataclass(frozen=True)
class Settings:
    """Configuration container for data sources, storage and session limits."""
    table_path: Path
    table_delimiter: str
    database_url: str
    restart_keyword: str
    session_ttl_sec: int
    max_sessions: int


def load_settings() -> Settings:
    """Purpose: Load configuration from environment variables and defaults.
    Inputs/Outputs: No inputs; returns a Settings instance.
    Side Effects / State: Reads environment variables and filesystem paths.
    Dependencies: Uses os.getenv and DATA_DIR for default paths.
    Failure Modes: Invalid SESSION_TTL_SEC/MAX_SESSIONS env values raise ValueError.
    If Removed: App cannot locate the classification source or result database.
    Testing Notes: Verify defaults and overrides via environment variables.
    """
    # Resolve table and database locations, then build Settings.
    table_path = os.getenv("TABLE_PATH")
    if table_path:
        table_file = Path(table_path)
    else:
        table_file = DATA_DIR / DEFAULT_TABLE_FILE

    return Settings(
        table_path=table_file,
        table_delimiter=os.getenv("TABLE_DELIMITER") or "\t",
        database_url=os.getenv("DATABASE_URL") or f"sqlite:///{DATA_DIR / 'enneagram.db'}",
        restart_keyword=os.getenv("RESTART_KEYWORD") or DEFAULT_RESTART_KEYWORD,
        session_ttl_sec=int(os.getenv("SESSION_TTL_SEC", "0")),
        max_sessions=int(os.getenv("MAX_SESSIONS", "0")),
    )
