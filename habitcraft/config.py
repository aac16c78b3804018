"""
App configuration, read from the environment, and logging setup.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass

from habitcraft.db import DB_PATH_DEFAULT

STORAGE_KEY_DEFAULT = "habits"


@dataclass(frozen=True)
class AppConfig:
    db_path: str = DB_PATH_DEFAULT
    storage_key: str = STORAGE_KEY_DEFAULT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "AppConfig":
        return cls(
            db_path=os.getenv("HABITCRAFT_DB_PATH", DB_PATH_DEFAULT),
            storage_key=os.getenv("HABITCRAFT_STORAGE_KEY", STORAGE_KEY_DEFAULT),
            log_level=os.getenv("HABITCRAFT_LOG_LEVEL", "INFO").upper(),
        )


def setup_logging(level: str = "INFO") -> logging.Logger:
    level_value = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=level_value,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # Streamlit's own loggers are chatty at INFO
    logging.getLogger("streamlit").setLevel(logging.WARNING)
    return logging.getLogger("habitcraft")
