# connections_daily/core/env.py
from __future__ import annotations
import os
from dataclasses import dataclass
from dotenv import load_dotenv

KNOWN_KEYS = [
    "CONNECTIONS_PUZZLE_FILE",   # JSON file keyed by YYYY-MM-DD
    "CONNECTIONS_STATE_DIR",     # directory holding one snapshot per date
    "CONNECTIONS_LOG_LEVEL",
]

DEFAULT_PUZZLE_FILE = "puzzles.json"
DEFAULT_STATE_DIR = ".connections_state"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    puzzle_file: str = DEFAULT_PUZZLE_FILE
    state_dir: str = DEFAULT_STATE_DIR
    log_level: str = DEFAULT_LOG_LEVEL


def load_env(dotenv_path: str | None = None) -> dict[str, str]:
    """
    Load .env once. Returns the known keys that are set.
    """
    load_dotenv(dotenv_path or os.getenv("DOTENV_PATH", ".env"), override=False)
    return {k: os.environ[k] for k in KNOWN_KEYS if os.getenv(k)}


def get_settings(dotenv_path: str | None = None) -> Settings:
    found = load_env(dotenv_path)
    return Settings(
        puzzle_file=found.get("CONNECTIONS_PUZZLE_FILE", DEFAULT_PUZZLE_FILE),
        state_dir=found.get("CONNECTIONS_STATE_DIR", DEFAULT_STATE_DIR),
        log_level=found.get("CONNECTIONS_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    )
