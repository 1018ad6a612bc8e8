from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

# Base data dir: repository_root/data (we are in backend/notemarks/)
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[2] / "data"

DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


def _split_csv(value: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    metadata_timeout_seconds: float = 5.0
    metadata_user_agent: str = DEFAULT_USER_AGENT
    log_level: str = "INFO"
    cors_origins: tuple[str, ...] = field(default=("*",))

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            data_dir=Path(os.getenv("APP_DATA_DIR", str(DEFAULT_DATA_DIR))),
            metadata_timeout_seconds=_float_env("METADATA_TIMEOUT_SECONDS", 5.0),
            metadata_user_agent=os.getenv("METADATA_USER_AGENT", DEFAULT_USER_AGENT),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            cors_origins=_split_csv(os.getenv("CORS_ORIGINS", "*")) or ("*",),
        )
