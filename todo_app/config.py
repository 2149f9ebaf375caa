from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

def _resolve_project_root() -> Path:
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parents[1]


PROJECT_ROOT = _resolve_project_root()


def load_env() -> None:
    env_name = os.getenv("APP_ENV", "development")
    candidates = [Path.cwd(), PROJECT_ROOT]
    for base in candidates:
        env_path = base / ".env"
        if env_path.exists():
            load_dotenv(env_path)
            break

    for base in candidates:
        env_specific = base / f".env.{env_name}"
        if env_specific.exists():
            load_dotenv(env_specific, override=True)
            break


@dataclass(frozen=True)
class Settings:
    database_url: str
    storage_key: str = "todos_app_data"
    log_level: str = "INFO"
    log_dir: str = "logs"
    export_dir: str = "."


load_env()

DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{PROJECT_ROOT / 'todos.db'}").strip()
if not DATABASE_URL:
    raise RuntimeError("DATABASE_URL is empty. Unset it or point it at a database.")

SETTINGS = Settings(
    database_url=DATABASE_URL,
    storage_key=os.getenv("STORAGE_KEY", "").strip() or "todos_app_data",
    log_level=os.getenv("LOG_LEVEL", "INFO"),
    log_dir=os.getenv("LOG_DIR", "logs"),
    export_dir=os.getenv("EXPORT_DIR", "").strip() or ".",
)
