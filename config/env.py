import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")  # optional; safe if file missing


def env(key: str, default=None, cast=str):
    val = os.getenv(key, default)
    if val is None:
        return None
    if cast is bool:
        return str(val).lower() in ("1", "true", "yes", "y", "on")
    if cast is int:
        try:
            return int(val)
        except (TypeError, ValueError):
            return int(default) if default is not None else None
    if cast is list:
        return [x.strip() for x in str(val).split(",") if x.strip()]
    return cast(val)
