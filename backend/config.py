"""
Runtime settings, read from the environment (and backend/.env if present).
See .env.example for the full list.
"""
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _int_env(name: str, default: int, minimum: Optional[int] = None) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")
    if minimum is not None and value < minimum:
        raise ValueError(f"{name} must be at least {minimum}, got {value}")
    return value


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///baraka.db")

# Frontend origins allowed to call the API
CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if o.strip()
]

FOCUS_MINUTES = _int_env("FOCUS_MINUTES", 25, minimum=1)
BREAK_MINUTES = _int_env("BREAK_MINUTES", 5, minimum=1)

# Empty means sign-in/sign-up are disabled (routes answer 503)
AUTH_PROVIDER_URL = (os.getenv("AUTH_PROVIDER_URL") or "").strip().rstrip("/")
AUTH_TIMEOUT_SECONDS = _int_env("AUTH_TIMEOUT_SECONDS", 10)

LOG_LEVEL = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
LOG_FILE = (os.getenv("LOG_FILE") or "").strip()

HOST = os.getenv("HOST", "127.0.0.1")
PORT = _int_env("PORT", 8000)
