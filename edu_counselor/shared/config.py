import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _get_env(name: str, default: Optional[str] = None) -> str:
    val = os.getenv(name, default)
    if val is None or val.strip() == "":
        raise RuntimeError(f"Missing required environment variable: {name}")
    return val.strip()


def _parse_origins(raw: str) -> list[str]:
    raw = (raw or "").strip()
    if not raw:
        return ["*"]
    if raw == "*":
        return ["*"]
    return [o.strip() for o in raw.split(",") if o.strip()]


DATABASE_URL = _get_env("DATABASE_URL", "sqlite:///./edu_counselor.db")
AUTH_SERVICE_URL = _get_env("AUTH_SERVICE_URL", "http://auth-service:8001").rstrip("/")
LOGIN_URL = _get_env("LOGIN_URL", "/auth")
CORS_ORIGINS = _parse_origins(os.getenv("CORS_ORIGINS", "*"))


def auth_hook_secret() -> str | None:
    # read on every call, unset disables the hooks
    val = (os.getenv("AUTH_HOOK_SECRET") or "").strip()
    return val or None
