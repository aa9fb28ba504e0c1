from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


def looks_like_placeholder(value: str | None) -> bool:
    lower = (value or "").strip().lower()
    if not lower:
        return True
    return (
        lower.startswith("your_")
        or lower.startswith("replace_")
        or lower in {"changeme", "todo", "your_key_here", "your_groq_api_key_here"}
    )


@dataclass(frozen=True)
class Settings:
    port: int
    log_level: str
    sentry_dsn: str | None
    database_path: str
    jwt_secret: str | None
    jwt_algorithm: str
    trust_x_user_id: bool
    groq_api_key: str | None
    groq_model: str
    groq_base_url: str
    groq_timeout_s: float
    rapidapi_key: str | None
    jsearch_host: str
    jsearch_timeout_s: float
    job_cache_ttl_s: int
    rate_limit: str
    rate_limit_enabled: bool
    cors_allowed_origins: tuple[str, ...]
    cors_allow_credentials: bool


settings = Settings(
    port=_get_env_int("PORT", 5000),
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    database_path=_get_env("DATABASE_PATH", "data/internai.db") or "data/internai.db",
    jwt_secret=_get_env("JWT_SECRET"),
    jwt_algorithm=(_get_env("JWT_ALGORITHM", "HS256") or "HS256").strip().upper(),
    trust_x_user_id=_get_env_bool("TRUST_X_USER_ID", True),
    groq_api_key=_get_env("GROQ_API_KEY"),
    groq_model=(_get_env("GROQ_MODEL", "llama-3.3-70b-versatile") or "llama-3.3-70b-versatile").strip(),
    groq_base_url=_get_env("GROQ_BASE_URL", "https://api.groq.com/openai/v1") or "https://api.groq.com/openai/v1",
    groq_timeout_s=_get_env_float("GROQ_TIMEOUT_S", 30.0),
    rapidapi_key=_get_env("RAPIDAPI_KEY"),
    jsearch_host=_get_env("JSEARCH_HOST", "jsearch.p.rapidapi.com") or "jsearch.p.rapidapi.com",
    jsearch_timeout_s=_get_env_float("JSEARCH_TIMEOUT_S", 15.0),
    job_cache_ttl_s=_get_env_int("JOB_CACHE_TTL_S", 900),
    rate_limit=_get_env("RATE_LIMIT", "60/minute") or "60/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
            "https://ai-internship.onrender.com",
        ],
    ),
    cors_allow_credentials=_get_env_bool("CORS_ALLOW_CREDENTIALS", True),
)

if settings.jwt_algorithm not in {"HS256", "HS384", "HS512"}:
    raise RuntimeError("JWT_ALGORITHM must be one of HS256, HS384, HS512.")

if settings.job_cache_ttl_s <= 0:
    raise RuntimeError("JOB_CACHE_TTL_S must be a positive number of seconds.")

if not settings.trust_x_user_id and not settings.jwt_secret:
    raise RuntimeError("TRUST_X_USER_ID=0 requires JWT_SECRET to be set, otherwise no request can authenticate.")
