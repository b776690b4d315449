import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

REPO_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(REPO_ROOT / ".env")

logger = logging.getLogger("repobrowser.config")


@dataclass(frozen=True)
class Settings:
    github_api_base_url: str
    github_timeout: int
    github_user_agent: str
    log_level: str
    cors_origins: str
    host: str
    port: int


def _env_int(name: str, default: int, minimum: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid %s=%r, fallback to %s", name, raw, default)
        return default
    if minimum is not None and value < minimum:
        logger.warning("Out-of-range %s=%r, fallback to %s", name, raw, default)
        return default
    return value


def _env_nonempty(name: str, default: str) -> str:
    value = os.getenv(name, default)
    return value if str(value).strip() else default


def get_settings() -> Settings:
    return Settings(
        github_api_base_url=_env_nonempty("GITHUB_API_BASE_URL", "https://api.github.com").rstrip("/"),
        github_timeout=_env_int("GITHUB_TIMEOUT", 30, minimum=1),
        github_user_agent=_env_nonempty("GITHUB_USER_AGENT", "repo-browser"),
        log_level=_env_nonempty("LOG_LEVEL", "INFO").upper(),
        cors_origins=os.getenv("CORS_ORIGINS", "http://localhost:3000"),
        host=_env_nonempty("HOST", "127.0.0.1"),
        port=_env_int("PORT", 8000, minimum=1),
    )
