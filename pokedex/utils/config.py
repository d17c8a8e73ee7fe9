"""Load and validate environment variables. Uses python-dotenv.

This module is intentionally thin and side-effect free except for loading `.env`.
Callers should use the accessor functions below rather than reading `os.environ`
directly, to keep environment handling consistent.
"""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv
import os


def _project_root() -> Path:
    """Resolve project root (the directory holding the pokedex package)."""
    return Path(__file__).resolve().parent.parent.parent


def load_config() -> None:
    """
    Load .env from project root. Idempotent; safe to call multiple times.
    Uses override=True to ensure .env values take precedence over existing env vars.
    """
    root = _project_root()
    env_path = root / ".env"
    load_dotenv(env_path, override=True)


def get_optional(key: str, default: str = "") -> str:
    """Get optional env var; return default if missing or empty."""
    load_config()
    val = os.getenv(key, "").strip()
    return val if val else default


def get_optional_int(key: str, default: int) -> int:
    """Get optional env var as int; return default if missing or invalid."""
    load_config()
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def get_optional_float(key: str, default: float) -> float:
    """Get optional env var as float; return default if missing or invalid."""
    load_config()
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# --- Public config accessors ---

def pokeapi_base_url() -> str:
    """Optional: PokeAPI root. Default https://pokeapi.co/api/v2 (no trailing slash)."""
    return get_optional("POKEAPI_BASE_URL", "https://pokeapi.co/api/v2").rstrip("/")


def catalog_page_limit() -> int:
    """
    Optional: size of the bounded catalog window. Default 150.
    Non-positive values fall back to the default.
    """
    n = get_optional_int("CATALOG_PAGE_LIMIT", 150)
    return n if n > 0 else 150


def catalog_page_offset() -> int:
    """Optional: offset of the bounded catalog window. Default 0."""
    n = get_optional_int("CATALOG_PAGE_OFFSET", 0)
    return max(n, 0)


def http_timeout_seconds() -> float:
    """Optional: per-request HTTP timeout in seconds. Default 30."""
    return get_optional_float("HTTP_TIMEOUT_SECONDS", 30.0)


def log_level() -> str:
    """Optional: logging level name. Default INFO."""
    return get_optional("LOG_LEVEL", "INFO").upper()


def log_file() -> Path | None:
    """
    Optional: log file path (LOG_FILE). Relative paths resolve against the
    project root. Default None (stderr only).
    """
    raw = get_optional("LOG_FILE", "")
    if not raw:
        return None
    p = Path(raw)
    return p if p.is_absolute() else project_root() / p


def project_root() -> Path:
    """Project root directory."""
    return _project_root()
