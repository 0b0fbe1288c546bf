"""Shared configuration helpers for the citations package."""
import logging
import os
from pathlib import Path
from typing import Dict, List

logger = logging.getLogger(__name__)

DEFAULT_SECRET_FILE = Path(__file__).resolve().parents[2] / "secrets" / "citations.env"
_ENV_LOADED = False


def get_config_value(key: str, default: str = "") -> str:
    """Get configuration value from Streamlit secrets or environment variables.

    Checks Streamlit secrets first (for cloud deployment), then falls back
    to environment variables (for local development).
    """
    _ensure_env_file()
    try:
        import streamlit as st
        if hasattr(st, "secrets") and key in st.secrets:
            return str(st.secrets[key])
    except ImportError:
        pass
    except Exception as exc:  # no secrets.toml outside a deployed app
        logger.debug("Streamlit secrets unavailable for %s: %s", key, exc)

    return os.getenv(key, default)


def parse_env_text(text: str) -> Dict[str, str]:
    """Return the ``KEY=value`` pairs of a dotenv-style file; an ``export`` prefix is allowed."""

    values: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if line.startswith("export "):
            line = line[len("export "):]
        key, separator, value = line.partition("=")
        key = key.strip()
        if not separator or not key or key.startswith("#"):
            continue
        values[key] = value.strip().strip("\"'")
    return values


def load_secret_file(path: Path) -> List[str]:
    """Export the file's settings that the environment does not already define.

    Returns the keys that were applied; a missing or unreadable file applies none.
    """

    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    except OSError as exc:
        logger.warning("Could not read secrets file %s: %s", path, exc)
        return []

    pairs = parse_env_text(text)
    applied = [key for key in pairs if key not in os.environ]
    for key in applied:
        os.environ[key] = pairs[key]
    if applied:
        logger.debug("Loaded %d settings from %s", len(applied), path)
    return applied


def _ensure_env_file() -> None:
    """Load the local secrets file once per process."""

    global _ENV_LOADED
    if _ENV_LOADED:
        return

    _ENV_LOADED = True
    secret_location = os.getenv("CITATIONS_SECRET_FILE")
    path = Path(secret_location).expanduser() if secret_location else DEFAULT_SECRET_FILE
    load_secret_file(path)
