"""Environment-driven defaults for the documentation middleware."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Final, Optional

from dotenv import load_dotenv

_env_loaded = False


def load_env(*, dotenv_path: Optional[str | Path] = None) -> None:
    """Load a `.env` file once; `SWAGGERDOC_ENV_FILE` overrides the lookup path.

    Values already present in the process environment win.
    """

    global _env_loaded
    if _env_loaded:
        return
    dotenv_path = dotenv_path or os.getenv("SWAGGERDOC_ENV_FILE") or None
    load_dotenv(dotenv_path=dotenv_path, override=False)
    _env_loaded = True


def _parse_bool(value: str | None, *, default: bool = False) -> bool:
    if value is None:
        return default
    value = value.strip().lower()
    return value in {"1", "true", "yes", "on"}


def _env_bool(name: str, *, default: bool = False) -> bool:
    return _parse_bool(os.getenv(name), default=default)


def _env_str(name: str, *, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def default_swagger_version() -> str:
    return _env_str("SWAGGERDOC_DEFAULT_VERSION", default="2.0") or "2.0"


def default_ui_dir() -> Optional[str]:
    return _env_str("SWAGGERDOC_UI_DIR")


def default_base_path() -> Optional[str]:
    return _env_str("SWAGGERDOC_BASE_PATH")


def default_swagger_url() -> str:
    return _env_str("SWAGGERDOC_SWAGGER_URL", default="/docs") or "/docs"


def default_swagger_json() -> str:
    return _env_str("SWAGGERDOC_SWAGGER_JSON", default="/api-docs.json") or "/api-docs.json"


DEFAULT_API_VERSION: Final[str] = "1.0"


def debug_enabled() -> bool:
    return _env_bool("SWAGGERDOC_DEBUG", default=False)


__all__ = [
    "DEFAULT_API_VERSION",
    "debug_enabled",
    "default_base_path",
    "default_swagger_json",
    "default_swagger_url",
    "default_swagger_version",
    "default_ui_dir",
    "load_env",
]
