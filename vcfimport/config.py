"""Configuration loading from environment variables and defaults."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_PROJECT_ROOT / ".env")


def _env(key: str, default: str = "") -> str:
    return os.environ.get(key, default)


def _env_int(key: str, default: int) -> int:
    raw = _env(key, str(default))
    try:
        return int(raw)
    except ValueError:
        logging.getLogger(__name__).warning(
            "Invalid %s %r, falling back to %d", key, raw, default,
        )
        return default


# Upload limits for the preview endpoint
MAX_UPLOAD_BYTES = _env_int("VCF_MAX_UPLOAD_BYTES", 5 * 1024 * 1024)
ALLOWED_EXTENSIONS = tuple(
    ext.strip().lower()
    for ext in _env("VCF_ALLOWED_EXTENSIONS", ".vcf,.contact").split(",")
    if ext.strip()
)

_level_name = _env("VCF_LOG_LEVEL", "INFO").upper()
if isinstance(logging.getLevelName(_level_name), int):
    LOG_LEVEL = _level_name
else:
    logging.getLogger(__name__).warning(
        "Invalid VCF_LOG_LEVEL %r, falling back to INFO", _level_name,
    )
    LOG_LEVEL = "INFO"
