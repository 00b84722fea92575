"""
Configuration Settings for the Portfolio Content Pipeline

This module centralizes all configuration settings for the content pipeline,
including environment variables, content locations and link-check constants.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Determine the application root directory
APP_ROOT = Path(__file__).resolve().parent.parent

# Load environment variables from .env file
load_dotenv(dotenv_path=os.path.join(APP_ROOT, '.env'))


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        # validate_settings() reports the bad value
        return -1


# =============================================================================
# Content Store Settings
# =============================================================================

CONTENT_DIR = os.getenv("CONTENT_DIR", os.path.join(APP_ROOT, "content", "blog"))
CONTENT_EXTENSIONS = [
    ext.strip().lower() if ext.strip().startswith(".") else "." + ext.strip().lower()
    for ext in os.getenv("CONTENT_EXTENSIONS", ".md,.mdx").split(",")
    if ext.strip()
]
CONTENT_ENCODING = "utf-8"

# Draft preview: when true, get_by_slug() also resolves unpublished posts
SHOW_DRAFTS = _env_bool("SHOW_DRAFTS", False)

# Number of threads used to read and parse content files (1 = sequential)
SCAN_WORKERS = _env_int("SCAN_WORKERS", 1)

# Emit a warning when a post's file name does not match its front-matter slug
WARN_ON_SLUG_MISMATCH = _env_bool("WARN_ON_SLUG_MISMATCH", True)

# Output location for the JSON manifest command
MANIFEST_PATH = os.getenv("MANIFEST_PATH", os.path.join(APP_ROOT, "dist", "content.json"))

# =============================================================================
# Listing Settings
# =============================================================================

LIST_DESCRIPTION_LENGTH = 80         # Max description length shown by the `list` command

# =============================================================================
# Link Check Settings
# =============================================================================

LINK_CHECK_TIMEOUT = _env_int("LINK_CHECK_TIMEOUT", 10)     # Seconds per request
LINK_CHECK_WORKERS = _env_int("LINK_CHECK_WORKERS", 8)      # Parallel requests

USER_AGENT = 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36'
REQUEST_HEADERS = {
    'User-Agent': USER_AGENT,
    'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
    'Accept-Language': 'en-US,en;q=0.5',
    'Connection': 'keep-alive',
}


def validate_settings():
    """Validate settings. Delegates to config.validators.validate_settings()."""
    from config.validators import validate_settings as _validate
    return _validate()


def get_config_summary() -> dict:
    """Summary of current configuration. Delegates to config.validators."""
    from config.validators import get_config_summary as _summary
    return _summary()
