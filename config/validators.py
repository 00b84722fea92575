"""
Configuration Validation for the Portfolio Content Pipeline

This module contains configuration validation logic.
Kept apart from settings.py so settings stay a plain list of values.
"""

import logging

from utils.exceptions import ConfigurationError


def validate_settings():
    """
    Validate that all required settings are properly configured.

    Raises:
        ConfigurationError: If required settings are missing or invalid.
    """
    # Import settings here to avoid circular imports
    from config import settings

    logger = logging.getLogger(__name__)
    errors = []

    if not settings.CONTENT_DIR:
        errors.append("Missing required setting: CONTENT_DIR")

    if not settings.CONTENT_EXTENSIONS:
        errors.append("CONTENT_EXTENSIONS must list at least one file extension")

    # Validate numeric settings are within reasonable bounds
    numeric_validations = [
        ("SCAN_WORKERS", settings.SCAN_WORKERS, 1, 64),
        ("LINK_CHECK_WORKERS", settings.LINK_CHECK_WORKERS, 1, 64),
        ("LIST_DESCRIPTION_LENGTH", settings.LIST_DESCRIPTION_LENGTH, 10, 1000),
    ]

    for name, value, min_val, max_val in numeric_validations:
        if value < min_val or value > max_val:
            errors.append(f"{name} must be between {min_val} and {max_val}, got {value}")

    # Validate timeout values are positive
    timeout_settings = [
        ("LINK_CHECK_TIMEOUT", settings.LINK_CHECK_TIMEOUT),
    ]

    for name, value in timeout_settings:
        if value <= 0:
            errors.append(f"{name} must be positive, got {value}")

    if settings.SHOW_DRAFTS:
        logger.warning("SHOW_DRAFTS is enabled: unpublished posts can be looked up by slug.")

    # Raise all errors at once
    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ConfigurationError(error_msg)

    return True


def get_config_summary() -> dict:
    """
    Returns a summary of current configuration.
    Useful for logging startup state.
    """
    # Import settings here to avoid circular imports
    from config import settings

    return {
        "content": {
            "directory": str(settings.CONTENT_DIR),
            "extensions": list(settings.CONTENT_EXTENSIONS),
            "show_drafts": settings.SHOW_DRAFTS,
            "scan_workers": settings.SCAN_WORKERS,
            "warn_on_slug_mismatch": settings.WARN_ON_SLUG_MISMATCH,
        },
        "link_check": {
            "timeout": settings.LINK_CHECK_TIMEOUT,
            "workers": settings.LINK_CHECK_WORKERS,
        },
        "manifest_path": str(settings.MANIFEST_PATH),
    }
