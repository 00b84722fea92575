"""
Custom Exception Classes for the Portfolio Content Pipeline

This module defines custom exceptions for better error handling and
categorization of failures across the application.
"""


class PortfolioError(Exception):
    """Base exception for all portfolio content errors."""
    pass


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(PortfolioError):
    """Raised when configuration validation fails or required settings are missing."""
    pass


# =============================================================================
# Record Schema Errors
# =============================================================================

class SchemaError(PortfolioError):
    """Raised when a hand-authored record (social, presentation, project) is malformed."""
    pass


# =============================================================================
# Content Errors
# =============================================================================

class ContentError(PortfolioError):
    """Base exception for content-related errors."""
    pass


class MalformedFrontMatterError(ContentError):
    """Raised when a content file's front-matter block is missing, unterminated or invalid."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: {reason}")


class DuplicateSlugError(ContentError):
    """Raised when two content files resolve to the same slug."""

    def __init__(self, slug: str, first: str, second: str):
        self.slug = slug
        self.first = first
        self.second = second
        super().__init__(f"Duplicate slug '{slug}' in {first} and {second}")


class ContentStoreError(ContentError):
    """Raised when the content store itself cannot be scanned."""
    pass


# =============================================================================
# Link Checking Errors
# =============================================================================

class LinkCheckError(PortfolioError):
    """Raised when one or more external links are unreachable."""
    pass
