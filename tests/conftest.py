"""
Shared Test Fixtures for the Portfolio Content Pipeline

This module provides common fixtures used across all test modules.
Fixtures include settings overrides, temporary content directories,
an in-memory content store, log capture and mock HTTP responses.
"""

import pytest
from unittest.mock import MagicMock
from typing import Optional, Dict, List
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


# =============================================================================
# Settings Fixtures
# =============================================================================

@pytest.fixture
def test_settings(monkeypatch, tmp_path):
    """
    Override the settings module with safe test values.

    Points CONTENT_DIR and MANIFEST_PATH at a temporary directory so tests
    never read or write the real site content.

    Usage:
        def test_something(test_settings):
            test_settings.SHOW_DRAFTS = True   # restored after the test

    Returns:
        module: The patched config.settings module.
    """
    from config import settings

    content_dir = tmp_path / "content"
    content_dir.mkdir()

    monkeypatch.setattr(settings, "CONTENT_DIR", str(content_dir))
    monkeypatch.setattr(settings, "CONTENT_EXTENSIONS", [".md", ".mdx"])
    monkeypatch.setattr(settings, "SHOW_DRAFTS", False)
    monkeypatch.setattr(settings, "SCAN_WORKERS", 1)
    monkeypatch.setattr(settings, "WARN_ON_SLUG_MISMATCH", True)
    monkeypatch.setattr(settings, "MANIFEST_PATH", str(tmp_path / "dist" / "content.json"))
    monkeypatch.setattr(settings, "LIST_DESCRIPTION_LENGTH", 80)
    monkeypatch.setattr(settings, "LINK_CHECK_TIMEOUT", 5)
    monkeypatch.setattr(settings, "LINK_CHECK_WORKERS", 2)
    monkeypatch.setattr(settings, "REQUEST_HEADERS", {"User-Agent": "Test User Agent"})

    yield settings


# =============================================================================
# Content Fixtures
# =============================================================================

@pytest.fixture
def make_post_text():
    """
    Factory fixture for building content file text.

    Usage:
        text = make_post_text(slug="draft-post", isPublish="false")
        text = make_post_text(body="Hello", omit=["description"])

    Returns:
        callable: Builds a front-matter block plus body.
    """
    def _make(title: str = '"A post"',
              publishedAt: str = "2024-01-01",
              description: str = '"A short description"',
              slug: str = '"a-post"',
              isPublish: str = "true",
              body: str = "Body text.\n",
              omit: Optional[List[str]] = None,
              extra: Optional[Dict[str, str]] = None) -> str:
        fields = {
            "title": title,
            "publishedAt": publishedAt,
            "description": description,
            "slug": slug,
            "isPublish": isPublish,
        }
        for key in omit or []:
            fields.pop(key, None)
        fields.update(extra or {})
        lines = ["---"] + [f"{k}: {v}" for k, v in fields.items()] + ["---"]
        return "\n".join(lines) + "\n" + body

    return _make


@pytest.fixture
def content_dir(test_settings):
    """
    Temporary content directory with a write helper.

    Usage:
        def test_scan(content_dir):
            content_dir.write("hello.md", "---\\n...")

    Returns:
        ContentDir: Wrapper exposing .path and .write(relpath, text).
    """
    from pathlib import Path

    class ContentDir:
        def __init__(self, path):
            self.path = Path(path)

        def write(self, relpath: str, text: str):
            target = self.path / relpath
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")
            return target

    return ContentDir(test_settings.CONTENT_DIR)


class InMemoryContentStore:
    """ContentStore implementation over a dict of source -> text."""

    def __init__(self, files: Dict[str, object]):
        self.files = dict(files)
        self.reads: List[str] = []

    def list_sources(self) -> List[str]:
        return sorted(self.files)

    def read(self, source: str) -> str:
        self.reads.append(source)
        value = self.files[source]
        if isinstance(value, Exception):
            raise value
        return value


@pytest.fixture
def memory_store():
    """
    Factory fixture for in-memory content stores.

    A value that is an exception instance is raised when that file is read.

    Returns:
        callable: Builds an InMemoryContentStore from a dict.
    """
    return InMemoryContentStore


# =============================================================================
# Logging Fixtures
# =============================================================================

@pytest.fixture
def capture_logs():
    """
    Capture log messages for assertion in tests.

    Returns:
        list: A list that will contain captured log records.
    """
    import logging

    class LogCapture(logging.Handler):
        def __init__(self):
            super().__init__()
            self.records = []

        def emit(self, record):
            self.records.append(record)

    handler = LogCapture()
    handler.setLevel(logging.DEBUG)

    root_logger = logging.getLogger()
    original_level = root_logger.level
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(handler)

    yield handler.records

    root_logger.removeHandler(handler)
    root_logger.setLevel(original_level)


# =============================================================================
# HTTP Response Fixtures
# =============================================================================

@pytest.fixture
def mock_http_response():
    """
    Factory fixture for creating mock HTTP responses.

    Usage:
        def test_http_request(mock_http_response):
            response = mock_http_response(status_code=404)

    Returns:
        callable: A factory function for creating mock responses.
    """
    def _create_response(status_code: int = 200, url: str = 'https://example.com') -> MagicMock:
        mock_response = MagicMock()
        mock_response.status_code = status_code
        mock_response.url = url
        mock_response.ok = 200 <= status_code < 300
        return mock_response

    return _create_response
