"""
Content Store Module

This module reads post content files from a directory tree. The directory
is the source of truth for posts; this layer never writes to it.
"""

import os
from pathlib import Path
from typing import Iterable, List, Optional

from config import settings
from utils.exceptions import ContentStoreError
from utils.logger import get_logger

logger = get_logger(__name__)


class DirectoryContentStore:
    """Content store backed by a directory of markdown files."""

    def __init__(self, root: Optional[str] = None, extensions: Optional[Iterable[str]] = None,
                 encoding: Optional[str] = None):
        """
        Initialize the content store.

        Args:
            root: Directory to scan, defaults to settings.CONTENT_DIR.
            extensions: File extensions to include, defaults to settings.CONTENT_EXTENSIONS.
            encoding: Text encoding of the files, defaults to settings.CONTENT_ENCODING.
        """
        self.root = Path(root if root is not None else settings.CONTENT_DIR)
        exts = extensions if extensions is not None else settings.CONTENT_EXTENSIONS
        self.extensions = tuple(e.lower() for e in exts)
        self.encoding = encoding or settings.CONTENT_ENCODING

    def list_sources(self) -> List[str]:
        """
        List content files below the root directory.

        Returns:
            List[str]: POSIX-style paths relative to the root, sorted.

        Raises:
            ContentStoreError: If the root directory does not exist.
        """
        if not self.root.is_dir():
            raise ContentStoreError(f"Content directory not found: {self.root}")

        sources = []
        for dirpath, dirnames, filenames in os.walk(self.root):
            # skip hidden directories such as .git
            dirnames[:] = [d for d in dirnames if not d.startswith(".")]
            for filename in filenames:
                if filename.startswith("."):
                    continue
                if os.path.splitext(filename)[1].lower() not in self.extensions:
                    continue
                full = Path(dirpath) / filename
                sources.append(full.relative_to(self.root).as_posix())

        sources.sort()
        logger.debug(f"Found {len(sources)} content file(s) in {self.root}")
        return sources

    def read(self, source: str) -> str:
        """
        Read one content file as text.

        Args:
            source: A path returned by list_sources().

        Returns:
            str: The decoded file contents.
        """
        with open(self.root / source, "r", encoding=self.encoding, newline="") as f:
            return f.read()
