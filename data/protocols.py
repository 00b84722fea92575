"""
Data Layer Protocol Definitions

This module defines typing.Protocol interfaces for content storage.
These protocols let the post collection load from any source of
content files, making it testable without touching the file system.

Protocols defined:
- ContentStore: Interface for listing and reading content files
"""

from typing import Protocol, List


class ContentStore(Protocol):
    """Protocol defining the interface for a store of post content files.

    Implementations should provide methods for:
    - Listing the content files in a stable, deterministic order
    - Reading one content file as text

    The file system implementation lives in services.content_store; tests
    can pass any object with the same two methods.
    """

    def list_sources(self) -> List[str]:
        """List every content file in the store.

        Returns:
            Store-relative identifiers (paths), sorted. The order decides
            which post wins when two declare the same slug.
        """
        ...

    def read(self, source: str) -> str:
        """Read one content file.

        Args:
            source: An identifier returned by list_sources().

        Returns:
            The full text of the file.

        Raises:
            OSError: If the file cannot be read.
            UnicodeDecodeError: If the file is not valid text.
        """
        ...
