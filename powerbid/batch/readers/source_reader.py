"""
Generic source reader dispatching on the source id scheme.
"""

from typing import Protocol

from .file_source import FileSource
from .http_source import HttpSource


class BytesSource(Protocol):
    """Anything that can fetch raw bytes for a source id."""

    async def fetch(self, source_id: str) -> bytes:
        ...


class SourceReader:
    """
    Reads raw payload bytes from a file path or an http(s) URL.
    """

    def __init__(
        self,
        file_source: FileSource | None = None,
        http_source: HttpSource | None = None,
    ):
        """
        Initialize source reader.

        Args:
            file_source: Reader for local paths
            http_source: Reader for http:// and https:// ids
        """
        self.file_source = file_source or FileSource()
        self.http_source = http_source or HttpSource()

    async def fetch(self, source_id: str) -> bytes:
        """
        Fetch bytes for source_id.

        Raises:
            RetrievalError: If the underlying source fails
        """
        if source_id.lower().startswith(("http://", "https://")):
            return await self.http_source.fetch(source_id)
        return await self.file_source.fetch(source_id)
