"""
Local file source.
"""

import asyncio
from pathlib import Path

from powerbid.core.exceptions import RetrievalError


class FileSource:
    """
    Reads raw bytes from the local filesystem.

    Relative source ids are resolved against base_dir.
    """

    def __init__(self, base_dir: str | Path | None = None):
        """
        Initialize file source.

        Args:
            base_dir: Directory relative paths are resolved against (default: cwd)
        """
        self.base_dir = Path(base_dir) if base_dir else None

    def resolve(self, source_id: str) -> Path:
        path = Path(source_id)
        if self.base_dir is not None and not path.is_absolute():
            path = self.base_dir / path
        return path

    async def fetch(self, source_id: str) -> bytes:
        """
        Read the file behind source_id.

        Raises:
            RetrievalError: If the file is missing or unreadable
        """
        path = self.resolve(source_id)
        try:
            return await asyncio.to_thread(path.read_bytes)
        except FileNotFoundError:
            raise RetrievalError(source_id, "file not found", status=404)
        except OSError as e:
            raise RetrievalError(source_id, str(e))
