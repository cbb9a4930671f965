"""
Raw payload sources.
"""

from .file_source import FileSource
from .http_source import HttpSource
from .source_reader import BytesSource, SourceReader

__all__ = [
    "BytesSource",
    "FileSource",
    "HttpSource",
    "SourceReader",
]
