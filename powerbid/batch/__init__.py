"""
Dataset loading: validation, processing, sources and export.
"""

from .pipeline import BidDataPipeline
from .processing import process
from .readers import FileSource, HttpSource, SourceReader
from .validation import DatasetValidator, validate_dataset
from .writers import export

__all__ = [
    "BidDataPipeline",
    "DatasetValidator",
    "FileSource",
    "HttpSource",
    "SourceReader",
    "export",
    "process",
    "validate_dataset",
]
