"""
Dataset export writers.
"""

from .export import SUPPORTED_FORMATS, export, to_csv, to_json

__all__ = [
    "SUPPORTED_FORMATS",
    "export",
    "to_csv",
    "to_json",
]
