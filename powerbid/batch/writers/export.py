"""
Serialization of processed datasets for download.
"""

import csv
import io
import json
from collections.abc import Sequence
from typing import Any

from powerbid.core.exceptions import EmptyDatasetError, UnsupportedFormatError
from powerbid.core.models import ProcessedRecord

SUPPORTED_FORMATS = ("json", "csv")


def _serialize(dataset: Sequence[ProcessedRecord]) -> list[dict[str, Any]]:
    return [record.model_dump(mode="json") for record in dataset]


def to_json(dataset: Sequence[ProcessedRecord]) -> str:
    """Pretty-printed JSON array of processed records."""
    return json.dumps(_serialize(dataset), indent=2, ensure_ascii=False)


def to_csv(dataset: Sequence[ProcessedRecord]) -> str:
    """
    CSV with a header row of processed-record field names.

    Values containing a comma, a double quote or a line break are quoted, with
    embedded quotes doubled. Rows are joined with "\\n" and there is no
    trailing newline.
    """
    rows = _serialize(dataset)
    headers = list(rows[0].keys())

    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=headers, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue().rstrip("\n")


def export(fmt: str, dataset: Sequence[ProcessedRecord]) -> str:
    """
    Export a processed dataset.

    Args:
        fmt: "json" or "csv" (case-insensitive)
        dataset: Processed records

    Returns:
        Serialized dataset

    Raises:
        EmptyDatasetError: Nothing to export
        UnsupportedFormatError: Unknown format
    """
    normalized = fmt.lower()
    if normalized not in SUPPORTED_FORMATS:
        raise UnsupportedFormatError(fmt)

    if not dataset:
        raise EmptyDatasetError("No data to export")

    if normalized == "json":
        return to_json(dataset)
    return to_csv(dataset)
