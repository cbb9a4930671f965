"""
Outcome of validating a whole dataset (ephemeral, used during a load).
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .bid_record import ValidatedRecord


class DatasetShape(str, Enum):
    """Accepted top-level layouts of a decoded payload."""

    BARE_ARRAY = "bare_array"
    ENVELOPE = "envelope"


class RecordRejection(BaseModel):
    """
    A record dropped during validation, with the reason.

    Attributes:
        index: 0-based position in the input sequence
        field_name: Field that failed ("<record>" if the record itself was unusable)
        rule_name: Rule type that rejected it
        message: Human-readable reason
        raw_payload: The offending input element
    """

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0)
    field_name: str
    rule_name: str
    message: str
    raw_payload: Any = None

    def describe(self) -> str:
        """One-line warning text, numbering records from 1."""
        return f"record {self.index + 1}: {self.field_name}: {self.message}"


class DatasetValidationResult(BaseModel):
    """
    Accepted records plus the rejections that stayed under the quality gate.

    Attributes:
        shape: Which payload layout was found
        records: Validated records, in input order
        rejections: Dropped records
        total_records: Number of elements in the input sequence
    """

    model_config = ConfigDict(frozen=True)

    shape: DatasetShape
    records: list[ValidatedRecord] = Field(default_factory=list)
    rejections: list[RecordRejection] = Field(default_factory=list)
    total_records: int = Field(..., ge=0)

    @property
    def rejected_count(self) -> int:
        return len(self.rejections)

    @property
    def rejection_ratio(self) -> float:
        if self.total_records == 0:
            return 0.0
        return self.rejected_count / self.total_records

    @property
    def warnings(self) -> list[str]:
        return [rejection.describe() for rejection in self.rejections]
