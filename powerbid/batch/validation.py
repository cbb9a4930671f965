"""
Dataset-level validation.

Resolves the payload shape, validates every record through the RuleEngine
and applies the quality gate.
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from powerbid.core.exceptions import (
    DataQualityError,
    EmptyDatasetError,
    MalformedDatasetError,
    NoValidRecordsError,
    ValidationError,
)
from powerbid.core.models import DatasetShape, DatasetValidationResult, RecordRejection, ValidatedRecord
from powerbid.core.rules import RuleEngine
from powerbid.core.rules.rule_config import DEFAULT_MAX_REJECTION_RATIO
from powerbid.observability.logger import get_logger
from powerbid.observability.metrics import record_dataset_validation, record_validation_failure

logger = get_logger(__name__)


def resolve_shape(decoded: Any) -> tuple[DatasetShape, list[Any]]:
    """
    Map a decoded JSON value onto one of the accepted layouts.

    Accepted:
    - BARE_ARRAY: ``[{...}, {...}]``
    - ENVELOPE:   ``{"data": [{...}, {...}]}``

    Raises:
        EmptyDatasetError: decoded is None
        MalformedDatasetError: any other layout
    """
    if decoded is None:
        raise EmptyDatasetError()

    if isinstance(decoded, list):
        return DatasetShape.BARE_ARRAY, decoded

    if isinstance(decoded, Mapping) and isinstance(decoded.get("data"), list):
        return DatasetShape.ENVELOPE, decoded["data"]

    raise MalformedDatasetError()


class DatasetValidator:
    """
    Validates a whole decoded payload.

    Per-record failures are collected rather than raised; the dataset as a
    whole fails only when the share of rejected records is strictly greater
    than max_rejection_ratio.
    """

    def __init__(
        self,
        rule_engine: RuleEngine | None = None,
        max_rejection_ratio: float = DEFAULT_MAX_REJECTION_RATIO,
        source_id: str = "unknown",
    ):
        """
        Args:
            rule_engine: Record-level rules (defaults to the built-in bid rules)
            max_rejection_ratio: Quality gate threshold
            source_id: Label used in logs and metrics
        """
        self.rule_engine = rule_engine or RuleEngine()
        self.max_rejection_ratio = max_rejection_ratio
        self.source_id = source_id

    def validate(self, decoded: Any, now: datetime | None = None) -> DatasetValidationResult:
        """
        Validate every record of a decoded payload.

        Args:
            decoded: Result of JSON decoding
            now: Reference time for date checks

        Returns:
            DatasetValidationResult with accepted records and rejections

        Raises:
            EmptyDatasetError, MalformedDatasetError, DataQualityError, NoValidRecordsError
        """
        shape, items = resolve_shape(decoded)
        if len(items) == 0:
            raise EmptyDatasetError()

        records: list[ValidatedRecord] = []
        rejections: list[RecordRejection] = []

        for index, item in enumerate(items):
            try:
                records.append(self.rule_engine.validate_record(item, index, now=now))
            except ValidationError as e:
                rejections.append(
                    RecordRejection(
                        index=index,
                        field_name=e.field_name,
                        rule_name=e.rule_name,
                        message=e.message,
                        raw_payload=item,
                    )
                )
                record_validation_failure(self.source_id, e.rule_name, e.field_name)

        total = len(items)
        record_dataset_validation(self.source_id, len(records), len(rejections))

        if rejections:
            warnings = [rejection.describe() for rejection in rejections]
            logger.warning(
                f"Dataset validation dropped {len(rejections)}/{total} records",
                extra={"source_id": self.source_id, "rejections": warnings},
            )
            if len(rejections) / total > self.max_rejection_ratio:
                raise DataQualityError(len(rejections), total)

        if not records:
            raise NoValidRecordsError()

        return DatasetValidationResult(
            shape=shape,
            records=records,
            rejections=rejections,
            total_records=total,
        )


def validate_dataset(
    decoded: Any,
    rule_engine: RuleEngine | None = None,
    max_rejection_ratio: float = DEFAULT_MAX_REJECTION_RATIO,
    now: datetime | None = None,
) -> list[ValidatedRecord]:
    """
    Validate a decoded payload and return only the accepted records.

    Convenience wrapper around DatasetValidator for callers that do not need
    the rejection details.
    """
    validator = DatasetValidator(rule_engine, max_rejection_ratio)
    return validator.validate(decoded, now=now).records
