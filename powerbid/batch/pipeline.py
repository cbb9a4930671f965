"""
Load orchestration.

Coordinates the flow: fetch -> decode -> validate -> process -> cache,
behind a single-flight guard and a per-instance dataset cache.
"""

import json
import time
from pathlib import Path

from powerbid.batch.processing import process
from powerbid.batch.readers import BytesSource, SourceReader
from powerbid.batch.validation import DatasetValidator
from powerbid.core.exceptions import ConcurrentLoadError, MalformedDatasetError
from powerbid.core.models import CacheInfo, DatasetValidationResult, ProcessedRecord
from powerbid.core.rules import RuleConfigLoader, RuleEngine
from powerbid.core.rules.rule_config import DEFAULT_MAX_REJECTION_RATIO, DEFAULT_PRICE_UNIT
from powerbid.observability.events import LoadEvent, LoadEventBus
from powerbid.observability.logger import get_logger
from powerbid.observability.metrics import (
    cache_entries,
    increment_counter,
    load_duration_seconds,
    loads_total,
    observe_histogram,
    record_error,
    set_gauge,
)
from powerbid.utils.validation import validate_source_id

logger = get_logger(__name__)


class BidDataPipeline:
    """
    Owns the dataset cache and the in-flight flag for one consumer.

    Flow of a load:
    1. Serve from cache if allowed and present
    2. Refuse if another load is running on this instance
    3. Fetch raw bytes through the source collaborator
    4. Decode JSON and validate (quality gate applies)
    5. Sort, clean and enrich
    6. Store in the cache and return

    Loading-state and error notifications go out through ``events``.
    """

    def __init__(
        self,
        source: BytesSource | None = None,
        rule_engine: RuleEngine | None = None,
        max_rejection_ratio: float = DEFAULT_MAX_REJECTION_RATIO,
        price_unit: str = DEFAULT_PRICE_UNIT,
        events: LoadEventBus | None = None,
    ):
        """
        Initialize the pipeline.

        Args:
            source: Bytes collaborator (defaults to file/http SourceReader)
            rule_engine: Record rules (defaults to built-in bid rules)
            max_rejection_ratio: Dataset quality gate threshold
            price_unit: Unit label for formatted prices
            events: Listener registry for the presentation layer
        """
        self.source = source or SourceReader()
        self.rule_engine = rule_engine or RuleEngine()
        self.max_rejection_ratio = max_rejection_ratio
        self.price_unit = price_unit
        self.events = events or LoadEventBus()

        self._cache: dict[str, list[ProcessedRecord]] = {}
        self._loading = False

        self.last_loaded: list[ProcessedRecord] | None = None
        self.last_validation: DatasetValidationResult | None = None

    @classmethod
    def from_config(
        cls,
        validation_rules_path: str | Path,
        source: BytesSource | None = None,
        events: LoadEventBus | None = None,
    ) -> "BidDataPipeline":
        """Build a pipeline from a validation rules YAML file."""
        loader = RuleConfigLoader(validation_rules_path)
        return cls(
            source=source,
            rule_engine=RuleEngine(loader.load_rules()),
            max_rejection_ratio=loader.load_max_rejection_ratio(),
            price_unit=loader.load_price_unit(),
            events=events,
        )

    @property
    def is_loading(self) -> bool:
        return self._loading

    async def load(self, source_id: str, use_cache: bool = True) -> list[ProcessedRecord]:
        """
        Load, validate and process the dataset behind source_id.

        Args:
            source_id: File path or URL handed to the source collaborator
            use_cache: Serve a cached dataset if one exists

        Returns:
            Processed dataset (shared with the cache; treat as read-only)

        Raises:
            ConcurrentLoadError: Another load is in flight on this instance
            RetrievalError: Transport failure
            MalformedDatasetError, EmptyDatasetError, DataQualityError,
            NoValidRecordsError: Payload rejected
            ProcessingError: Derivation failed
        """
        source_id = validate_source_id(source_id)

        if use_cache and source_id in self._cache:
            logger.info(f"Serving {source_id} from cache")
            increment_counter(loads_total, source_id=source_id, status="cached")
            return self._cache[source_id]

        if self._loading:
            increment_counter(loads_total, source_id=source_id, status="rejected")
            error = ConcurrentLoadError(source_id)
            logger.warning(str(error))
            self.events.emit(LoadEvent.DATA_ERROR, str(error))
            raise error

        self._loading = True
        self.events.emit(LoadEvent.LOADING_STATE_CHANGED, True)
        start = time.perf_counter()

        try:
            logger.info(f"Loading data: {source_id}")
            payload = await self.source.fetch(source_id)
            decoded = self._decode(payload)

            validator = DatasetValidator(self.rule_engine, self.max_rejection_ratio, source_id=source_id)
            result = validator.validate(decoded)
            if result.rejections:
                self.events.emit(LoadEvent.VALIDATION_WARNING, result.warnings)

            dataset = process(result.records, unit_label=self.price_unit)

            self._cache[source_id] = dataset
            set_gauge(cache_entries, len(self._cache))
            self.last_validation = result
            self.last_loaded = dataset

            increment_counter(loads_total, source_id=source_id, status="success")
            logger.info(f"Loaded {len(dataset)} records from {source_id}")
            return dataset

        except Exception as e:
            increment_counter(loads_total, source_id=source_id, status="failure")
            record_error(source_id, e, component="loader")
            logger.error(f"Data load failed for {source_id}: {e}", extra={"error_type": type(e).__name__})
            self.events.emit(LoadEvent.DATA_ERROR, str(e))
            raise

        finally:
            observe_histogram(load_duration_seconds, time.perf_counter() - start, source_id=source_id)
            self._loading = False
            self.events.emit(LoadEvent.LOADING_STATE_CHANGED, False)

    @staticmethod
    def _decode(payload: bytes):
        # Integer literals are read as floats; oversized ones become inf and
        # are rejected per record by the number rule.
        try:
            return json.loads(payload, parse_int=float)
        except ValueError as e:
            raise MalformedDatasetError(f"Payload is not valid JSON: {e}") from e

    def clear_cache(self) -> None:
        """Evict every cached dataset."""
        self._cache.clear()
        set_gauge(cache_entries, 0)
        logger.info("Data cache cleared")

    def cache_info(self) -> CacheInfo:
        """Number of cached datasets and their source ids."""
        return CacheInfo(size=len(self._cache), keys=list(self._cache.keys()))
