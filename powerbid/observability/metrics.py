"""
Prometheus metrics collection for powerbid

This module provides metrics instrumentation for monitoring
load performance, data quality and cache behaviour.
"""
import os

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

# Global registry for metrics
REGISTRY = CollectorRegistry()


# =======================
# LOAD METRICS
# =======================

loads_total = Counter(
    name="powerbid_loads_total",
    documentation="Total number of dataset loads",
    labelnames=["source_id", "status"],  # status: success, failure, cached, rejected
    registry=REGISTRY,
)

load_duration_seconds = Histogram(
    name="powerbid_load_duration_seconds",
    documentation="Time spent fetching, validating and processing a dataset",
    labelnames=["source_id"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0],
    registry=REGISTRY,
)

cache_entries = Gauge(
    name="powerbid_cache_entries",
    documentation="Number of processed datasets held in the cache",
    registry=REGISTRY,
)

# =======================
# DATA QUALITY METRICS
# =======================

records_processed_total = Counter(
    name="powerbid_records_processed_total",
    documentation="Total number of records seen by the dataset validator",
    labelnames=["source_id", "status"],  # status: valid, invalid
    registry=REGISTRY,
)

validation_failures_total = Counter(
    name="powerbid_validation_failures_total",
    documentation="Total number of record validation failures",
    labelnames=["source_id", "rule_type", "field_name"],
    registry=REGISTRY,
)

dataset_rejection_ratio = Gauge(
    name="powerbid_dataset_rejection_ratio",
    documentation="Share of invalid records in the most recent dataset",
    labelnames=["source_id"],
    registry=REGISTRY,
)

# =======================
# ERROR METRICS
# =======================

errors_total = Counter(
    name="powerbid_errors_total",
    documentation="Total number of errors",
    labelnames=["source_id", "error_type", "component"],
    registry=REGISTRY,
)


# =======================
# HELPER FUNCTIONS
# =======================

def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics in text format

    Returns:
        Metrics in Prometheus text format
    """
    return generate_latest(REGISTRY)


def get_content_type() -> str:
    """
    Get content type for Prometheus metrics

    Returns:
        Content type string
    """
    return CONTENT_TYPE_LATEST


def start_metrics_server(port: int | None = None) -> None:
    """
    Start HTTP server for Prometheus metrics

    Args:
        port: Port to listen on (defaults to env var METRICS_PORT or 8000)
    """
    # Imported lazily so that importing this module never binds a port
    from prometheus_client import start_http_server

    metrics_port = port or int(os.getenv("METRICS_PORT", "8000"))
    start_http_server(metrics_port, registry=REGISTRY)


def increment_counter(counter: Counter, value: float = 1.0, **labels) -> None:
    """
    Increment a counter metric

    Args:
        counter: Prometheus Counter metric
        value: Amount to increment (default: 1.0)
        **labels: Label values for the metric
    """
    if labels:
        counter.labels(**labels).inc(value)
    else:
        counter.inc(value)


def set_gauge(gauge: Gauge, value: float, **labels) -> None:
    """
    Set a gauge metric value

    Args:
        gauge: Prometheus Gauge metric
        value: Value to set
        **labels: Label values for the metric
    """
    if labels:
        gauge.labels(**labels).set(value)
    else:
        gauge.set(value)


def observe_histogram(histogram: Histogram, value: float, **labels) -> None:
    """
    Observe a value in a histogram metric

    Args:
        histogram: Prometheus Histogram metric
        value: Value to observe
        **labels: Label values for the metric
    """
    histogram.labels(**labels).observe(value)


# =======================
# PIPELINE HELPERS
# =======================

def record_dataset_validation(source_id: str, valid_records: int, invalid_records: int) -> None:
    """
    Record the outcome of validating one dataset.

    Args:
        source_id: Data source ID
        valid_records: Records accepted
        invalid_records: Records rejected
    """
    increment_counter(records_processed_total, valid_records, source_id=source_id, status="valid")
    increment_counter(records_processed_total, invalid_records, source_id=source_id, status="invalid")

    total = valid_records + invalid_records
    if total > 0:
        set_gauge(dataset_rejection_ratio, invalid_records / total, source_id=source_id)


def record_validation_failure(source_id: str, rule_type: str, field_name: str) -> None:
    """
    Record a validation failure.

    Args:
        source_id: Data source ID
        rule_type: Type of validation rule that failed
        field_name: Name of field that failed validation
    """
    increment_counter(validation_failures_total, 1, source_id=source_id, rule_type=rule_type, field_name=field_name)


def record_error(source_id: str, error: BaseException, component: str) -> None:
    """
    Record a fatal error.

    Args:
        source_id: Data source ID
        error: The exception raised
        component: Component that raised it (e.g. "loader", "validator")
    """
    increment_counter(errors_total, 1, source_id=source_id, error_type=type(error).__name__, component=component)
