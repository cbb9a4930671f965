"""
Pytest configuration and fixtures for powerbid tests

This module provides shared fixtures for unit, integration, and E2E tests.
"""
import json
from datetime import datetime, timezone

import pytest

from powerbid.batch.processing import process
from powerbid.batch.validation import validate_dataset


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't touch the filesystem or network"
    )
    config.addinivalue_line(
        "markers", "integration: Tests that run the load orchestrator end to end"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests that drive the command-line interface"
    )


# =======================
# DATA FIXTURES
# =======================

@pytest.fixture
def now() -> datetime:
    """Fixed reference time for date range checks"""
    return datetime(2025, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def raw_bids() -> list[dict]:
    """
    Four valid bids, deliberately out of date order.

    Prices: 0.40, 0.45, 0.50, 0.60 (mean 0.4875, median 0.475)
    """
    return [
        {
            "user_name": "Jiangsu Steel Works",
            "power_company": "East Grid Retail Co.",
            "bid_date": "2024-01-15",
            "bid_price": 0.45,
        },
        {
            "user_name": "Nanjing Textiles",
            "power_company": "East Grid Retail Co.",
            "bid_date": "2024-03-10",
            "bid_price": "0.60",
        },
        {
            "user_name": "  Suzhou   Chemicals ",
            "power_company": "Yangtze Power Sales",
            "bid_date": "2024-02-20",
            "bid_price": 0.4,
        },
        {
            "user_name": "Jiangsu Steel Works",
            "power_company": "Yangtze Power Sales",
            "bid_date": "2024-06-05",
            "bid_price": 0.5,
        },
    ]


@pytest.fixture
def invalid_bid() -> dict:
    """A bid rejected by the price rule"""
    return {
        "user_name": "Broken Meter Ltd",
        "power_company": "East Grid Retail Co.",
        "bid_date": "2024-04-01",
        "bid_price": "abc",
    }


@pytest.fixture
def validated_bids(raw_bids, now):
    """Validated records in input order"""
    return validate_dataset(raw_bids, now=now)


@pytest.fixture
def processed_dataset(validated_bids):
    """Sorted, cleaned and enriched dataset"""
    return process(validated_bids)


@pytest.fixture
def bids_file(tmp_path, raw_bids):
    """Bare-array payload written to a temporary file"""
    path = tmp_path / "bids.json"
    path.write_text(json.dumps(raw_bids, ensure_ascii=False), encoding="utf-8")
    return path
