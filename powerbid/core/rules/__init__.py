"""
Validation rule engine and configuration management.
"""

from .rule_config import RuleConfigBuilder, RuleConfigLoader, default_bid_rules
from .rule_engine import RECORD_FIELDS, RuleEngine

__all__ = [
    "RuleEngine",
    "RuleConfigLoader",
    "RuleConfigBuilder",
    "default_bid_rules",
    "RECORD_FIELDS",
]
