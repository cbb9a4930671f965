"""
Rule engine for orchestrating validation rules on bid records.

The rule engine loads validation rules, applies them field by field to a raw
record, and produces a typed ValidatedRecord or raises the first failure.
"""

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from powerbid.core.exceptions import InvalidRecordError, ValidationError
from powerbid.core.models import ValidatedRecord
from powerbid.core.validators import (
    BaseValidator,
    DateValidator,
    NumberValidator,
    RangeValidator,
    RequiredFieldValidator,
    StringValidator,
)
from powerbid.observability.logger import get_logger

from .rule_config import default_bid_rules

logger = get_logger(__name__)

RECORD_FIELDS = ("user_name", "power_company", "bid_date", "bid_price")
REQUIRED_RULES = (
    ("user_name", "string"),
    ("power_company", "string"),
    ("bid_date", "date"),
    ("bid_price", "number"),
    ("bid_price", "range"),
)


class RuleEngine:
    """
    Orchestrates validation rules on bid records.

    Rules are grouped by field, fields are checked in RECORD_FIELDS order and
    rules within a field in configured order. Each validator receives the
    value produced by the one before it, so a number rule's float feeds the
    range rule. The first error-severity failure rejects the record;
    warning-severity failures are logged and the original value is kept.
    """

    VALIDATOR_REGISTRY = {
        "required_field": RequiredFieldValidator,
        "string": StringValidator,
        "number": NumberValidator,
        "range": RangeValidator,
        "date": DateValidator,
    }

    def __init__(self, rules: list[dict[str, Any]] | None = None):
        """
        Initialize the rule engine with validation rules.

        Args:
            rules: List of rule configurations (defaults to default_bid_rules()),
                   each containing:
                   - rule_name: str
                   - rule_type: str (required_field, string, number, range, date)
                   - field_name: str
                   - parameters: Dict[str, Any] (optional)
                   - severity: str (error or warning)
                   - enabled: bool (default True)
        """
        self.rules = rules if rules is not None else default_bid_rules()
        self.validators: dict[str, list[tuple[str, str, BaseValidator]]] = {}
        self._build_validators()
        self._check_coverage()

    def _build_validators(self) -> None:
        """Build validator instances from rule configurations."""
        for rule in self.rules:
            if not rule.get("enabled", True):
                continue

            rule_name = rule["rule_name"]
            rule_type = rule["rule_type"]
            field_name = rule["field_name"]
            parameters = rule.get("parameters") or {}
            severity = rule.get("severity", "error")

            validator_class = self.VALIDATOR_REGISTRY.get(rule_type)
            if not validator_class:
                raise ValueError(f"Unknown rule type: {rule_type}")

            try:
                validator = validator_class(field_name, parameters)
            except Exception as e:
                raise ValueError(f"Failed to create validator for rule '{rule_name}': {e}")

            self.validators.setdefault(field_name, []).append((rule_name, severity, validator))

    def _check_coverage(self) -> None:
        """Every record field needs rules; parsers and the price range must reject."""
        for field_name in RECORD_FIELDS:
            if not self.validators.get(field_name):
                raise ValueError(f"No enabled rules configured for field '{field_name}'")

        for field_name, rule_type in REQUIRED_RULES:
            types = {v.rule_type for _, severity, v in self.validators[field_name] if severity == "error"}
            if rule_type not in types:
                raise ValueError(f"Field '{field_name}' requires an error-severity '{rule_type}' rule")

    def validate_record(
        self,
        raw: Any,
        index: int = 0,
        now: datetime | None = None,
    ) -> ValidatedRecord:
        """
        Validate one raw record.

        Args:
            raw: Untyped input element
            index: Position in the input sequence (for log context)
            now: Reference time for date checks (defaults to current UTC time)

        Returns:
            ValidatedRecord with trimmed strings, float price and parsed date

        Raises:
            ValidationError: First error-severity failure (a subclass naming the cause)
        """
        if not isinstance(raw, Mapping):
            raise InvalidRecordError()

        if now is None:
            now = datetime.now(timezone.utc)
        elif now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)

        normalized: dict[str, Any] = {}
        for field_name in RECORD_FIELDS:
            value = raw.get(field_name)
            for rule_name, severity, validator in self.validators[field_name]:
                try:
                    value = validator.validate(value, raw, now=now)
                except ValidationError as e:
                    if severity == "error":
                        raise
                    logger.warning(
                        f"Validation warning for record {index + 1}: {e}",
                        extra={"rule_name": rule_name, "field_name": field_name, "record_index": index},
                    )
            normalized[field_name] = value

        return ValidatedRecord(
            user_name=normalized["user_name"],
            power_company=normalized["power_company"],
            bid_date=raw["bid_date"],
            bid_date_parsed=normalized["bid_date"],
            bid_price=normalized["bid_price"],
        )

    def get_rule_summary(self) -> dict[str, Any]:
        """
        Get summary of loaded rules.

        Returns:
            Dictionary with rule counts and types
        """
        return {
            "total_rules": sum(len(v) for v in self.validators.values()),
            "rules_by_type": self._count_by_type(),
            "rules_by_severity": self._count_by_severity(),
        }

    def _count_by_type(self) -> dict[str, int]:
        """Count validators by rule type."""
        counts: dict[str, int] = {}
        for field_validators in self.validators.values():
            for _, _, validator in field_validators:
                counts[validator.rule_type] = counts.get(validator.rule_type, 0) + 1
        return counts

    def _count_by_severity(self) -> dict[str, int]:
        """Count validators by severity."""
        counts: dict[str, int] = {}
        for field_validators in self.validators.values():
            for _, severity, _ in field_validators:
                counts[severity] = counts.get(severity, 0) + 1
        return counts
