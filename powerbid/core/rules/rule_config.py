"""
Rule configuration management.

Loads validation rules from YAML files and provides utilities
for managing rule configurations.
"""

from pathlib import Path
from typing import Any

import yaml

DEFAULT_MAX_REJECTION_RATIO = 0.2
DEFAULT_PRICE_UNIT = "元/kWh"


class RuleConfigLoader:
    """
    Loads validation rules from YAML configuration files.

    Expected YAML format:
    ```yaml
    rules:
      user_name:
        - type: required_field
        - type: string

      bid_price:
        - type: required_field
        - type: number
        - type: range
          params:
            min: 0.1
            max: 2.0

    quality:
      max_rejection_ratio: 0.2

    display:
      price_unit: "元/kWh"
    ```
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the rule config loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Rule configuration file not found: {config_path}")
        self._config: dict[str, Any] | None = None

    def _read(self) -> dict[str, Any]:
        if self._config is None:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = yaml.safe_load(f) or {}
        return self._config

    def load_rules(self) -> list[dict[str, Any]]:
        """
        Load and parse validation rules from YAML file.

        Returns:
            List of rule dictionaries suitable for RuleEngine

        Raises:
            ValueError: If YAML is invalid or missing required fields
        """
        config = self._read()

        if "rules" not in config:
            raise ValueError("Configuration file must contain 'rules' section")

        rules = []
        field_rules = config["rules"]

        for field_name, field_rule_list in field_rules.items():
            if not isinstance(field_rule_list, list):
                raise ValueError(f"Rules for field '{field_name}' must be a list")

            for idx, rule_def in enumerate(field_rule_list):
                rule = self._parse_rule(field_name, rule_def, idx)
                rules.append(rule)

        return rules

    def load_max_rejection_ratio(self) -> float:
        """
        Read the dataset quality gate threshold.

        Returns:
            Maximum tolerated share of rejected records (default 0.2)
        """
        quality = self._read().get("quality") or {}
        ratio = float(quality.get("max_rejection_ratio", DEFAULT_MAX_REJECTION_RATIO))
        if not 0.0 <= ratio <= 1.0:
            raise ValueError(f"max_rejection_ratio must be between 0 and 1, got {ratio}")
        return ratio

    def load_price_unit(self) -> str:
        """Unit label appended to formatted prices."""
        display = self._read().get("display") or {}
        return str(display.get("price_unit", DEFAULT_PRICE_UNIT))

    def _parse_rule(self, field_name: str, rule_def: dict[str, Any], idx: int) -> dict[str, Any]:
        """
        Parse a single rule definition.

        Args:
            field_name: The field this rule applies to
            rule_def: The rule definition from YAML
            idx: Index of this rule for the field (for naming)

        Returns:
            Parsed rule dictionary

        Raises:
            ValueError: If rule definition is invalid
        """
        if "type" not in rule_def:
            raise ValueError(f"Rule for field '{field_name}' is missing 'type'")

        rule_type = rule_def["type"]
        rule_name = rule_def.get("name", f"{field_name}_{rule_type}_{idx}")
        parameters = rule_def.get("params", rule_def.get("parameters", {}))

        severity = rule_def.get("severity", "error")
        if severity not in ("error", "warning"):
            raise ValueError(f"Invalid severity '{severity}' for rule '{rule_name}'. Must be 'error' or 'warning'")

        enabled = rule_def.get("enabled", True)

        return {
            "rule_name": rule_name,
            "rule_type": rule_type,
            "field_name": field_name,
            "parameters": parameters,
            "severity": severity,
            "enabled": enabled,
        }


class RuleConfigBuilder:
    """
    Programmatically build rule configurations (for defaults, tests or dynamic rules).
    """

    def __init__(self):
        """Initialize empty rule configuration."""
        self.rules: list[dict[str, Any]] = []

    def _add(self, field_name: str, rule_type: str, parameters: dict[str, Any], severity: str) -> "RuleConfigBuilder":
        self.rules.append({
            "rule_name": f"{field_name}_{rule_type}",
            "rule_type": rule_type,
            "field_name": field_name,
            "parameters": parameters,
            "severity": severity,
            "enabled": True,
        })
        return self

    def add_required_field(self, field_name: str) -> "RuleConfigBuilder":
        """Add a key-presence rule."""
        return self._add(field_name, "required_field", {}, "error")

    def add_string(self, field_name: str, strip: bool = True) -> "RuleConfigBuilder":
        """Add a non-empty string rule."""
        return self._add(field_name, "string", {"strip": strip}, "error")

    def add_number(self, field_name: str) -> "RuleConfigBuilder":
        """Add a finite number coercion rule."""
        return self._add(field_name, "number", {}, "error")

    def add_range(
        self,
        field_name: str,
        min_value: float | None = None,
        max_value: float | None = None,
        severity: str = "error",
    ) -> "RuleConfigBuilder":
        """Add a numeric range rule."""
        params = {}
        if min_value is not None:
            params["min"] = min_value
        if max_value is not None:
            params["max"] = max_value
        return self._add(field_name, "range", params, severity)

    def add_date(
        self,
        field_name: str,
        min_date: str | None = None,
        max_date: str | None = None,
    ) -> "RuleConfigBuilder":
        """Add an ISO date rule; max_date defaults to the validation time."""
        params = {}
        if min_date is not None:
            params["min_date"] = min_date
        if max_date is not None:
            params["max_date"] = max_date
        return self._add(field_name, "date", params, "error")

    def build(self) -> list[dict[str, Any]]:
        """Build and return the rule configuration."""
        return self.rules


def default_bid_rules() -> list[dict[str, Any]]:
    """
    Built-in rules for bid records.

    Fields are checked in the order user_name, power_company, bid_date,
    bid_price; the first failing rule rejects the record.
    """
    return (
        RuleConfigBuilder()
        .add_required_field("user_name")
        .add_string("user_name")
        .add_required_field("power_company")
        .add_string("power_company")
        .add_required_field("bid_date")
        .add_date("bid_date", min_date="2020-01-01")
        .add_required_field("bid_price")
        .add_number("bid_price")
        .add_range("bid_price", min_value=0.1, max_value=2.0)
        .build()
    )
