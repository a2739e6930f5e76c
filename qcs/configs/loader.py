"""
Configuration loading and validation.

This module handles loading of YAML configuration files and
validates that required fields are present and weights are sane.
"""

import logging
from pathlib import Path
from typing import Dict, Any, List

import yaml

logger = logging.getLogger(__name__)


def load_config(filepath: str) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        filepath: Path to the YAML configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {filepath}")

    logger.info(f"Loading configuration from {filepath}")
    with open(filepath, "r") as f:
        config = yaml.safe_load(f)

    if config is None:
        raise ValueError(f"Configuration file is empty: {filepath}")

    return config


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration and return list of warnings/errors.

    Args:
        config: Configuration dictionary

    Returns:
        List of warning/error messages (empty if valid)
    """
    issues = []

    required_sections = ["global", "scoring", "blend", "pairing", "bulk_sync"]
    for section in required_sections:
        if section not in config:
            issues.append(f"Missing required section: {section}")

    # Blend weight must be a proportion
    if "blend" in config:
        mental_weight = (config["blend"] or {}).get("mental_weight", 0.6)
        if not isinstance(mental_weight, (int, float)) or not 0 <= mental_weight <= 1:
            issues.append(f"blend.mental_weight must be in [0, 1], got {mental_weight}")

    # Point tables must not contain negative values
    scoring = config.get("scoring") or {}
    for table_name in ("physical", "mental"):
        table = scoring.get(table_name) or {}
        for key, value in table.items():
            if not isinstance(value, (int, float)):
                issues.append(f"scoring.{table_name}.{key} must be numeric, got {value!r}")
            elif value < 0:
                issues.append(f"scoring.{table_name}.{key} must be >= 0, got {value}")

    pairing = config.get("pairing") or {}
    for key in ("qcs_window", "top_n"):
        value = pairing.get(key, 10)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            issues.append(f"pairing.{key} must be numeric, got {value!r}")
        elif value < 0:
            issues.append(f"pairing.{key} must be >= 0, got {value}")

    bulk_sync = config.get("bulk_sync") or {}
    if "n_jobs" in bulk_sync and bulk_sync["n_jobs"] == 0:
        issues.append("bulk_sync.n_jobs must not be 0")

    return issues


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """
    Get a nested configuration value using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., "scoring.mental.interest_points")
        default: Default value if path doesn't exist

    Returns:
        Configuration value or default
    """
    keys = path.split(".")
    value = config
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    return value
