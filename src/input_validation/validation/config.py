"""Validation configuration constants and value loading.

Constants:
    - LAST_ERROR_PROPERTY: Name announced when a view model's last_error changes
    - DEFAULT_LAST_ERROR: Value of last_error before any failing query
    - NO_ERROR: What validity_of() returns for a valid or unvalidated property

Helpers:
    - load_values(): Read a YAML mapping of property name to value
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

# ============================================================================
# CONSTANTS
# ============================================================================

LAST_ERROR_PROPERTY = "last_error"
DEFAULT_LAST_ERROR = ""
NO_ERROR: Optional[str] = None


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def load_values(values_file: Path) -> Dict[str, Any]:
    """Load property values from a YAML file.

    The file holds a single mapping of property name to value. An empty file
    yields an empty mapping.

    Args:
        values_file: Path to the YAML file.

    Returns:
        Mapping of property name to value, in file order.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file can't be parsed or isn't a mapping with string keys.

    Examples:
        >>> load_values(Path("login.yaml"))
        {'user_name': 'alice', 'password': ''}
    """
    if not values_file.exists():
        raise FileNotFoundError(f"Values file not found: {values_file}")

    try:
        with values_file.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse values file {values_file}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(
            f"Values file {values_file} must contain a mapping, got {type(data).__name__}"
        )

    bad_keys = [k for k in data if not isinstance(k, str)]
    if bad_keys:
        raise ValueError(f"Property names must be strings, got: {bad_keys}")

    return dict(data)
