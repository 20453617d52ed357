"""Runtime configuration model for retail-tables.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import DEFAULT_DATA_ROOT, DEFAULT_TOP_BUYERS_LIMIT
from core.errors import RetailConfigError


@dataclass(frozen=True)
class RetailConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Local directory holding one JSON file per table.
        top_buyers_limit: Number of buyers returned by the top-buyers query.
    """

    data_root: Path
    top_buyers_limit: int

    @classmethod
    def from_env(cls) -> "RetailConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            RetailConfigError: If environment values are invalid.
        """
        data_root_value = os.getenv("RETAIL_DATA_ROOT", str(DEFAULT_DATA_ROOT))
        limit_value = os.getenv("RETAIL_TOP_BUYERS_LIMIT", str(DEFAULT_TOP_BUYERS_LIMIT))
        return cls(
            data_root=Path(data_root_value).expanduser().resolve(),
            top_buyers_limit=_parse_top_buyers_limit(limit_value),
        )


def _parse_top_buyers_limit(raw_value: str) -> int:
    """Parse the top-buyers limit environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Parsed positive integer limit.

    Raises:
        RetailConfigError: If value is not a positive integer.
    """
    try:
        limit = int(raw_value)
    except ValueError as error:
        raise RetailConfigError(
            "Invalid RETAIL_TOP_BUYERS_LIMIT value: "
            f"expected integer, got '{raw_value}'. "
            "Set RETAIL_TOP_BUYERS_LIMIT to a numeric value."
        ) from error
    if limit <= 0:
        raise RetailConfigError(
            f"Invalid RETAIL_TOP_BUYERS_LIMIT value {limit}: expected a positive integer."
        )
    return limit
