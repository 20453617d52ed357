"""Core constants used across retail-tables modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path(".retail")
TABLE_FILE_SUFFIX = ".json"
JSON_INDENT = 2
DEFAULT_TOP_BUYERS_LIMIT = 10
SESSION_SPEC_VERSION = 1
