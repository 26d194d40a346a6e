"""
Runtime configuration for formvault.
Every setting is read from the environment with a safe default.
"""

import os
from decimal import ROUND_HALF_UP
from pathlib import Path

# Persistent backend configuration
DB_PATH = os.getenv("FORMVAULT_DB_PATH", "./data/formvault.db")
STORE_PROVIDER = os.getenv("FORMVAULT_STORE_PROVIDER", "memory")  # memory|sqlite

# Decimal arithmetic used by the statistics engine
DECIMAL_PRECISION = int(os.getenv("DECIMAL_PRECISION", "20"))
DECIMAL_ROUNDING = os.getenv("DECIMAL_ROUNDING", ROUND_HALF_UP)
RSD_SIGNIFICANT_DIGITS = int(os.getenv("RSD_SIGNIFICANT_DIGITS", "5"))

# Validate stored records with pydantic when loading them back
SCHEMA_VALIDATION_STRICT = os.getenv("SCHEMA_VALIDATION_STRICT", "true").lower() == "true"

VERSION = "0.1.0"

VALID_ROUNDINGS = [
    "ROUND_CEILING",
    "ROUND_DOWN",
    "ROUND_FLOOR",
    "ROUND_HALF_DOWN",
    "ROUND_HALF_EVEN",
    "ROUND_HALF_UP",
    "ROUND_UP",
    "ROUND_05UP",
]

_default_store = None


def get_backing_store():
    """Get the process-wide backing store for the configured provider."""
    global _default_store

    if _default_store is not None:
        return _default_store

    if STORE_PROVIDER == "sqlite":
        from .storage import SQLiteKeyValueStore
        _default_store = SQLiteKeyValueStore(DB_PATH)
    else:
        # Unknown providers fall back to memory
        from .storage import InMemoryKeyValueStore
        _default_store = InMemoryKeyValueStore()

    return _default_store


def reset_backing_store():
    """Forget the cached backing store so the next lookup rebuilds it."""
    global _default_store
    _default_store = None


def debug_enabled():
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG", "false").lower() == "true"


def ensure_db_directory(db_path: str = None):
    """Ensure the database directory exists."""
    Path(db_path or DB_PATH).parent.mkdir(parents=True, exist_ok=True)


def validate_config():
    """Validate configuration and return any issues."""
    issues = []

    if STORE_PROVIDER not in ["memory", "sqlite"]:
        issues.append(f"Invalid FORMVAULT_STORE_PROVIDER: {STORE_PROVIDER}")

    if DECIMAL_ROUNDING not in VALID_ROUNDINGS:
        issues.append(f"Invalid DECIMAL_ROUNDING: {DECIMAL_ROUNDING}")

    if DECIMAL_PRECISION < 1:
        issues.append("DECIMAL_PRECISION must be >= 1")

    if RSD_SIGNIFICANT_DIGITS < 1:
        issues.append("RSD_SIGNIFICANT_DIGITS must be >= 1")
    elif RSD_SIGNIFICANT_DIGITS > DECIMAL_PRECISION:
        issues.append("RSD_SIGNIFICANT_DIGITS must not exceed DECIMAL_PRECISION")

    return issues
