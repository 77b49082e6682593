"""Application settings read from environment variables.

Values are resolved once at import time. Database URLs live here so that
`database.database` and the logging setup share a single source of truth.
"""

import os

from core.exceptions import ConfigurationError

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


def _int_env(key: str, default: int, minimum: int = 1) -> int:
    """Read an integer setting, rejecting values below `minimum`."""
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got '{raw}'", config_key=key)
    if value < minimum:
        raise ConfigurationError(f"{key} must be >= {minimum}, got {value}", config_key=key)
    return value


def _bool_env(key: str, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "y", "on")


# Read/Write partitioning: point READ_DATABASE_URL at a replica in production.
WRITE_DATABASE_URL = os.getenv("WRITE_DATABASE_URL", "sqlite:///meal_planner.db")
READ_DATABASE_URL = os.getenv("READ_DATABASE_URL", WRITE_DATABASE_URL)

LOG_DIR = os.getenv("LOG_DIR", os.path.join(BASE_DIR, "logs"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

MEAL_CATALOG_LIMIT = _int_env("MEAL_CATALOG_LIMIT", 20)
DEFAULT_HOUSEHOLD_SIZE = _int_env("DEFAULT_HOUSEHOLD_SIZE", 4)
SEED_DEMO_DATA = _bool_env("SEED_DEMO_DATA", True)
