"""
Configuration constants for the Degrees of Separation project.

All endpoints, timeouts, and search bounds are defined here.
Every setting can be overridden from the environment (or a .env file).
"""

import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _optional_int(name: str, default: int | None) -> int | None:
    """Read an int setting; an empty or zero value means unbounded."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    raw = raw.strip()
    if not raw:
        return None
    value = int(raw)
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")
    return value or None


def _optional_float(name: str, default: float | None) -> float | None:
    """Read a float setting; an empty or zero value means unbounded."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    raw = raw.strip()
    if not raw:
        return None
    value = float(raw)
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")
    return value or None


# =============================================================================
# Moviebuff Data Source Configuration
# =============================================================================

# Base URL for person and movie records (identifier is appended)
MOVIEBUFF_BASE_URL = os.environ.get("MOVIEBUFF_BASE_URL", "https://data.moviebuff.com")

# Request timeout in seconds (per fetch)
MOVIEBUFF_TIMEOUT = float(os.environ.get("MOVIEBUFF_TIMEOUT", "10"))

# Rate limiting: minimum seconds between requests
# Set to 0 for max speed
MOVIEBUFF_REQUEST_DELAY = float(os.environ.get("MOVIEBUFF_REQUEST_DELAY", "0"))

# User agent for requests (be a good citizen)
USER_AGENT = "MoviebuffDegrees/0.1 (degrees of separation search)"

# =============================================================================
# Search Configuration
# =============================================================================

# Maximum number of movie hops before giving up (None = unbounded)
SEARCH_MAX_DEPTH = _optional_int("SEARCH_MAX_DEPTH", 6)

# Maximum number of people expanded in one search (None = unbounded)
SEARCH_MAX_EXPANDED = _optional_int("SEARCH_MAX_EXPANDED", None)

# Overall search deadline in seconds (None = no deadline)
SEARCH_TIMEOUT = _optional_float("SEARCH_TIMEOUT", None)

# Parallel movie fetches per expanded person (1 = sequential)
SEARCH_WORKERS = int(os.environ.get("SEARCH_WORKERS", "8"))

# Role reported for a person whose role in a movie is not recorded
DEFAULT_ROLE = "Actor"

# =============================================================================
# Logging Configuration
# =============================================================================

# Log level (DEBUG, INFO, WARNING, ERROR)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
