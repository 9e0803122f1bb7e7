"""
Configuration for the movie catalog.

Every setting can be overridden through an environment variable; the CLI
flags (--file, --mode, --log-level) take precedence over both.
Unrecognized environment values fall back to the defaults with a warning.
"""

import os
from pathlib import Path

from loguru import logger

from .models import GenreMode

# Levels accepted for the CLI's stderr sink (loguru's built-in levels)
LOG_LEVELS = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


def _genre_mode_from_env(raw: str) -> GenreMode:
	try:
		return GenreMode(raw.strip().lower())
	except ValueError:
		logger.warning(f"[Config] Unknown MOVIEDB_GENRE_MODE '{raw}', using '{GenreMode.SINGLE.value}'")
		return GenreMode.SINGLE


def _log_level_from_env(raw: str) -> str:
	level = raw.strip().upper()
	if level not in LOG_LEVELS:
		logger.warning(f"[Config] Unknown MOVIEDB_LOG_LEVEL '{raw}', using 'WARNING'")
		return "WARNING"
	return level


# =============================================================================
# Paths
# =============================================================================
CATALOG_FILE = Path(os.environ.get("MOVIEDB_FILE", "movies.json"))

# =============================================================================
# Behaviour
# =============================================================================
GENRE_MODE = _genre_mode_from_env(os.environ.get("MOVIEDB_GENRE_MODE", GenreMode.SINGLE.value))

# =============================================================================
# Logging
# =============================================================================
LOG_LEVEL = _log_level_from_env(os.environ.get("MOVIEDB_LOG_LEVEL", "WARNING"))
