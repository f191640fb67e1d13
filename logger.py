"""
Logging configuration for the Members Game app.

This module provides centralized logging setup. The setup_logging() function
should be called once at application startup (e.g., in 1_Setup.py).

All app modules should use the "app" namespace:
    import logging
    logger = logging.getLogger("app.module_name")

This keeps third-party library logs quiet while allowing granular control
over the app's own logging level via the LOG_LEVEL environment variable.
"""

import logging
import os
import sys

# App namespace prefix - all app loggers should use this
APP_LOGGER_NAME = "app"

LOG_LEVEL_ENV_VAR = "LOG_LEVEL"


def get_log_level(default: int = logging.INFO) -> int:
    """
    Reads the app logging level from the LOG_LEVEL environment variable.

    Accepts level names ("DEBUG", "info") or numeric values ("10").
    Unknown values fall back to the default.
    """
    raw = os.environ.get(LOG_LEVEL_ENV_VAR, "").strip()
    if not raw:
        return default
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else default


def setup_logging(app_level: int = logging.INFO) -> None:
    """
    Configure logging for the application.

    - Root logger is set to WARNING (keeps third-party libraries quiet)
    - App namespace logger ("app.*") is set to the specified level

    This should be called ONCE at application startup (entry point).

    Args:
        app_level: The logging level for app modules (default: INFO)
    """
    # Configure root logger to WARNING - silences third-party library noise
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.WARNING)

    # Avoid adding duplicate handlers if setup is called multiple times
    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(logging.DEBUG)  # Handler accepts all; loggers filter

        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        handler.setFormatter(formatter)

        root_logger.addHandler(handler)

    # Configure the app namespace logger
    app_logger = logging.getLogger(APP_LOGGER_NAME)
    app_logger.setLevel(app_level)


def log_assignment_debug(
    logger: logging.Logger,
    policy: str,
    team_sizes: list[int],
    remaining: list[int],
    placements: list[tuple[str, int]],
) -> None:
    """
    Log team assignment debug information in a consistent format.

    Args:
        logger: Logger instance to use
        policy: Name of the assignment policy ("balanced" or "randomized")
        team_sizes: Planned size of each team
        remaining: Remaining capacity of each team after assignment
        placements: (group id, team index) in placement order
    """
    if not logger.isEnabledFor(logging.DEBUG):
        return

    logger.debug("Assignment Policy: %s", policy)
    logger.debug("Planned Team Sizes: %s", team_sizes)
    logger.debug("Remaining Capacity: %s", remaining)
    logger.debug(
        "Placements: %s",
        {group_id: team_idx + 1 for group_id, team_idx in placements},
    )
