"""Logging setup shared by the CLI and the API."""

import logging
import sys

from floral_admin.core.config import get_config

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

# HTTP libraries log full request URLs at DEBUG; the Gemini key travels in the query string.
QUIET_LOGGERS = ("urllib3", "requests")


def setup_logging(level: str | int | None = None) -> None:
    """
    Configure application logging.

    Invariants:
    - The root logger gets exactly one stdout handler; calling this again replaces it.
    - Level comes from the argument, else from config log_level (unknown names fall back to INFO).
    - urllib3 and requests never log below WARNING, whatever the requested level.
    """
    if level is None:
        level = get_config().log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper().strip())
        if not isinstance(level, int):
            level = logging.INFO

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)

    root = logging.getLogger()
    root.setLevel(level)
    # Remove existing handlers so we don't duplicate when called again
    for h in root.handlers[:]:
        root.removeHandler(h)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(formatter)
    root.addHandler(console)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
