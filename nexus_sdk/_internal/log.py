"""Logger setup for the Nexus SDK."""

import logging
import sys

LOGGER_NAME = "nexus_sdk"
DEBUG_PREFIX = "[nexus-sdk]"


def get_logger(name: str) -> logging.Logger:
    """Return a module logger under the SDK's logger namespace."""
    if name == LOGGER_NAME or name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def enable_debug_logging() -> None:
    """Send SDK debug logs to stderr.

    Safe to call more than once: the stderr handler is only attached once.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    for handler in logger.handlers:
        if getattr(handler, "_nexus_debug", False):
            return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(f"{DEBUG_PREFIX} %(message)s"))
    handler._nexus_debug = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
