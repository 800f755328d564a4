"""Logging setup for the ledgerbooks command line."""

import logging
import os
import sys

LOG_LEVEL_ENV = "LEDGERBOOKS_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_LOGGER_NAME = "ledgerbooks"
_handler: logging.Handler | None = None


def resolve_level(verbose: bool = False) -> int:
    """Pick the log level: --verbose, then LEDGERBOOKS_LOG_LEVEL, then WARNING."""
    if verbose:
        return logging.DEBUG
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    level = logging.getLevelName(name) if name else logging.WARNING
    # getLevelName returns a string for unknown names
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(verbose: bool = False) -> None:
    """Send ledgerbooks log records to stderr.

    Safe to call more than once; the handler installed by an earlier call is
    replaced so it always writes to the current stderr.
    """
    global _handler

    logger = logging.getLogger(_LOGGER_NAME)
    if _handler is not None:
        logger.removeHandler(_handler)

    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(_handler)
    logger.setLevel(resolve_level(verbose))
    logger.propagate = False
