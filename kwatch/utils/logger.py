"""
Logging helpers shared across kwatch modules.

Usage:
    from kwatch.utils.logger import get_logger
    logger = get_logger(__name__)
"""
import logging
import sys

ROOT_LOGGER = "kwatch"

_configured = False


def setup_logging(level: str = "INFO") -> None:
    """Attach a single stderr handler to the kwatch root logger. Idempotent."""
    global _configured
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if _configured:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
