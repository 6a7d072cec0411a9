"""Logging configuration and utilities."""

import logging
import sys
from pathlib import Path

LOGGER_NAMESPACE = "vert_estimator"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _build_handler(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the package.

    Console output goes to stderr so that reports printed on stdout stay
    clean. Calling this again replaces the previous handlers.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path of a file that receives the same records
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    package_logger.setLevel(log_level)
    package_logger.handlers.clear()
    package_logger.addHandler(_build_handler(logging.StreamHandler(sys.stderr), log_level))

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        package_logger.addHandler(_build_handler(logging.FileHandler(log_path), log_level))

    # asyncio reports slow callbacks while frames decode in worker threads
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the package namespace.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger named ``vert_estimator.<name>`` unless already namespaced
    """
    if name != LOGGER_NAMESPACE and not name.startswith(f"{LOGGER_NAMESPACE}."):
        name = f"{LOGGER_NAMESPACE}.{name}"
    return logging.getLogger(name)
