"""Logging configuration for lopper"""
import logging
import sys
from pathlib import Path

LOG_DIR = Path.home() / ".lopper"


def setup_logging(debug: bool = False) -> None:
    """
    Configure logging for the application.

    Console output is limited to warnings so log lines never land in the
    middle of a raw-mode prompt. Debug mode also writes everything to
    ~/.lopper/lopper.log.

    Args:
        debug: If True, log DEBUG messages to the log file
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if debug else logging.WARNING)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if debug:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(LOG_DIR / "lopper.log", mode="w")  # Overwrite each run
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter(fmt="[%(name)s] %(message)s"))
    root_logger.addHandler(console_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified module.

    Args:
        name: Name of the module (typically __name__)

    Returns:
        Logger instance
    """
    # Strip the package prefix for cleaner log names
    if name.startswith("lopper."):
        name = name.replace("lopper.", "", 1)

    return logging.getLogger(name)
