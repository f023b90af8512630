# openrouter_flow/utils/logger.py

import sys
import logging
from pathlib import Path
from typing import Optional
from loguru import logger


def setup_logging(debug: bool = False, log_dir: Optional[Path] = None):
    """
    Configure global logging settings for the application.

    Args:
        debug: If True, sets logging level to DEBUG, otherwise INFO
        log_dir: Directory for the rotating log file (defaults to ~/.openrouter_flow/logs)
    """
    logger.remove()

    log_level = "DEBUG" if debug else "INFO"

    logger.add(
        sys.stderr,
        level=log_level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    )

    log_dir = log_dir or Path.home() / ".openrouter_flow" / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "openrouter_flow.log"

    logger.add(
        log_file,
        level=log_level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} - {message}",
        rotation="10 MB",
        retention="1 week"
    )
    return log_file


def get_logger(
        name: str,
        log_level: int = logging.INFO,
        log_file: Optional[Path] = None
) -> logging.Logger:
    """
    Creates and returns a logger instance with consistent formatting and handlers.

    Args:
        name: The name of the logger (typically __name__)
        log_level: The logging level (default: logging.INFO)
        log_file: Optional path to a log file.

    Returns:
        logging.Logger: Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def log_exception(logger: logging.Logger, exc: Exception, message: str = "An error occurred:"):
    """
    Log an exception with its traceback using a consistent message layout.

    Args:
        logger: The logger instance to use
        exc: The exception to log
        message: Optional custom message to precede the exception details
    """
    logger.error(f"{message} {str(exc)}", exc_info=True)
