"""
logging_config.py — Centralized Logging Configuration for the Checkout Service

This module configures unified logging behavior for the entire application.
It ensures that all modules log messages consistently to the console and,
when configured, to a file.

Features:
    • Console output, optional file output
    • Process ID tagging for multi-worker visibility (uvicorn --workers)
    • Standardized log format for all modules
    • Reduced verbosity for external dependencies (httpx, pymongo)
"""

import logging
import sys
from typing import Optional


def setup_logging(level: str = "INFO", log_file: Optional[str] = None):
    """
    Configures the global logging system for the application.

    Args:
        level (str): Root log level name, e.g. "INFO" or "DEBUG".
        log_file (str, optional): Path of a persistent log file. When omitted,
            logs only go to stdout (Docker/Kubernetes compatible).
    """
    log_format = '%(asctime)s - %(levelname)s - [PID:%(process)d] - %(message)s'

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=log_format,
        handlers=handlers,
    )

    # Reduce verbosity from external libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


def get_logger(name):
    """
    Logger for a checkout_service module, e.g. get_logger("checkout_service.main").

    Records reach the stdout/file handlers installed by setup_logging(), which
    create_app() runs at startup. Messages about a single order are prefixed
    with "[Order: <id>]", where <id> is the Razorpay order id or the Order
    document id, so one checkout can be followed with grep.
    """
    return logging.getLogger(name)
