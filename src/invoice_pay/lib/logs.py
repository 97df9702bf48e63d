"""
Logging utilities for the invoice payment engine.

Provides a logger factory that creates Python loggers with one stream
handler and a consistent format. Every module calls logs.logger(__file__)
once at import time.
"""

import logging
import os
from pathlib import Path

# INVOICE_PAY_LOG_LEVEL wins over the generic LOG_LEVEL
_LOG_LEVEL = os.getenv("INVOICE_PAY_LOG_LEVEL", os.getenv("LOG_LEVEL", "INFO")).upper()

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def logger(name: str) -> logging.Logger:
    """
    Return the logger for a module.

    File paths (e.g., __file__) are reduced to "invoice_pay.<stem>" so that
    log records can be filtered by package.

    Args:
        name: Logger name or __file__ path.

    Returns:
        Configured logging.Logger instance.
    """
    if "/" in name or "\\" in name:
        name = f"invoice_pay.{Path(name).stem}"

    log = logging.getLogger(name)

    if not log.handlers:
        log.setLevel(getattr(logging, _LOG_LEVEL, logging.INFO))
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        log.addHandler(handler)

    return log
