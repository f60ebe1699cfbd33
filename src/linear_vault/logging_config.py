"""
Structured logging setup for linear-vault.
"""

import logging
import sys
from typing import Optional

import structlog

from .config import VaultConfig


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a package logger routed through the standard logging module.

    Events are dropped like any other stdlib record until the application
    configures logging, so library calls never write to stdout on their own.

    Args:
        name: Logger name, normally the module ``__name__``
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def configure_logging(level: str = "WARNING", debug: bool = False) -> None:
    """
    Configure structlog on top of the standard logging module.

    Args:
        level: Log level name for the package loggers
        debug: Force DEBUG level and human-readable console output
    """
    if debug:
        level = "DEBUG"

    logging.basicConfig(
        level=level,
        format="%(message)s",
        stream=sys.stderr,
    )
    logging.getLogger("linear_vault").setLevel(level)

    renderer = (
        structlog.dev.ConsoleRenderer()
        if debug
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def configure_logging_from_config(config: Optional[VaultConfig] = None) -> None:
    """Configure logging from a vault configuration."""
    config = config or VaultConfig()
    configure_logging(level=config.log_level, debug=config.debug)
