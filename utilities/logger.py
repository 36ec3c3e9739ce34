"""
Structured logging for the Bookshelf API.

Events are rendered by structlog on top of the standard logging module,
as JSON lines or coloured console output, optionally mirrored to a file.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

import structlog
from structlog.stdlib import LoggerFactory

# File handler installed by the last setup_logging call
_file_handler: Optional[logging.FileHandler] = None


def _build_processors(log_format: str, debug: bool) -> list:
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    if debug:
        processors.append(structlog.processors.CallsiteParameterAdder())

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    return processors


def _attach_file_handler(log_file: Optional[Union[str, Path]], level: int) -> None:
    """Swap the mirrored log file, closing the one from a previous setup."""
    global _file_handler

    root_logger = logging.getLogger()
    if _file_handler is not None:
        root_logger.removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None

    if not log_file:
        return

    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    _file_handler = logging.FileHandler(log_path)
    _file_handler.setLevel(level)
    _file_handler.setFormatter(logging.Formatter('%(message)s'))
    root_logger.addHandler(_file_handler)


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    log_file: Optional[Union[str, Path]] = None,
    debug: bool = False
) -> None:
    """
    Set up structured logging. Safe to call more than once: the latest
    call wins and at most one log file is attached.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Output format (json or console)
        log_file: Optional file that receives a copy of every event
        debug: Add call site information to every event
    """
    level = getattr(logging, log_level.upper())

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    structlog.configure(
        processors=_build_processors(log_format, debug),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    _attach_file_handler(log_file, level)

    get_logger(__name__).info(
        "Logging system initialized",
        level=log_level,
        format=log_format,
        file=str(log_file) if log_file else None,
        debug=debug
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)
