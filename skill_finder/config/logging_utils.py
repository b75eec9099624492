"""
Logging utilities with daily rotation and optional structlog support.

Provides a formatter that labels each record with a category derived from the logger name.
Includes setup functions for configuring logging handlers and formatters.
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, cast

import structlog


class StructuredFormatter(logging.Formatter):
    """
    Custom formatter with structured output and category labels.
    Adds a category label to each log record based on logger name.
    """

    CATEGORY_MAP = {
        "graph": "GRAPH",
        "extract": "EXTRACT",
        "match": "MATCH",
        "cli": "CLI",
    }

    def format(self, record):
        record.category = _category_for(record.name)
        return super().format(record)


def setup_logging(
    log_dir: str = "logs",
    log_level: str = "INFO",
    log_file: str = "skill_finder.log",
    retention_days: int = 30,
    enable_console: bool = True,
    enable_structlog: bool = True,
) -> logging.Logger:
    """
    Set up logging with daily rotation and structured formatting

    Args:
        log_dir: Directory for log files
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Name of the log file
        retention_days: Number of days to retain log files
        enable_console: Whether to enable console output
        enable_structlog: Whether to configure structlog on top of stdlib logging

    Returns:
        Configured root logger
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    level = getattr(logging, log_level.upper(), logging.INFO)
    log_format = "[%(asctime)s] [%(levelname)s] [%(category)s] %(message)s"

    # File handler with daily rotation
    file_handler = TimedRotatingFileHandler(
        filename=log_path / log_file,
        when="midnight",
        interval=1,
        backupCount=retention_days,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(
        StructuredFormatter(log_format, datefmt="%Y-%m-%d %H:%M:%S")
    )

    handlers: list[logging.Handler] = [file_handler]
    if enable_console:
        # stderr keeps command output on stdout clean
        console_handler = logging.StreamHandler(stream=sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(
            StructuredFormatter(log_format, datefmt="%Y-%m-%d %H:%M:%S")
        )
        handlers.append(console_handler)

    logging.basicConfig(
        level=level,
        handlers=handlers,
        force=True,  # Override any existing configuration
    )

    # Optional structlog configuration that routes through stdlib logging
    if enable_structlog:
        processors = [
            _add_category,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", utc=False),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeEncoder(),
        ]

        structlog.configure(
            processors=cast(list[Any], processors),
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    return logging.getLogger()


def log_phase_start(logger: logging.Logger, phase_name: str):
    """Log the start of a workflow step"""
    logger.info(f"--- {phase_name.upper()} ---")


def log_match_decision(
    logger: logging.Logger,
    problem: str,
    person_name: str | None,
    reason: str,
    candidates: int = 0,
):
    """
    Log the outcome of a best-person match

    Args:
        logger: Logger instance
        problem: Problem description the match was made for
        person_name: Chosen person, or None when no match was produced
        reason: Justification returned by the model
        candidates: Number of persons that were considered
    """
    problem_str = problem if len(problem) <= 80 else f"{problem[:77]}..."
    if person_name is None:
        logger.info(f"Problem '{problem_str}': NO MATCH - {reason}")
        return
    logger.info(
        f"Problem '{problem_str}': MATCH {person_name} "
        f"(out of {candidates} candidates) - {reason}"
    )


def get_logger(name: str, structured: bool = False) -> Any:
    """
    Get a logger for a specific module

    Args:
        name: Logger name (typically __name__)
        structured: If True, return structlog BoundLogger; otherwise stdlib logger

    Returns:
        Logger instance
    """
    if structured:
        return structlog.get_logger(name)
    return logging.getLogger(name)


def _category_for(logger_name: str) -> str:
    name_lower = logger_name.lower() if isinstance(logger_name, str) else ""
    for key, label in StructuredFormatter.CATEGORY_MAP.items():
        if key in name_lower:
            return label
    return "GENERAL"


def _add_category(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Processor that adds category based on logger name"""
    logger_name = event_dict.get("logger", "") or getattr(logger, "name", "")
    event_dict.setdefault("category", _category_for(logger_name))
    return event_dict
