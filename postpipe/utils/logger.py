"""
Logging configuration for postpipe
"""

import logging
from pathlib import Path
from typing import cast

import structlog
from rich.console import Console
from rich.logging import RichHandler

from postpipe.config import get_settings


def setup_logging() -> None:
    """Set up structured logging with rich formatting"""

    settings = get_settings()

    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logs_dir = settings.log_dir
    logs_dir.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=log_level,
        force=True,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                show_time=True,
                show_path=False,
                markup=False,
                rich_tracebacks=True,
            ),
            logging.FileHandler(logs_dir / "postpipe.log", encoding="utf-8"),
        ],
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
            (
                structlog.processors.JSONRenderer()
                if settings.log_format == "json"
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance"""
    logger = structlog.get_logger(name)
    return cast("structlog.stdlib.BoundLogger", logger)


def validate_safe_path(path: str | Path, base_path: str | Path) -> Path:
    """Resolve ``path`` and make sure it stays inside ``base_path``."""
    if isinstance(path, str):
        path = Path(path)
    if isinstance(base_path, str):
        base_path = Path(base_path)

    normalized_path = path.resolve()
    normalized_base = base_path.resolve()

    try:
        normalized_path.relative_to(normalized_base)
    except ValueError as e:
        raise ValueError(
            f"Path '{path}' is outside base directory '{base_path}'"
        ) from e

    return normalized_path


# Default logger instance for convenient access
logger = get_logger("postpipe")
