"""Logging configuration for the libraryserver CLI."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str = "WARNING") -> None:
    """Configure the root logger.

    Args:
        level: Log level name, e.g. "INFO" or "DEBUG"
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    # Clear any existing handlers
    root_logger.handlers.clear()

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root_logger.addHandler(handler)

    # Always keep SQLAlchemy logging at WARNING level
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)
