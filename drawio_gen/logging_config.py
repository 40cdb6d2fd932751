"""
Logging configuration shared by the CLI, HTTP service and MCP server.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed here by the entry points.
"""
import logging
import sys
from typing import Optional, TextIO

from .config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: Optional[str] = None, stream: Optional[TextIO] = None) -> None:
    """
    Install a single stream handler on the root logger.

    Args:
        level: Log level name (defaults to DRAWIO_GEN_LOG_LEVEL)
        stream: Output stream (defaults to stderr so stdout stays pipeable)
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger.setLevel(getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO))
    root_logger.addHandler(handler)

    # Reduce noise from the web stack
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
