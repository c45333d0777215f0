"""
Logging configuration for the application.

One stdout handler with a pipe-separated format, shared by uvicorn and
the app loggers. Logging must not change program behavior.
Never logs sensitive data: request bodies, secrets, webhook payloads,
customer names, emails or addresses. Ids and order numbers are fine.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are only useful when chasing a bug.
QUIET_LOGGERS = ("uvicorn.access", "uvicorn.error", "stripe", "cloudinary", "urllib3")


def configure_logging(level: str = "INFO", sql_echo: bool = False) -> None:
    """Configure logging for the whole process.

    Args:
        level: The log level string (DEBUG, INFO, WARNING, ERROR).
        sql_echo: Log every SQL statement issued through SQLAlchemy.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if sql_echo else logging.WARNING
    )
