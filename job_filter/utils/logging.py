"""Logging setup for the job_filter package and CLI."""

import logging
import sys
from pathlib import Path

LOGGER_NAME = "job_filter"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def _resolve_level(level: str | None) -> int:
    return getattr(logging, (level or "INFO").upper(), logging.INFO)


def _make_handler(
    handler: logging.Handler, level: int, formatter: logging.Formatter
) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def configure_logging(
    level: str | None = None,
    log_file: Path | str | None = None,
    format_string: str = LOG_FORMAT,
    date_format: str = DATE_FORMAT,
) -> logging.Logger:
    """Configure and return the package logger.

    Scoring, review and ledger modules log through
    ``logging.getLogger(__name__)`` and inherit the handlers installed here.
    Console output goes to stderr so stdout stays reserved for reports and
    JSON. Calling again only adjusts levels, except that a ``log_file`` not
    yet attached is added.

    Args:
        level: Log level name. Defaults to INFO.
        log_file: Optional file that also receives every record, e.g. a
            score run's ``run.log``.
        format_string: Record format.
        date_format: Timestamp format.

    Returns:
        The ``job_filter`` logger.
    """
    global _configured

    logger = logging.getLogger(LOGGER_NAME)
    log_level = _resolve_level(level)
    logger.setLevel(log_level)
    formatter = logging.Formatter(format_string, datefmt=date_format)

    if not _configured:
        logger.handlers.clear()
        logger.addHandler(_make_handler(logging.StreamHandler(sys.stderr), log_level, formatter))
        logger.propagate = False
        _configured = True
    else:
        for handler in logger.handlers:
            handler.setLevel(log_level)

    if log_file is not None:
        path = Path(log_file).resolve()
        attached = {
            Path(h.baseFilename) for h in logger.handlers if isinstance(h, logging.FileHandler)
        }
        if path not in attached:
            path.parent.mkdir(parents=True, exist_ok=True)
            logger.addHandler(
                _make_handler(logging.FileHandler(path, encoding="utf-8"), log_level, formatter)
            )

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the ``job_filter.<name>`` child logger."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def reset_logging() -> None:
    """Close handlers and restore the package logger to its defaults."""
    global _configured

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True

    _configured = False
