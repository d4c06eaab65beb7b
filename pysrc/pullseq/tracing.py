"""Logging configuration.

Every module logs to a child of the `pullseq` logger. Adapters only
log at `DEBUG`, when they are built and when they split, so the
default level is quiet.

"""

import logging
import os
from typing import Optional

__all__ = [
    "LOG_LEVEL_ENV_VAR",
    "setup_tracing",
]

LOG_LEVEL_ENV_VAR = "PULLSEQ_LOG_LEVEL"
"""Environment variable read when no log level is given."""

_LEVELS = {
    "ERROR": logging.ERROR,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    # Nothing logs below debug; accept it for symmetry with other
    # tools' log level flags.
    "TRACE": logging.DEBUG,
}


def setup_tracing(log_level: Optional[str] = None) -> logging.Logger:
    """Send `pullseq` log records to stderr.

    Calling this again replaces the handler installed by the previous
    call instead of adding another.

    :arg log_level: One of `ERROR`, `WARN`, `INFO`, `DEBUG` or `TRACE`.
        Defaults to the value of the `PULLSEQ_LOG_LEVEL` environment
        variable, or `WARN` if that is unset.

    :returns: The configured `pullseq` logger.

    :raises ValueError: If the log level is not known.

    """
    if log_level is None:
        log_level = os.environ.get(LOG_LEVEL_ENV_VAR, "WARN")
    try:
        level = _LEVELS[log_level.upper()]
    except KeyError as ex:
        msg = (
            f"unknown log level {log_level!r}; "
            f"must be one of {', '.join(_LEVELS)}"
        )
        raise ValueError(msg) from ex

    logger = logging.getLogger("pullseq")
    for handler in list(logger.handlers):
        if getattr(handler, "_pullseq_tracing", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler._pullseq_tracing = True  # type: ignore[attr-defined]
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
