"""Logging helpers for targetencode.

Every module asks for its logger through :func:`get_logger` so that all
records end up under the ``targetencode`` namespace. Handlers are only
installed by :func:`configure_logging`; a library import never touches the
root logger.
"""

from __future__ import annotations

import logging

from rich.logging import RichHandler

ROOT_LOGGER_NAME = "targetencode"

_VERBOSITY_LEVELS = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.INFO,
    3: logging.DEBUG,
}


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the package namespace."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(verbosity: int = 1) -> logging.Logger:
    """Attach a rich console handler to the package logger.

    Args:
        verbosity: 0=warnings only, 1-2=info, 3=debug

    Returns:
        The package root logger
    """
    level = _VERBOSITY_LEVELS.get(max(0, min(verbosity, 3)), logging.INFO)
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(show_path=False, rich_tracebacks=False)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger
