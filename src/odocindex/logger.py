from __future__ import annotations

import logging
import os
import sys
from typing import NoReturn

import colorlog
from dotenv import load_dotenv

load_dotenv()

TRACE = 5
LOGGER_NAME = "odocindex"
LEVEL_ENVS = ("ODOCINDEX_LOG_LEVEL", "LOG_LEVEL")

_FORMAT = "%(log_color)s[%(levelname)s] %(asctime)s - %(module)s:%(lineno)d %(funcName)s(): %(message)s"
_COLORS = {
    "TRACE": "white",
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}


class AppLogger(logging.Logger):
    def trace(self, message: str, *args, **kwargs) -> None:
        if self.isEnabledFor(TRACE):
            self._log(TRACE, message, args, **kwargs)

    def error_raise(
        self,
        message: str,
        *,
        exc: BaseException | type[BaseException] | None = None,
    ) -> NoReturn:
        """
        Log ``message`` at ERROR and raise.

        ``exc`` may be an exception class (instantiated with the message) or an
        instance; without it a RuntimeError is raised.
        """
        self.error(message)
        if exc is None:
            raise RuntimeError(message)
        if isinstance(exc, type):
            raise exc(message)
        raise exc


def level_from_env() -> int:
    for name in LEVEL_ENVS:
        raw = (os.getenv(name) or "").strip().upper()
        if raw == "TRACE":
            return TRACE
        if raw in logging.getLevelNamesMapping():
            return logging.getLevelNamesMapping()[raw]
    return logging.INFO


def _handler(stream, level: int) -> logging.Handler:
    handler = colorlog.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(
        colorlog.ColoredFormatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S", log_colors=_COLORS)
    )
    return handler


def setup_logger(name: str = LOGGER_NAME) -> AppLogger:
    logging.addLevelName(TRACE, "TRACE")
    logging.setLoggerClass(AppLogger)
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(level_from_env())
    logger.propagate = False

    # INFO and below on stdout, errors on stderr
    out = _handler(sys.stdout, logging.NOTSET)
    out.addFilter(lambda record: record.levelno < logging.ERROR)
    logger.addHandler(out)
    logger.addHandler(_handler(sys.stderr, logging.ERROR))
    return logger


def set_verbosity(verbose: int) -> None:
    """Lower the project logger level for each `-v` passed on the command line."""
    if verbose <= 0:
        return
    level = logging.DEBUG if verbose == 1 else TRACE
    logger.setLevel(min(logger.level, level))


logger: AppLogger = setup_logger()

__all__ = ["AppLogger", "TRACE", "level_from_env", "logger", "set_verbosity", "setup_logger"]
