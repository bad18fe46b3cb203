from __future__ import annotations

import logging
from pathlib import Path
from typing import Final, Optional

_LOGGER_NAME: Final[str] = "pool_bootstrap"
_FORMAT: Final[str] = "[%(asctime)s] %(levelname)s %(message)s"
_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"


def get_logger() -> logging.Logger:
    """Return the shared bootstrap logger; stderr only shows INFO and above."""

    logger = logging.getLogger(_LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(logging.INFO)
        handler.setFormatter(logging.Formatter(_FORMAT, _DATE_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    return logger


def start_run_log(path: Path) -> logging.Logger:
    """Attach a fresh run log at ``path``, truncating any previous run.

    The run log also records DEBUG detail such as raw CLI output.
    """

    logger = get_logger()
    for handler in list(logger.handlers):
        if isinstance(handler, logging.FileHandler):
            logger.removeHandler(handler)
            handler.close()

    path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(_FORMAT, _DATE_FORMAT))
    logger.addHandler(file_handler)
    return logger


def log_section(
    logger: logging.Logger, header: str, content: Optional[str] = None, level: int = logging.INFO
) -> None:
    logger.log(level, header)
    if content:
        logger.log(level, content)
