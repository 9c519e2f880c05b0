"""richcopy - rich storefront copy rendering.

Renders the homepage and news copy of the storefront, where authors colour
fragments of Markdown or HTML with ``[color=...]...[/color]`` tags.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from richcopy.config import Settings

__version__ = "0.1.0"

_HANDLER_MARKER = "_richcopy_handler"


def setup_logging(settings: Settings | None = None) -> None:
    """Configure logging to the console and, optionally, a rotating file.

    Safe to call more than once: handlers installed by a previous call are
    replaced rather than duplicated.
    """
    if settings is None:
        from richcopy.config import get_settings

        settings = get_settings()

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            root_logger.removeHandler(handler)
            handler.close()

    level = logging.getLevelName(settings.log.level)
    root_logger.setLevel(logging.DEBUG if settings.log.to_file else level)

    # Console handler - less verbose
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    setattr(console_handler, _HANDLER_MARKER, True)
    root_logger.addHandler(console_handler)

    if not settings.log.to_file:
        return

    log_dir = settings.log.dir
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"richcopy.{os.getpid()}.log"

    # File handler - detailed logging with rotation (10MB, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    setattr(file_handler, _HANDLER_MARKER, True)
    root_logger.addHandler(file_handler)

    logging.info("Logging configured. Log file: %s", log_file.absolute())
