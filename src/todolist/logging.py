from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


def configure_logging(log_level: str = "info", stream: Optional[TextIO] = None) -> None:
    """
    Configures root logging for one todolist run.

    Records go to stdout by default. The interactive cli owns stdout for its
    prompts and listings, so it passes sys.stderr instead. Calling this again
    replaces the previous handler rather than adding a second one.
    """
    level = _parse_level(log_level)

    root = logging.getLogger()
    root.setLevel(level)
    for h in [h for h in root.handlers if getattr(h, "_todolist", False)]:
        root.removeHandler(h)

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
    handler._todolist = True  # type: ignore[attr-defined]
    root.addHandler(handler)

    # Request lines only matter in web mode; keep them at INFO or quieter.
    logging.getLogger("uvicorn.access").setLevel(max(level, logging.INFO))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name if name else "todolist")


def _parse_level(log_level: str) -> int:
    level = logging.getLevelName(log_level.strip().upper())
    return level if isinstance(level, int) else logging.INFO
