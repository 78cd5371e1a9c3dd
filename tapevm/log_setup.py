"""
Logging setup for tapevm entry points.

Console output goes through rich's RichHandler on stderr. When a log
directory is given, everything (DEBUG+) is also written to
``<log_dir>/<name>_YYYYMMDD_HHMMSS.log``. Library modules only create
loggers; this is called once by the CLI.
"""

from __future__ import annotations
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

FILE_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"


def setup_logging(
    name: str = "tapevm",
    console_level: int = logging.WARNING,
    log_dir: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """Configure and return the ``name`` logger.

    Idempotent: a second call only updates the console level.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        for h in logger.handlers:
            if isinstance(h, RichHandler):
                h.setLevel(console_level)
        return logger
    logger.setLevel(logging.DEBUG)

    ch = RichHandler(
        console=Console(stderr=True),
        level=console_level,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
    )
    logger.addHandler(ch)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_dir / f"{name}_{ts}.log"
        fh = logging.FileHandler(str(log_file), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(fh)
        logger.info("Log file: %s", log_file)

    return logger
