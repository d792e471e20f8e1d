"""Logging setup for the feed — stdlib only.

LOG_LEVEL sets the console level (default INFO). A DEBUG-level file log is
written to JOBFEED_LOG_DIR (default ``<repo>/logs``) unless
JOBFEED_NO_LOG_FILE is set.
"""
from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from pathlib import Path

_DEFAULT_LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
_DATE_FMT = "%Y-%m-%d %H:%M:%S"
_NOISY = ("urllib3", "charset_normalizer")
_configured = False


def get_logger(name: str) -> logging.Logger:
    """Named logger; the root handlers are installed on first use."""
    global _configured
    if not _configured:
        _configure()
        _configured = True
    return logging.getLogger(name)


def _file_handler() -> logging.Handler | None:
    if os.environ.get("JOBFEED_NO_LOG_FILE"):
        return None
    log_dir = Path(os.environ.get("JOBFEED_LOG_DIR") or _DEFAULT_LOG_DIR)
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(
            log_dir / f"jobfeed_{datetime.now().strftime('%Y-%m-%d')}.log",
            encoding="utf-8",
        )
    except OSError:
        return None
    fh.setLevel(logging.DEBUG)
    return fh


def _configure() -> None:
    level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)

    for name in _NOISY:
        logging.getLogger(name).setLevel(logging.WARNING)

    root = logging.getLogger()
    if root.handlers:
        return

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    handlers: list[logging.Handler] = [console]
    fh = _file_handler()
    if fh is not None:
        handlers.append(fh)

    formatter = logging.Formatter(_FORMAT, datefmt=_DATE_FMT)
    for h in handlers:
        h.setFormatter(formatter)
        root.addHandler(h)
    # Root passes everything through; each handler filters by its own level.
    root.setLevel(min(h.level for h in handlers))
