from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
import os


LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"

_configured = False


def _ensure_base_logger() -> None:
    global _configured
    if _configured:
        return
    level = os.getenv("ASSETPREP_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(format=LOG_FORMAT)
    # basicConfig is a no-op once the root has handlers
    logging.getLogger().setLevel(getattr(logging, level, logging.INFO))
    _configured = True


def get_logger(name: str, log_file: Path | None = None) -> logging.Logger:
    _ensure_base_logger()
    logger = logging.getLogger(name)
    # One file handler per logger
    if log_file and not any(
        isinstance(h, RotatingFileHandler) for h in logger.handlers
    ):
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=3)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger


def attach_file_log(log_file: str | Path | None) -> None:
    """Mirror every pipeline and task log record into ``log_file``."""
    if not log_file:
        return
    path = Path(log_file)
    for name in ("orchestrator", "tasks"):
        get_logger(name, log_file=path)
