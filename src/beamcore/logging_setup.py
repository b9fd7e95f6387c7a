from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional


def setup_logging(
    log_dir: Optional[str] = None,
    log_name: str = "beamcore.log",
    level: int = logging.INFO,
) -> logging.Logger:
    """Attach stream (and optionally rotating file) handlers to the ``beamcore`` logger."""
    logger = logging.getLogger("beamcore")
    logger.setLevel(level)

    # Calling this twice must not duplicate handlers.
    if logger.handlers:
        return logger

    fmt = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")

    sh = logging.StreamHandler()
    sh.setLevel(level)
    sh.setFormatter(fmt)
    logger.addHandler(sh)

    if log_dir is not None:
        os.makedirs(log_dir, exist_ok=True)
        log_path = os.path.join(log_dir, log_name)
        fh = RotatingFileHandler(log_path, maxBytes=2_000_000, backupCount=3, encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(fmt)
        logger.addHandler(fh)
        logger.info("logging initialised, file: %s", log_path)

    return logger
