from __future__ import annotations
import logging
import os
from pathlib import Path

_LOGGERS = {}

_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


def get_logger(name: str = "prospect_generator") -> logging.Logger:
    if name in _LOGGERS:
        return _LOGGERS[name]

    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)

    # Console handler
    ch = logging.StreamHandler()
    ch.setLevel(logging.INFO)
    ch.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(ch)

    # File handler (logs/prospect_generator.log)
    log_dir = Path(os.getenv("LOG_DIR") or Path(__file__).resolve().parents[2] / "logs")
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_dir / "prospect_generator.log", encoding="utf-8")
        fh.setLevel(logging.INFO)
        fh.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(fh)
    except OSError as e:
        # read-only filesystems (serverless hosts) only get the console
        logger.warning(f"⚠️ File logging disabled: {e}")

    logger.propagate = False
    _LOGGERS[name] = logger
    return logger
