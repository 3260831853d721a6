"""Logging setup shared by the lineup command-line tools."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

LOG_DIR = Path(__file__).parent.parent / "logs"
LOG_FILE_NAME = "lineup_engine.log"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def setup_logging(
    log_level: str = "INFO",
    console_level: Optional[str] = None,
    log_dir: Optional[Path] = None,
) -> Path:
    """Route records to a rotating lineup log and to the console.

    Only the first call installs handlers; later calls return the log file
    already in use.

    Args:
        log_level: Root level, also used by the file handler.
        console_level: Console threshold. Defaults to ``log_level``.
        log_dir: Directory for ``lineup_engine.log``; ``logs/`` by default.

    Returns:
        Path of the log file.
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        if isinstance(handler, logging.handlers.RotatingFileHandler):
            return Path(handler.baseFilename)

    log_dir = Path(log_dir) if log_dir is not None else LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root_logger.setLevel(_level(log_level))
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    # 5MB per file, 3 backups
    file_handler = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=5 * 1024 * 1024, backupCount=3
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(_level(console_level or log_level))
    console_handler.setFormatter(formatter)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logging.getLogger(__name__).info(
        "Logging to %s (level=%s, console=%s)",
        log_file,
        log_level,
        console_level or log_level,
    )
    return log_file
