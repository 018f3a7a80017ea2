# storefront/config/logging_config.py

"""Per-launch log file for the catalog.

Every launch of the TUI or a headless command writes
``<LOGS_DIR>/run_YYYYMMDD_HHMMSS.log``. Catalog, storage, UI and CLI
modules log to ``storefront.<area>`` child loggers, which propagate to
the handlers installed here. Only the newest ``Settings.LOG_KEEP_RUNS``
run logs are kept.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from storefront.config.settings import Settings

PROJECT_LOGGER = "storefront"
FILE_HANDLER_NAME = "storefront-run-file"
CONSOLE_HANDLER_NAME = "storefront-console"

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)
_CONSOLE_FORMAT = "%(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level(name: str, default: int) -> int:
    """Resolve a level name from settings, falling back on typos."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


def prune_run_logs(logs_dir: Path, keep: int) -> list[Path]:
    """Delete all but the newest *keep* run logs; return what was removed."""
    runs = sorted(logs_dir.glob("run_*.log"))
    stale = runs[:-keep] if keep > 0 else runs
    for path in stale:
        path.unlink(missing_ok=True)
    return stale


def _installed(logger: logging.Logger, name: str) -> logging.Handler | None:
    for handler in logger.handlers:
        if handler.get_name() == name:
            return handler
    return None


def setup_logging(logs_dir: Path | None = None) -> Path:
    """Attach the run-file and console handlers to ``storefront``.

    Calling it again in the same process keeps the handlers from the first
    call and returns the file that is already being written.
    """
    project_logger = logging.getLogger(PROJECT_LOGGER)
    project_logger.setLevel(logging.DEBUG)

    existing = _installed(project_logger, FILE_HANDLER_NAME)
    if isinstance(existing, logging.FileHandler):
        return Path(existing.baseFilename)

    target_dir = logs_dir or Settings.LOGS_DIR
    target_dir.mkdir(parents=True, exist_ok=True)
    prune_run_logs(target_dir, Settings.LOG_KEEP_RUNS - 1)

    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = target_dir / f"run_{stamp}.log"

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.set_name(FILE_HANDLER_NAME)
    file_handler.setLevel(_level(Settings.LOG_FILE_LEVEL, logging.DEBUG))
    file_handler.setFormatter(
        logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT)
    )
    project_logger.addHandler(file_handler)

    if _installed(project_logger, CONSOLE_HANDLER_NAME) is None:
        # stderr, so JSON written by the headless commands stays clean
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.set_name(CONSOLE_HANDLER_NAME)
        console_handler.setLevel(
            _level(Settings.LOG_CONSOLE_LEVEL, logging.WARNING)
        )
        console_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
        project_logger.addHandler(console_handler)

    project_logger.info(
        "Catalog run log %s (data file %s)", log_file, Settings.DATA_PATH
    )
    return log_file
