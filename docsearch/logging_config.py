"""
Logging setup for the docsearch server: console plus rotating session files.

Every docsearch module logs through a module-level
``logging.getLogger(__name__)`` logger, so records carry their origin:

    docsearch.controller            build summaries (INFO), per-document token
                                    counts (DEBUG), source timeouts and read
                                    failures, duplicate IDs, queries against an
                                    unbuilt or stale index (WARNING)
    docsearch.documents.web / .pdf  unreachable URLs, non-2xx responses,
                                    unreadable PDFs (WARNING), skipped pages (DEBUG)
    docsearch.documents.factory     seed file loading (INFO)
    docsearch.tfidf.*               index and IDF sizes (DEBUG)
    docsearch.main                  startup, seeding, per-query result counts,
                                    unhandled request errors

docsearch.main calls setup_logging() once at import time with LOG_LEVEL
(console level, default INFO) and LOG_FILE (default logs/docsearch.log).
"""
import glob
import logging
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path

MAX_SESSION_LOGS = 5


def setup_logging(log_file: str = "logs/docsearch.log", console_level: int = logging.INFO, file_level: int = logging.DEBUG):
    """
    Configure logging with two destinations:
    - Console: Brief logs (INFO by default)
    - File: Detailed logs (DEBUG by default) with rotation

    Rotation policy:
    - New log file on each server start (timestamp-based naming)
    - Keep last 5 log files (auto-cleanup on startup)
    - Auto-rotate when file reaches 10MB

    Source failures (unreachable URLs, broken PDFs) are logged at WARNING,
    so they show up on the console even though search results hide them.

    Args:
        log_file: Base path to log file (relative to working directory)
        console_level: Console logging level (INFO = brief)
        file_level: File logging level (DEBUG = verbose, includes per-document token counts)

    Returns:
        Path of the session log file
    """
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    # Keep the newest MAX_SESSION_LOGS - 1 logs; the new session makes it MAX_SESSION_LOGS
    log_pattern = str(log_path.parent / f"{log_path.stem}_*.log")
    existing_logs = sorted(glob.glob(log_pattern), reverse=True)
    for old_log in existing_logs[MAX_SESSION_LOGS - 1:]:
        try:
            Path(old_log).unlink()
        except OSError:
            pass  # Another process may have removed it

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    session_log = log_path.parent / f"{log_path.stem}_{timestamp}.log"

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Capture everything, filter in handlers

    # Remove existing handlers to avoid duplicates
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))

    file_handler = RotatingFileHandler(
        session_log,
        mode='a',
        maxBytes=10*1024*1024,  # 10MB
        backupCount=10,
        encoding='utf-8'
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))

    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    # Suppress noisy third-party loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    logging.info(f"Logging configured: console={logging.getLevelName(console_level)}, file={session_log} ({logging.getLevelName(file_level)})")

    return session_log
