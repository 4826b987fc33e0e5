# src/ratecache/shared/logging_conf.py
"""
Logging Configuration - Logging Setup and Configuration

This module provides centralized logging configuration for applications that
embed the converter. Library modules only create module-level loggers; hosts
call setup_logging() once at startup.

Files that USE this module:
- Host applications (setup_logging function for logging initialization)
- tests.test_logging_conf (unit tests)

Files that this module USES:
- ratecache.config (LOG_* settings used as defaults)
"""
import logging
import sys
from pathlib import Path
from typing import Optional, Union
from logging.handlers import RotatingFileHandler

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s :: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level=logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    log_dir: Optional[Union[str, Path]] = None,
    max_bytes: Optional[int] = None,
    backup_count: Optional[int] = None,
    log_stdout: Optional[bool] = None,
) -> Optional[Path]:
    """
    Configure application-wide logging settings.
    
    Can output to stdout, file, or both. Supports log rotation for file logging.
    
    Args:
        level: Logging level (default: logging.INFO)
        log_file: Optional path to log file (enables file logging)
        log_dir: Optional directory for log files (file is named ratecache.log)
        max_bytes: Maximum size per log file before rotation
        backup_count: Number of backup log files to keep
        log_stdout: Whether to log to stdout
        
    Arguments left to None are read from settings (LOG_FILE, LOG_DIR,
    LOG_MAX_BYTES, LOG_BACKUP_COUNT, RATECACHE_LOG_STDOUT).
        
    Returns:
        Path of the log file if file logging was enabled, None otherwise
    """
    # Import settings here to avoid circular dependency
    from ratecache.config import settings

    if log_file is None and log_dir is None:
        log_file = settings.log_file
        log_dir = settings.log_dir
    if max_bytes is None:
        max_bytes = settings.log_max_bytes
    if backup_count is None:
        backup_count = settings.log_backup_count
    # stdout is skipped under process supervisors that capture output themselves
    if log_stdout is None:
        log_stdout = settings.log_stdout

    handlers = []
    log_file_path: Optional[Path] = None
    
    if log_stdout:
        stdout_handler = logging.StreamHandler(sys.stdout)
        stdout_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        handlers.append(stdout_handler)
    
    if log_file or log_dir:
        if log_dir:
            log_dir = Path(log_dir)
            log_dir.mkdir(parents=True, exist_ok=True)
            log_file_path = log_dir / "ratecache.log"
        else:
            log_file_path = Path(log_file)
            log_file_path.parent.mkdir(parents=True, exist_ok=True)
        
        file_handler = RotatingFileHandler(
            log_file_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        handlers.append(file_handler)
    
    if not handlers:
        handlers = [logging.StreamHandler(sys.stdout)]
    
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
        force=True,
    )
    
    logger = logging.getLogger(__name__)
    if log_file_path:
        logger.info("Logging configured: file=%s, level=%s", log_file_path, level)
    else:
        logger.info("Logging configured: stdout, level=%s", level)
    return log_file_path
