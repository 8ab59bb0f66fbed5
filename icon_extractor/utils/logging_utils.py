"""
Logging utilities for Exe Icon Extractor
"""

import os
import logging
from pathlib import Path
from datetime import datetime

LOG_FILE_PREFIX = "exe_icon_extractor_"


def rotate_log_files(log_dir: Path, max_log_files: int):
    """Delete the oldest log files until at most max_log_files remain."""
    log_files = sorted(log_dir.glob(f'{LOG_FILE_PREFIX}*.log'))
    while len(log_files) > max_log_files:
        try:
            log_files[0].unlink()
            log_files = log_files[1:]
        except OSError as e:
            logging.warning(f"Could not remove old log file {log_files[0]}: {e}")
            break


def setup_logging(config=None, verbose=False):
    """Initialize logging configuration."""
    try:
        logging_config = (config or {}).get("LOGGING", {})

        # Configure logging format based on settings
        log_format = logging_config.get("log_format", "detailed")
        if log_format in ("detailed", "debug"):
            format_str = '%(asctime)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
        else:  # basic
            format_str = '%(message)s'

        level = logging.DEBUG if verbose else getattr(logging, logging_config.get("log_level", "INFO"))

        # Set up root logger
        root_logger = logging.getLogger()
        root_logger.setLevel(level)

        # Clear any existing handlers
        root_logger.handlers = []

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter('%(message)s'))
        root_logger.addHandler(console_handler)

        # Create file handler if enabled (keeps detailed logs)
        if logging_config.get("log_to_file", True):
            log_dir = Path(logging_config.get("log_location") or "logs")
            os.makedirs(log_dir, exist_ok=True)

            timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
            log_file = log_dir / f"{LOG_FILE_PREFIX}{timestamp}.log"

            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setFormatter(logging.Formatter(format_str))
            root_logger.addHandler(file_handler)

            rotate_log_files(log_dir, logging_config.get("max_log_files", 5))

        logging.debug("Logging initialized")

    except Exception as e:
        print(f"Could not set up logging ({e}), using basic console output")
        # Set up basic console logging as fallback
        logging.basicConfig(
            level=logging.INFO,
            format='%(message)s'
        )
