# utils.py
"""
Utility functions for the application framework.

This module provides helper functions, such as logging setup and config
loading, that are used across the application but do not belong to the
sand math or the rendering.
"""
import logging
import logging.handlers
import json
import os
import time
from typing import Dict, Any, Optional

from constants import DEFAULT_LOG_THROTTLE_FRAMES

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: A dictionary containing a "logging" key with "level",
#       "format", and "log_file" sub-keys. "log_file" may be null.
#   - Outputs: None
#   - Side Effects: Configures the root Python logger with a console
#     handler. When a log file is configured, creates its directory and
#     adds a rotating file handler.
#   - Invariants: After this function runs, the logging system is
#     initialized and ready for use throughout the application.
#
# load_config(path: str) -> Dict[str, Any]:
#   - Raises FileNotFoundError / json.JSONDecodeError after logging them.
#   - Invariants: run_control.log_throttle_frames is a positive integer in
#     the returned config; bad values are replaced by the default.
#
# session_seed(seed: Optional[int]) -> int:
#   - Returns `seed` (or wall-clock milliseconds when None) folded into
#     [0, 2**32), so negative seeds are accepted.

def setup_logging(config: Dict[str, Any]) -> None:
    """
    Configures the logging system from a configuration dictionary.

    Sets up logging to the console and, optionally, a rotating file.
    """
    log_config = config.get('logging', {})
    log_level = log_config.get('level', 'INFO').upper()
    log_format = log_config.get('format', '%(asctime)s - %(levelname)s - %(message)s')
    log_file_path = log_config.get('log_file')

    # Get the root logger
    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Clear existing handlers to avoid duplication
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file_path:
        log_dir = os.path.dirname(log_file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        # Rotates when the log reaches 1MB, keeps 5 backup logs.
        file_handler = logging.handlers.RotatingFileHandler(
            log_file_path, maxBytes=1024*1024, backupCount=5
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logging.info("Logging system initialized.")
    logging.debug(f"Log level set to {log_level}.")
    logging.debug(f"Log file path: {log_file_path or '(console only)'}")

def load_config(path: str) -> Dict[str, Any]:
    """
    Reads the run settings for the sand screens.

    Settings the frame loop divides or counts by are checked here so a bad
    value is reported once at startup instead of failing mid-loop.
    """
    logging.info(f"Reading sand settings from {path}")
    try:
        with open(path, 'r') as f:
            config = json.load(f)
    except FileNotFoundError:
        logging.error(f"No settings file at {path}.")
        raise
    except json.JSONDecodeError as e:
        logging.error(f"Settings file {path} is not valid JSON (line {e.lineno}).")
        raise

    run_params = config.setdefault('run_control', {})
    throttle = run_params.get('log_throttle_frames', DEFAULT_LOG_THROTTLE_FRAMES)
    if not isinstance(throttle, int) or throttle < 1:
        logging.warning(
            f"log_throttle_frames must be a positive integer, got {throttle!r}. "
            f"Using {DEFAULT_LOG_THROTTLE_FRAMES}."
        )
        run_params['log_throttle_frames'] = DEFAULT_LOG_THROTTLE_FRAMES

    logging.info(f"Sand settings loaded; sections: {sorted(config)}")
    return config

def session_seed(seed: Optional[int] = None) -> int:
    """
    Returns a seed numpy generators accept.

    Configured seeds may be negative, so every seed is folded into the
    unsigned 32-bit range.
    """
    if seed is None:
        seed = int(time.time() * 1000)
    return int(seed) & 0xFFFFFFFF
