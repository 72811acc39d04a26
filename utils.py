# utils.py
"""
Logging and configuration helpers shared by the particle field window
(main.py) and the post scaffold (create_post.py).
"""
import logging
import logging.handlers
import json
import os
from typing import Dict, Any, Optional

# --- Data Contracts ---
#
# setup_logging(log_config: Optional[Dict[str, Any]] = None,
#               log_file: Optional[str] = None, level: Optional[str] = None) -> str:
#   - Inputs:
#     - log_config: the "logging" section of config.json ("level", "format",
#       "log_file"), or None for the defaults.
#     - log_file, level: override the section. The scaffold CLI has no
#       config file and passes these directly.
#   - Outputs: the path of the log file in use.
#   - Side Effects: Replaces the root logger's handlers with a console
#     handler and a rotating file handler. Creates the log directory.
#
# load_config(path: str) -> Dict[str, Any]:
#   - Outputs: the parsed config with every section of CONFIG_SECTIONS
#     present (missing ones as {}).
#   - Raises: FileNotFoundError, json.JSONDecodeError, ValueError when the
#     file or one of its sections is not a JSON object. Logged first.

CONFIG_SECTIONS = ('particle_field', 'run_control', 'visualization', 'theme', 'logging')

DEFAULT_LOG_LEVEL = 'INFO'
DEFAULT_LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
DEFAULT_LOG_FILE = 'logs/particle_field.log'
LOG_MAX_BYTES = 1024 * 1024
LOG_BACKUP_COUNT = 5


def setup_logging(
    log_config: Optional[Dict[str, Any]] = None,
    log_file: Optional[str] = None,
    level: Optional[str] = None
) -> str:
    """
    Routes the root logger to the console and a rotating log file.
    """
    log_config = log_config or {}
    log_level = (level or log_config.get('level') or DEFAULT_LOG_LEVEL).upper()
    log_format = log_config.get('format', DEFAULT_LOG_FORMAT)
    log_file_path = log_file or log_config.get('log_file') or DEFAULT_LOG_FILE

    log_dir = os.path.dirname(log_file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Running twice (tests, a second CLI call) must not stack handlers.
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT,
        encoding='utf-8'
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    logging.debug(f"Logging at {log_level} to {log_file_path}.")
    return log_file_path


def load_config(path: str) -> Dict[str, Any]:
    """Loads config.json and fills in the sections it leaves out."""
    logging.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            config = json.load(f)
    except FileNotFoundError:
        logging.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError:
        logging.error(f"Error decoding JSON from {path}.")
        raise

    if not isinstance(config, dict):
        logging.error(f"Configuration in {path} is not a JSON object.")
        raise ValueError(f"{path}: expected a JSON object at the top level")

    for section in CONFIG_SECTIONS:
        value = config.setdefault(section, {})
        if not isinstance(value, dict):
            logging.error(f"Config section '{section}' in {path} is not a JSON object.")
            raise ValueError(f"{path}: section '{section}' must be a JSON object")

    unknown = sorted(set(config) - set(CONFIG_SECTIONS))
    if unknown:
        logging.warning(f"Ignoring unknown config sections: {', '.join(unknown)}")

    logging.info("Configuration loaded successfully.")
    return config
