# utils.py
"""
Utility functions for the particle heart.

This module provides helper functions, such as logging setup and
configuration loading, that are used across different parts of the
application but do not belong to the force model or the rendering.
"""
import logging
import logging.handlers
import copy
import json
import os
from typing import Dict, Any
from constants import DEFAULT_SIMULATION_PARAMETERS, VARIANT_PRESETS

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: A dictionary containing a "logging" key with "level",
#       "format", and "log_file" sub-keys. A null "log_file" disables
#       the file handler.
#   - Side Effects: Configures the root Python logger. Creates a log
#     directory if it doesn't exist. Sets up a console handler and a
#     rotating file handler.
#
# apply_preset(config: Dict[str, Any]) -> Dict[str, Any]:
#   - Outputs: A new config where every section is layered as
#     defaults < preset < explicit config values.
#   - Side Effects: None. Raises ValueError for an unknown preset name.

def setup_logging(config: Dict[str, Any]) -> None:
    """
    Configures the logging system from a configuration dictionary.

    Sets up logging to the console and, unless disabled, a rotating file.
    """
    log_config = config.get('logging', {})
    log_level = log_config.get('level', 'INFO').upper()
    log_format = log_config.get('format', '%(asctime)s - %(levelname)s - %(message)s')
    log_file_path = log_config.get('log_file', 'logs/heart.log')

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
    logging.debug(f"Log file path: {log_file_path}")

def load_config(path: str) -> Dict[str, Any]:
    """Loads a JSON configuration file and resolves its preset."""
    logging.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r') as f:
            config = json.load(f)
    except FileNotFoundError:
        logging.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError:
        logging.error(f"Error decoding JSON from {path}.")
        raise
    logging.info("Configuration loaded successfully.")
    return apply_preset(config)

def apply_preset(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Layers the simulation defaults and the named preset under the config.

    Values written explicitly in the config always win over the preset,
    and the preset wins over the built-in defaults.
    """
    preset_name = config.get('preset')
    preset = {}
    if preset_name is not None:
        if preset_name not in VARIANT_PRESETS:
            msg = (
                f"Configuration error: unknown preset {preset_name!r}. "
                f"Available presets: {', '.join(sorted(VARIANT_PRESETS))}."
            )
            logging.critical(msg)
            raise ValueError(msg)
        preset = VARIANT_PRESETS[preset_name]
        logging.info(f"Applying preset '{preset_name}'.")

    resolved = copy.deepcopy(config)
    for section in set(preset) | {'simulation_parameters'}:
        layered = {}
        if section == 'simulation_parameters':
            layered.update(copy.deepcopy(DEFAULT_SIMULATION_PARAMETERS))
        layered.update(copy.deepcopy(preset.get(section, {})))
        layered.update(config.get(section, {}))
        resolved[section] = layered
    return resolved
