"""
Configuration Manager for Exe Icon Extractor
Handles loading, saving, and accessing configuration settings
"""

import os
import copy
import json
import logging
from pathlib import Path

OUTPUT_FORMATS = ("ico", "bmp", "png", "jpg")

# Default configuration values
DEFAULT_CONFIG = {
    # Core Features
    "SKIP_DEPENDENCIES": False,

    # Extraction Defaults (command line flags override these per run)
    "EXTRACTION": {
        "default_format": "ico",
        "default_index": 0,
        "prefer_large": False,
        "output_basename": "icon",
        "jpg_quality": 95,
        "jpg_background": [255, 255, 255]
    },

    # Logging and Debug
    "LOGGING": {
        "log_level": "INFO",
        "log_to_file": True,
        "log_format": "detailed",
        "max_log_files": 5,
        "log_location": None
    }
}


def get_config_path():
    """Get the path to the configuration file."""
    # Use user's home directory for configuration
    home_dir = Path.home()
    config_dir = home_dir / ".exe_icon_extractor"

    # Create directory if it doesn't exist
    os.makedirs(config_dir, exist_ok=True)

    return config_dir / "config.json"


def merge_config(defaults, overrides):
    """Return defaults updated with overrides, recursing into nested sections."""
    merged = copy.deepcopy(defaults)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config():
    """Load configuration from file or create default if not exists."""
    config_path = get_config_path()

    # If config file exists, load it
    if config_path.exists():
        try:
            with open(config_path, 'r') as f:
                config = merge_config(DEFAULT_CONFIG, json.load(f))
                logging.info(f"Configuration loaded from {config_path}")
                return config
        except Exception as e:
            logging.error(f"Error loading configuration: {e}")
            logging.info("Using default configuration")
            return copy.deepcopy(DEFAULT_CONFIG)
    else:
        # Create default config
        save_config(DEFAULT_CONFIG)
        logging.info(f"Default configuration created at {config_path}")
        return copy.deepcopy(DEFAULT_CONFIG)


def save_config(config):
    """Save configuration to file."""
    config_path = get_config_path()

    try:
        with open(config_path, 'w') as f:
            json.dump(config, f, indent=4)
        logging.info(f"Configuration saved to {config_path}")
        return True
    except Exception as e:
        logging.error(f"Error saving configuration: {e}")
        return False
