"""Handles loading configuration from YAML files."""

import copy
import yaml
import os
import logging
from typing import Optional

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    'whisper_model': 'tiny',
    'source_language': None, # None lets Whisper detect the spoken language
    'device': 'cuda',
    'whisper_fp16': True,
    'translation_models': {
        'Chinese': 'Helsinki-NLP/opus-mt-zh-en',
    },
    'ffmpeg_path': None,
    'temp_dir': 'temp',
    'log_dir': 'logs',
    'log_file': 'vidsub.log',
}

class ConfigLoader:
    """Loads configuration settings from a YAML file on top of the defaults."""

    def load_config(self, config_path: Optional[str] = None) -> dict:
        """
        Loads configuration from the specified YAML file path.

        Args:
            config_path: The path to the YAML configuration file. None returns
                         the defaults.

        Returns:
            The defaults updated with the file's settings.

        Raises:
            FileNotFoundError: If the configuration file does not exist.
            ConfigurationError: If the file cannot be parsed as a YAML mapping
                              or cannot be read.
        """
        config = copy.deepcopy(DEFAULT_CONFIG)
        if config_path is None:
            logger.info("No configuration file given, using defaults.")
            return config

        logger.info(f"Attempting to load configuration from: {config_path}")
        if not os.path.exists(config_path):
            logger.error(f"Configuration file not found at path: {config_path}")
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        if not os.path.isfile(config_path):
            logger.error(f"Configuration path is not a file: {config_path}")
            raise ConfigurationError(f"Configuration path is not a file: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Error parsing YAML configuration file {config_path}: {e}", exc_info=True)
            raise ConfigurationError(f"Invalid YAML format in {config_path}: {e}") from e
        except OSError as e:
            logger.error(f"Error reading configuration file {config_path}: {e}", exc_info=True)
            raise ConfigurationError(f"Could not read configuration file {config_path}: {e}") from e

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            logger.error(f"Configuration file {config_path} did not load as a dictionary (root object).")
            raise ConfigurationError(f"Invalid YAML structure in {config_path}. Root must be a mapping (dictionary).")
        models = loaded.get('translation_models')
        if models is not None and not isinstance(models, dict):
            raise ConfigurationError("'translation_models' must map language names to model ids.")

        config.update(loaded)
        logger.info(f"Configuration loaded successfully from {config_path}")
        return config
