"""Configuration management for the nesting engine."""

import json
import logging
from pathlib import Path
from typing import Dict, Any

from config import settings
from core.exceptions import ConfigFileError
from ..models.machine_config import NestingConfig, MachineConfig

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).parent
DEFAULT_CONFIG_PATH = CONFIG_DIR / "default_config.json"


def _resolve_path(config_path: str = None) -> Path:
    if config_path is not None:
        return Path(config_path)
    if settings.NESTING_CONFIG_PATH:
        return Path(settings.NESTING_CONFIG_PATH)
    return DEFAULT_CONFIG_PATH


def load_config(config_path: str = None) -> Dict[str, Any]:
    """
    Load configuration from JSON file.

    Args:
        config_path: Path to config file (default: NESTING_CONFIG_PATH from
            settings, then the packaged default_config.json)

    Returns:
        Configuration dictionary
    """
    path = _resolve_path(config_path)

    if not path.exists():
        raise ConfigFileError(str(path), "file not found")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigFileError(str(path), f"invalid JSON: {e}") from e


def save_config(config: Dict[str, Any], config_path: str = None):
    """
    Save configuration to JSON file.

    Args:
        config: Configuration dictionary
        config_path: Path to save config (default: default_config.json)
    """
    path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(config, f, indent=4)

    logger.info(f"Saved nesting config: {path}")


def create_nesting_config_from_config(config: Dict[str, Any] = None) -> NestingConfig:
    """
    Create NestingConfig from configuration dictionary.

    Args:
        config: Configuration dict (loads default if None)

    Returns:
        NestingConfig instance
    """
    if config is None:
        config = load_config()

    try:
        nesting_config = NestingConfig.from_dict(config)
    except (KeyError, TypeError, ValueError) as e:
        raise ConfigFileError("<dict>", f"invalid value: {e}") from e

    # Environment override for reproducible runs
    if settings.NESTING_GENETIC_SEED is not None:
        nesting_config.genetic.seed = settings.NESTING_GENETIC_SEED

    return nesting_config


def create_machine_config_from_config(config: Dict[str, Any] = None) -> MachineConfig:
    """
    Create MachineConfig from configuration dictionary.

    Args:
        config: Configuration dict (loads default if None)

    Returns:
        MachineConfig instance
    """
    if config is None:
        config = load_config()

    return MachineConfig.from_dict(config.get('machine_profile', {}))


__all__ = [
    'load_config',
    'save_config',
    'create_nesting_config_from_config',
    'create_machine_config_from_config',
    'DEFAULT_CONFIG_PATH'
]
