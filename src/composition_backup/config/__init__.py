"""Configuration management: engine config model, TOML and input loading.

Usage:
    >>> from composition_backup.config import load_engine_config, config_from_input, EngineConfig
"""

from composition_backup.config.loader import config_from_input, load_engine_config
from composition_backup.config.models import EngineConfig

__all__ = ["load_engine_config", "config_from_input", "EngineConfig"]
