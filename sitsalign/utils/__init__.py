"""Configuration, logging, error handling and serialization utilities."""

from sitsalign.utils.config_manager import ConfigManager, merge_configs
from sitsalign.utils.logging_config import setup_logging

__all__ = ["ConfigManager", "merge_configs", "setup_logging"]
