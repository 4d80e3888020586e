"""
Alignment job configuration.

A job is configured by ``alignment.yaml`` (or a JSON file with the same
sections) in the config directory. Per-job overrides, such as another
classification interval, are deep-merged over the file and the result is
checked against ``schemas/alignment_schema.json`` before it becomes
AlignmentSettings.
"""

import yaml
import json
import logging
import jsonschema
from pathlib import Path
from typing import Dict, Any, Optional

from sitsalign.data.structs import AlignmentSettings

logger = logging.getLogger(__name__)

ALIGNMENT_CONFIG = "alignment.yaml"
ALIGNMENT_SCHEMA = "alignment_schema.json"


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep merge two configurations.

    Nested sections are merged key by key; any other override value replaces
    the base value.
    """
    merged = base.copy()
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigManager:
    """
    Loads and validates alignment job configurations.
    """

    def __init__(self, config_dir: Optional[str] = None, schema_dir: Optional[str] = None):
        self.config_dir = Path(config_dir) if config_dir else Path("config")
        self.schema_dir = Path(schema_dir) if schema_dir else self.config_dir / "schemas"
        self._schema: Optional[Dict[str, Any]] = None

    def read_config(self, config_name: str = ALIGNMENT_CONFIG) -> Dict[str, Any]:
        """
        Read a configuration file (YAML or JSON) without validating it.

        Args:
            config_name: File name inside the config directory

        Returns:
            Configuration dictionary; an empty file gives an empty dictionary
        """
        config_path = self.config_dir / config_name

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "r") as f:
            if config_path.suffix in (".yaml", ".yml"):
                config = yaml.safe_load(f)
            elif config_path.suffix == ".json":
                config = json.load(f)
            else:
                raise ValueError(f"Unsupported configuration format: {config_path.suffix}")

        return config or {}

    @property
    def schema(self) -> Dict[str, Any]:
        """The alignment schema, read once per manager."""
        if self._schema is None:
            schema_path = self.schema_dir / ALIGNMENT_SCHEMA
            if not schema_path.exists():
                raise FileNotFoundError(f"Schema file not found: {schema_path}")
            with open(schema_path, "r") as f:
                self._schema = json.load(f)
        return self._schema

    def validate_config(self, config: Dict[str, Any]) -> None:
        """
        Validate a configuration against the alignment schema.

        Raises:
            ValueError: Naming the offending section and key
        """
        try:
            jsonschema.validate(instance=config, schema=self.schema)
        except jsonschema.exceptions.ValidationError as e:
            path_str = " -> ".join(str(p) for p in e.path) if e.path else "root"
            error_msg = f"Configuration validation failed at '{path_str}': {e.message}"
            logger.error(error_msg)
            raise ValueError(error_msg) from e

    def load_config(
        self,
        config_name: str = ALIGNMENT_CONFIG,
        overrides: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Read a job configuration, merge overrides and validate the result.

        Args:
            config_name: File name inside the config directory
            overrides: Values taking precedence over the file (e.g. a job's interval)

        Returns:
            Validated configuration dictionary
        """
        config = self.read_config(config_name)
        if overrides:
            config = merge_configs(config, overrides)
        self.validate_config(config)
        logger.info(f"Loaded alignment configuration from {self.config_dir / config_name}")
        return config

    def load_settings(
        self,
        config_name: str = ALIGNMENT_CONFIG,
        overrides: Optional[Dict[str, Any]] = None
    ) -> AlignmentSettings:
        """
        Load a job configuration as typed settings.

        Args:
            config_name: File name inside the config directory
            overrides: Values taking precedence over the file

        Returns:
            AlignmentSettings for build_class_info, the selection builders
            and setup_logging
        """
        settings = AlignmentSettings.from_config(self.load_config(config_name, overrides))
        logger.debug(
            f"Alignment settings: interval '{settings.interval}', reference row "
            f"{settings.reference_row}, {settings.metadata_columns} metadata columns"
        )
        return settings
