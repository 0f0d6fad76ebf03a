"""
Configuration file loading.

This module reads YAML and JSON configuration files and applies them to a
config store, where ``$NAME`` expressions in the file are resolved against
the environment like any other write.
"""

import json
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .store import ConfigStore


class ConfigLoader:
    """Configuration loader supporting YAML and JSON files."""

    def load_file(self, file_path: Union[str, Path]) -> Dict[str, Any]:
        """
        Load a configuration file into a dictionary.

        Args:
            file_path: Path to a ``.yaml``, ``.yml`` or ``.json`` file

        Returns:
            Top-level configuration mapping
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {file_path}")

        if path.suffix.lower() in ['.yaml', '.yml']:
            data = self._load_yaml(path)
        elif path.suffix.lower() == '.json':
            data = self._load_json(path)
        else:
            raise ValueError(
                f"Unsupported configuration file format: {path.suffix}")

        if not isinstance(data, dict):
            raise ValueError(
                f"Configuration root in {file_path} must be a mapping")
        return data

    def apply(self, store: ConfigStore, file_path: Union[str, Path]) -> Dict[str, Any]:
        """
        Load a configuration file and set its options on a store.

        Args:
            store: Store receiving the options
            file_path: Configuration file

        Returns:
            The mapping that was loaded
        """
        data = self.load_file(file_path)
        store.update(data)
        return data

    def _load_yaml(self, path: Path) -> Any:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e

    def _load_json(self, path: Path) -> Any:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
