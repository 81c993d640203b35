"""
Configuration management for the setup wizard.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..models.config import SetupConfig

CONFIG_FILE_NAMES = ["setup.yaml", "setup.yml", "setup.json"]


class ConfigurationManager:
    """Loads and validates wizard settings."""

    def __init__(
        self,
        config_path: Optional[Union[str, Path]] = None,
        project_root: Optional[Union[str, Path]] = None,
    ):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to a settings file. If None, the project root is
                searched and defaults apply when nothing is found.
            project_root: Directory the wizard operates on. Defaults to the
                current working directory.
        """
        self.project_root = Path(project_root or os.getcwd()).resolve()
        self.config_path = Path(config_path) if config_path else self._find_config_file()
        self._config: Optional[SetupConfig] = None

    def _find_config_file(self) -> Optional[Path]:
        """Find a settings file in the project root."""
        for name in CONFIG_FILE_NAMES:
            path = self.project_root / name
            if path.exists():
                return path
        return None

    def load_config(self) -> SetupConfig:
        """
        Load configuration.

        Returns:
            SetupConfig with validated settings.

        Raises:
            ValueError: If configuration is invalid or cannot be parsed.
            FileNotFoundError: If an explicit configuration file doesn't exist.
        """
        raw_config: Dict[str, Any] = {}

        if self.config_path is not None:
            if not self.config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

            try:
                with open(self.config_path, "r", encoding="utf-8") as f:
                    if self.config_path.suffix == ".json":
                        raw_config = json.load(f)
                    else:
                        raw_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in configuration file: {e}")
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in configuration file: {e}")

            if not isinstance(raw_config, dict):
                raise ValueError("Configuration file must contain a mapping")

        raw_config = self._expand_env_vars(raw_config)

        config = self._parse_config(raw_config)
        config.validate()

        self._config = config
        return config

    def _expand_env_vars(self, obj: Any) -> Any:
        """Recursively expand environment variables in configuration."""
        if isinstance(obj, dict):
            return {key: self._expand_env_vars(value) for key, value in obj.items()}
        elif isinstance(obj, list):
            return [self._expand_env_vars(item) for item in obj]
        elif isinstance(obj, str):
            # Expand ${VAR_NAME} patterns
            if obj.startswith("${") and obj.endswith("}"):
                var_name = obj[2:-1]
                env_value = os.getenv(var_name)
                if env_value is None:
                    raise ValueError(f"Environment variable '{var_name}' not found")
                return env_value
            return obj
        else:
            return obj

    def _section(self, raw_config: Dict[str, Any], name: str) -> Dict[str, Any]:
        """Return a top-level settings section, which must be a mapping."""
        section = raw_config.get(name)
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise ValueError(f"Configuration section '{name}' must be a mapping")
        return section

    def _parse_config(self, raw_config: Dict[str, Any]) -> SetupConfig:
        """Parse raw configuration dictionary into SetupConfig."""
        telegram = self._section(raw_config, "telegram")
        env = self._section(raw_config, "env")
        logging_data = self._section(raw_config, "logging")

        try:
            timeout = float(telegram.get("request_timeout", 10.0))
        except (TypeError, ValueError):
            raise ValueError("telegram.request_timeout must be a number")

        return SetupConfig(
            project_root=self.project_root,
            api_base_url=str(telegram.get("api_base_url", SetupConfig.api_base_url)).rstrip("/"),
            request_timeout=timeout,
            env_file=env.get("file", SetupConfig.env_file),
            env_sync_path=env.get("sync_path", SetupConfig.env_sync_path),
            log_level=str(logging_data.get("level", SetupConfig.log_level)).upper(),
            log_dir=logging_data.get("dir"),
        )

    def get_config(self) -> SetupConfig:
        """Get current configuration, loading if necessary."""
        if self._config is None:
            return self.load_config()
        return self._config
