"""
Configuration models for the setup wizard.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

DEFAULT_API_BASE_URL = "https://api.telegram.org"


@dataclass
class SetupConfig:
    """Settings shared by setup steps."""

    project_root: Path
    api_base_url: str = DEFAULT_API_BASE_URL
    request_timeout: float = 10.0
    env_file: str = ".env"
    env_sync_path: str = "data/env/env"
    log_level: str = "INFO"
    # None keeps logging on the console and out of the project tree
    log_dir: Optional[str] = None

    @property
    def env_file_path(self) -> Path:
        return self.project_root / self.env_file

    @property
    def env_sync_file_path(self) -> Path:
        return self.project_root / self.env_sync_path

    @property
    def log_dir_path(self) -> Optional[Path]:
        if self.log_dir is None:
            return None
        return self.project_root / self.log_dir

    def validate(self) -> bool:
        """Validate setup configuration."""
        if not isinstance(self.api_base_url, str):
            raise ValueError("api_base_url must be a string")

        parsed_url = urlparse(self.api_base_url)
        if parsed_url.scheme not in ["http", "https"] or not parsed_url.netloc:
            raise ValueError(f"api_base_url must be an http(s) URL: {self.api_base_url}")

        if not isinstance(self.request_timeout, (int, float)) or isinstance(self.request_timeout, bool):
            raise ValueError("request_timeout must be a number")

        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")

        if not isinstance(self.env_file, str) or not self.env_file:
            raise ValueError("env_file must be a non-empty path")

        if not isinstance(self.env_sync_path, str) or not self.env_sync_path:
            raise ValueError("env_sync_path must be a non-empty path")

        if self.log_dir is not None and (not isinstance(self.log_dir, str) or not self.log_dir):
            raise ValueError("log_dir must be a non-empty path when set")

        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if not isinstance(self.log_level, str) or self.log_level.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {valid_levels}")

        return True
