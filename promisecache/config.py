"""
Repository configuration.

Settings come from the `repository` section of a YAML file (default `promisecache.yaml`),
then environment variables override individual fields:

    PROMISECACHE_NAME, PROMISECACHE_FETCH_DELAY, PROMISECACHE_MAX_WORKERS, PROMISECACHE_LOG_LEVEL
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field

_logger = logging.getLogger(__name__)

ENV_PREFIX = "PROMISECACHE_"


class RepositorySettings(BaseModel):
    """UserRepository configuration"""
    name: str = "current_user"
    fetch_delay: float = Field(3.0, ge=0)
    max_workers: Optional[int] = Field(None, ge=1)
    log_level: str = "INFO"


class ConfigManager:
    """Loads RepositorySettings from YAML and the environment"""

    def __init__(self, config_path: Optional[Path] = None, environ: Optional[Dict[str, str]] = None):
        self.config_path = config_path or Path("promisecache.yaml")
        self._environ = environ if environ is not None else os.environ

    def load_config(self) -> Dict[str, Any]:
        """Load the raw mapping from the YAML file; missing or unreadable files yield {}"""
        if not self.config_path.exists():
            return {}

        try:
            with open(self.config_path, "r") as f:
                config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            _logger.warning(f"Failed to load config from {self.config_path}: {e}")
            return {}

        if not isinstance(config, dict):
            _logger.warning(f"Ignoring {self.config_path}: top level is not a mapping")
            return {}
        return config

    def _environment_overrides(self) -> Dict[str, str]:
        overrides = {}
        for field in RepositorySettings.model_fields:
            if (value := self._environ.get(f"{ENV_PREFIX}{field.upper()}")) is not None:
                overrides[field] = value
        return overrides

    def load_settings(self) -> RepositorySettings:
        """Merge file and environment values; invalid values raise pydantic.ValidationError"""
        section = self.load_config().get("repository") or {}
        if not isinstance(section, dict):
            _logger.warning(f"Ignoring repository section of {self.config_path}: not a mapping")
            section = {}
        values = dict(section)
        values.update(self._environment_overrides())
        return RepositorySettings(**values)
