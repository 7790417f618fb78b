"""Configuration file loading."""

import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError
from pydantic import ValidationError

from podunit.errors import ConfigError
from podunit.models.config import PodunitConfig


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("~/.config/podunit/config.yaml")


class ConfigManager:
    """Loads the podunit configuration file."""

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize configuration manager.

        An explicit path must exist; the default path is optional.
        """
        self.explicit = config_path is not None
        self.config_path = Path(config_path or DEFAULT_CONFIG_PATH).expanduser()
        self.yaml = YAML(typ="safe")
        self.config: Optional[PodunitConfig] = None

    async def load(self) -> PodunitConfig:
        """Load the configuration, falling back to defaults."""
        if not await asyncio.to_thread(self.config_path.exists):
            if self.explicit:
                raise ConfigError(f"Config not found: {self.config_path}")
            logger.debug(f"No config at {self.config_path}, using defaults")
            self.config = PodunitConfig()
            return self.config

        try:
            data = await self._read_yaml(self.config_path)
            self.config = PodunitConfig(**(data or {}))
            logger.debug(f"Loaded config: {self.config_path}")
        except (YAMLError, TypeError) as e:
            raise ConfigError(f"Invalid config {self.config_path}: {e}") from e
        except ValidationError as e:
            logger.error(f"Invalid config: {e}")
            raise ConfigError(f"Invalid config {self.config_path}: {e}") from e

        return self.config

    async def _read_yaml(self, file_path: Path) -> Dict[str, Any]:
        """Read and parse YAML file."""
        content = await asyncio.to_thread(file_path.read_text)
        return self.yaml.load(content)
