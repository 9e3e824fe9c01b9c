"""Configuration management for camera format selection."""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from platformdirs import user_config_dir
from pydantic import BaseModel, Field, ValidationError

from .models import Size

logger = logging.getLogger(__name__)


class ViewportConfig(BaseModel):
    """On-screen capture area, in portrait orientation."""

    width: float = Field(default=1080.0, gt=0, allow_inf_nan=False)
    height: float = Field(default=2340.0, gt=0, allow_inf_nan=False)

    @property
    def size(self) -> Size:
        return Size(width=self.width, height=self.height)


class SelectionConfig(BaseModel):
    """Device and format selection preferences."""

    viewport: ViewportConfig = Field(default_factory=ViewportConfig)
    use_ultrawide_if_available: bool = False
    trace_format_comparisons: bool = False
    target_fps: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)


class AppConfig(BaseModel):
    """Main configuration."""

    selection: SelectionConfig = Field(default_factory=SelectionConfig)


class ConfigManager:
    """Manages application configuration."""

    def __init__(self, config_dir: Optional[Path] = None) -> None:
        self._config_dir = Path(config_dir) if config_dir else Path(user_config_dir("camera-format-filter"))
        self._config_file = self._config_dir / "settings.json"
        self._config: Optional[AppConfig] = None

    @property
    def config_file(self) -> Path:
        return self._config_file

    def load_config(self) -> AppConfig:
        """Load configuration from file or create default."""
        if self._config:
            return self._config

        if self._config_file.exists():
            try:
                with open(self._config_file) as f:
                    self._config = AppConfig(**json.load(f))
            except (OSError, ValueError, ValidationError) as e:
                logger.warning(f"Ignoring unreadable settings file {self._config_file}: {e}")
                self._config = AppConfig()
        else:
            self._config = AppConfig()

        return self._config

    def save_config(self, config: Optional[AppConfig] = None) -> None:
        """Save configuration to file."""
        if not config:
            config = self._config
        if not config:
            return

        self._config_dir.mkdir(parents=True, exist_ok=True)
        with open(self._config_file, "w") as f:
            json.dump(config.model_dump(), f, indent=2)
        self._config = config

    def update_config(self, **kwargs: Any) -> AppConfig:
        """Update specific configuration values."""
        config = self.load_config()
        config_dict = config.model_dump()

        for key, value in kwargs.items():
            if key in config_dict and isinstance(value, dict):
                config_dict[key].update(value)
            else:
                config_dict[key] = value

        updated_config = AppConfig(**config_dict)
        self.save_config(updated_config)
        return updated_config


_config_manager = ConfigManager()


def get_config() -> AppConfig:
    """Get current configuration."""
    return _config_manager.load_config()


def get_config_manager() -> ConfigManager:
    """Get configuration manager instance."""
    return _config_manager
