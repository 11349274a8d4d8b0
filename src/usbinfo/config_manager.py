"""
Configuration management for usbinfo.

Handles loading and saving of user configuration: output style and custom
device names.
"""

from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Optional
import yaml
from pydantic import ValidationError

from .formatter import TreeStyle
from .models import AppConfig, DeviceConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "USBINFO_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "usbinfo" / "config.yaml"


def default_config_path() -> Path:
    """Config path from $USBINFO_CONFIG, else ~/.config/usbinfo/config.yaml."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_PATH


class ConfigManager:
    """Manages application configuration."""

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = Path(config_path) if config_path else default_config_path()
        self._config: Optional[AppConfig] = None
        self._device_lookup: dict[str, str] = {}  # "vendor:product" -> custom_name

    @property
    def config(self) -> AppConfig:
        """Get current configuration, loading if necessary."""
        if self._config is None:
            self.load()
        return self._config  # type: ignore

    def load(self) -> AppConfig:
        """Load configuration from file, falling back to defaults."""
        if self.config_path.exists():
            try:
                with open(self.config_path, encoding="utf-8") as f:
                    data = yaml.safe_load(f) or {}
                self._config = AppConfig.model_validate(data)
                logger.info(f"Loaded configuration from {self.config_path}")
            except (OSError, UnicodeDecodeError, yaml.YAMLError, ValidationError) as e:
                logger.warning(f"Error loading config from {self.config_path}, using defaults: {e}")
                self._config = AppConfig()
        else:
            logger.debug(f"No config file found at {self.config_path}, using defaults")
            self._config = AppConfig()

        self._device_lookup = {
            _lookup_key(d.vendor_id, d.product_id): d.custom_name
            for d in self._config.devices
            if d.custom_name
        }
        return self._config

    def save(self) -> None:
        """Save current configuration to file."""
        if self._config is None:
            return

        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        data = self._config.model_dump()

        with open(self.config_path, "w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
        logger.info(f"Saved configuration to {self.config_path}")

    def tree_style(self) -> TreeStyle:
        """TreeStyle described by the configuration."""
        config = self.config
        style = TreeStyle.ascii() if config.ascii else TreeStyle.default()
        return style.model_copy(
            update={
                "colored": config.colored,
                "show_header": config.show_header,
                "indent": config.indent,
            }
        )

    def get_device_name(self, vendor_id: str, product_id: str) -> Optional[str]:
        """Get custom name for a device if configured."""
        if self._config is None:
            self.load()
        return self._device_lookup.get(_lookup_key(vendor_id, product_id))

    def get_device_lookup(self) -> dict[str, str]:
        """Get the full vendor:product -> name lookup table."""
        if self._config is None:
            self.load()
        return self._device_lookup.copy()

    def set_device_name(self, vendor_id: str, product_id: str, name: str) -> None:
        """Set custom name for a device and save."""
        config = self.config
        key = _lookup_key(vendor_id, product_id)

        for device in config.devices:
            if _lookup_key(device.vendor_id, device.product_id) == key:
                device.custom_name = name
                break
        else:
            config.devices.append(
                DeviceConfig(vendor_id=vendor_id.lower(), product_id=product_id.lower(), custom_name=name)
            )

        self._device_lookup[key] = name
        self.save()

    def remove_device_name(self, vendor_id: str, product_id: str) -> None:
        """Remove custom name for a device and save."""
        config = self.config
        key = _lookup_key(vendor_id, product_id)
        self._device_lookup.pop(key, None)
        config.devices = [
            d for d in config.devices
            if _lookup_key(d.vendor_id, d.product_id) != key
        ]
        self.save()


def _lookup_key(vendor_id: str, product_id: str) -> str:
    return f"{vendor_id.lower()}:{product_id.lower()}"
