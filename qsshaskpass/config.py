"""
Persistent settings for qsshaskpass.
Stored in ~/.qsshaskpass/config.yaml
"""

from __future__ import annotations
import logging
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

# Default config location
DEFAULT_CONFIG_DIR = Path.home() / ".qsshaskpass"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"
CONFIG_ENV_VAR = "QSSHASKPASS_CONFIG"

INTERFACES = ("qt", "console")


@dataclass
class AskpassSettings:
    """
    Settings that apply to every askpass invocation.
    """
    # Keyring service all secrets are filed under
    folder: str = "qsshaskpass"

    # Dialogs
    window_title: str = "QSshAskpass"
    default_prompt: str = "Please enter passphrase"
    interface: str = "qt"

    # Set False to never read or write stored secrets
    use_store: bool = True

    log_level: str = "WARNING"

    def to_dict(self) -> dict:
        """Serialize to dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> AskpassSettings:
        """
        Deserialize from dict, ignoring unknown keys.

        Values of the wrong type are dropped with a warning and the
        field keeps its default.
        """
        fields = cls.__dataclass_fields__
        filtered = {}
        for key, value in data.items():
            if key not in fields:
                continue
            expected = type(fields[key].default)
            if type(value) is not expected:
                logger.warning(
                    f"Ignoring setting {key!r}: expected {expected.__name__}, "
                    f"got {type(value).__name__}"
                )
                continue
            filtered[key] = value

        settings = cls(**filtered)
        if settings.interface not in INTERFACES:
            logger.warning(f"Unknown interface {settings.interface!r}, using 'qt'")
            settings.interface = "qt"
        return settings


def default_config_path() -> Path:
    """Config path, honouring the QSSHASKPASS_CONFIG override."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_FILE


class SettingsManager:
    """
    Loads and saves AskpassSettings.

    Usage:
        manager = SettingsManager()
        settings = manager.settings
        settings.use_store = False
        manager.save()
    """

    def __init__(self, config_path: Path = None):
        self._config_path = config_path or default_config_path()
        self._settings: Optional[AskpassSettings] = None

    @property
    def settings(self) -> AskpassSettings:
        """Get current settings, loading from disk if needed."""
        if self._settings is None:
            self._settings = self.load()
        return self._settings

    @property
    def config_path(self) -> Path:
        return self._config_path

    def load(self) -> AskpassSettings:
        """Load settings from disk, or return defaults."""
        if not self._config_path.exists():
            logger.debug("No settings file found, using defaults")
            return AskpassSettings()

        try:
            with open(self._config_path) as f:
                data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                raise TypeError(f"expected a mapping, got {type(data).__name__}")
            logger.debug(f"Loaded settings from {self._config_path}")
            return AskpassSettings.from_dict(data)
        except (yaml.YAMLError, TypeError, OSError) as e:
            logger.warning(f"Failed to load settings: {e}, using defaults")
            return AskpassSettings()

    def save(self) -> bool:
        """Save current settings to disk. Returns False if it couldn't."""
        if self._settings is None:
            return False

        try:
            self._config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._config_path, 'w') as f:
                yaml.dump(self._settings.to_dict(), f, default_flow_style=False, sort_keys=False)
            logger.debug(f"Saved settings to {self._config_path}")
        except OSError as e:
            logger.error(f"Failed to save settings: {e}")
            return False
        return True
