"""
CVFS Configuration Loader

Limits, logging and shell settings. Settings come from a JSON file with
one object per section; anything left out keeps its default. Values are
checked before they replace the current configuration.

Author: YSNRFD
Version: 1.0.0
"""

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Optional
import threading

from cvfs.exceptions import ConfigLoadError, ConfigValidationError


@dataclass
class FilesystemConfig:
    """File system limits."""
    max_inodes: int = 50
    max_descriptors: int = 50
    max_file_size: int = 2048
    max_name_length: int = 50


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str = "WARNING"
    log_file: Optional[str] = None
    console_output: bool = True


@dataclass
class ShellConfig:
    """Shell configuration settings."""
    prompt: str = "Customized Virtual File System : > "
    banner: str = "Customized Virtual File System"


@dataclass
class Config:
    """Every configuration section, each with its defaults."""
    filesystem: FilesystemConfig = field(default_factory=FilesystemConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    shell: ShellConfig = field(default_factory=ShellConfig)


_SECTIONS = {
    'filesystem': FilesystemConfig,
    'logging': LoggingConfig,
    'shell': ShellConfig,
}

_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class ConfigLoader:
    """
    Process-wide holder of the active configuration.

    Until something is loaded or set, ``config`` returns a fresh default
    Config.

    Example:
        >>> loader = ConfigLoader()
        >>> config = loader.load('cvfs.json')
        >>> config.filesystem.max_file_size
        2048
    """

    _instance: Optional['ConfigLoader'] = None
    _lock = threading.Lock()

    def __new__(cls) -> 'ConfigLoader':
        """Singleton pattern for configuration access."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._config = Config()
                cls._instance._loaded = False
            return cls._instance

    def load(self, config_path: str) -> Config:
        """
        Read settings from a JSON file and make them current.

        Raises:
            ConfigLoadError: The file is missing, unreadable or not JSON
            ConfigValidationError: A section, key or value is rejected
        """
        path = Path(config_path)
        if not path.is_file():
            raise ConfigLoadError(f"No configuration file at {config_path}", path=config_path)

        try:
            data = json.loads(path.read_text(encoding='utf-8'))
        except json.JSONDecodeError as e:
            raise ConfigLoadError(f"{config_path} is not valid JSON: {e}", path=config_path) from e
        except OSError as e:
            raise ConfigLoadError(f"Could not read {config_path}: {e}", path=config_path) from e

        return self.load_dict(data)

    def load_dict(self, data: dict[str, Any]) -> Config:
        """Load configuration from an already parsed mapping."""
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration root must be an object")

        config = self._parse_config(data)
        self._validate(config)

        self._config = config
        self._loaded = True
        return self._config

    def _parse_config(self, data: dict[str, Any]) -> Config:
        """Build a Config from section mappings, rejecting unknown names."""
        config = Config()

        for section_name, section_data in data.items():
            section_cls = _SECTIONS.get(section_name)
            if section_cls is None:
                raise ConfigValidationError(
                    f"Unknown configuration section: {section_name}",
                    key=section_name
                )
            if not isinstance(section_data, dict):
                raise ConfigValidationError(
                    f"Section must be an object: {section_name}",
                    key=section_name
                )

            known = {f.name for f in fields(section_cls)}
            for key in section_data:
                if key not in known:
                    raise ConfigValidationError(
                        f"Unknown configuration key: {section_name}.{key}",
                        key=f"{section_name}.{key}"
                    )

            setattr(config, section_name, section_cls(**section_data))

        return config

    def _validate(self, config: Config) -> None:
        """Reject values the file system cannot run with."""
        fs = config.filesystem
        for key in ('max_inodes', 'max_descriptors', 'max_file_size', 'max_name_length'):
            value = getattr(fs, key)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ConfigValidationError(
                    f"filesystem.{key} must be a positive integer",
                    key=f"filesystem.{key}",
                    context={'value': value}
                )

        if str(config.logging.level).upper() not in _LOG_LEVELS:
            raise ConfigValidationError(
                f"Unknown log level: {config.logging.level}",
                key="logging.level"
            )

    @property
    def config(self) -> Config:
        """The active configuration, or defaults if nothing was loaded."""
        return self._config if self._loaded else Config()

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a value such as 'filesystem.max_inodes'; ``default`` if absent."""
        section_name, _, name = key.partition('.')
        section = getattr(self.config, section_name, None)
        if section is None or not name:
            return section if section is not None else default
        return getattr(section, name, default)

    def set(self, key: str, value: Any) -> None:
        """
        Change one value in memory.

        The file on disk is untouched. New limits apply to file systems
        created afterwards. A rejected value leaves the old one in place.
        """
        section_name, _, name = key.partition('.')
        section = getattr(self._config, section_name, None) if section_name in _SECTIONS else None
        if section is None or not hasattr(section, name):
            raise ConfigValidationError(f"Invalid configuration key: {key}", key=key)

        previous = getattr(section, name)
        setattr(section, name, value)
        try:
            self._validate(self._config)
        except ConfigValidationError:
            setattr(section, name, previous)
            raise
        self._loaded = True

    def reset(self) -> None:
        """Drop loaded settings and go back to defaults."""
        self._config = Config()
        self._loaded = False

    def to_dict(self) -> dict[str, Any]:
        """The active configuration as nested plain dicts."""
        return asdict(self.config)


def get_config() -> Config:
    """Shortcut for ``ConfigLoader().config``."""
    return ConfigLoader().config
