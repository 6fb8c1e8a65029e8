"""
JSON-based configuration for plan_dimensions.

Lookup order (first hit wins):
1. Explicit config path passed by the caller
2. .dimlayout.json in the current working directory
3. ~/.dimlayout.json in the user's home directory

Built-in defaults come from plan_dimensions.config.

Example .dimlayout.json:
{
    "layout": {
        "direction_tolerance": 1e-5,
        "interval_tolerance": 1e-6
    },
    "offsets": {
        "row_spacing": 80.0,
        "row_start": 1.0
    }
}
"""

import json
import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

from plan_dimensions import config as defaults
from plan_dimensions.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".dimlayout.json"


@dataclass
class LayoutConfig:
    """Tolerances used while grouping and deduplicating."""
    direction_tolerance: float = defaults.DIRECTION_TOLERANCE
    interval_tolerance: float = defaults.INTERVAL_TOLERANCE


@dataclass
class OffsetsConfig:
    """Row spacing used when turning rows into offsets."""
    row_spacing: float = defaults.ROW_SPACING
    row_start: float = defaults.ROW_START


@dataclass
class ProjectConfig:
    """Complete configuration."""
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    offsets: OffsetsConfig = field(default_factory=OffsetsConfig)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def save(self, path: Union[str, Path]) -> None:
        """Write configuration to a JSON file."""
        path = Path(path)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(self.to_json())
        logger.info("Configuration saved to %s", path)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProjectConfig':
        """Build a configuration from a dict; unknown keys are ignored.

        Raises:
            ConfigError: If a section is not a mapping or a value is not numeric
        """
        config = cls()

        for section in ('layout', 'offsets'):
            if section not in data:
                continue
            values = data[section]
            if not isinstance(values, dict):
                raise ConfigError(f"Section '{section}' must be an object, got {type(values).__name__}")
            target = getattr(config, section)
            for key, value in values.items():
                if not hasattr(target, key):
                    logger.debug("Ignoring unknown config key %s.%s", section, key)
                    continue
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise ConfigError(f"{section}.{key} must be a number, got {value!r}")
                setattr(target, key, float(value))

        return config

    @classmethod
    def from_json(cls, json_str: str) -> 'ProjectConfig':
        """Build a configuration from a JSON string.

        Raises:
            ConfigError: If the string is not valid JSON
        """
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON configuration: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError("Configuration root must be an object")
        return cls.from_dict(data)

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'ProjectConfig':
        """Load configuration from a JSON file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigError: If the file is not a valid configuration
        """
        path = Path(path)
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()
        config = cls.from_json(text)
        logger.info("Configuration loaded from %s", path)
        return config


def find_config_file(explicit_config: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """Locate a configuration file.

    Args:
        explicit_config: Explicitly specified config path

    Returns:
        Path to the config file if found, None otherwise
    """
    if explicit_config:
        explicit = Path(explicit_config)
        if explicit.exists():
            return explicit
        logger.warning("Explicit config not found: %s", explicit)

    cwd_config = Path.cwd() / CONFIG_FILENAME
    if cwd_config.exists():
        return cwd_config

    home_config = Path.home() / CONFIG_FILENAME
    if home_config.exists():
        return home_config

    return None


def load_config(explicit_config: Optional[Union[str, Path]] = None) -> ProjectConfig:
    """Load the first configuration found, or the defaults.

    Raises:
        ConfigError: If the located file is not a valid configuration
    """
    config_path = find_config_file(explicit_config)
    if config_path is None:
        return ProjectConfig()
    return ProjectConfig.load(config_path)


def merge_configs(base: ProjectConfig, override: ProjectConfig) -> ProjectConfig:
    """Apply every non-default value of ``override`` on top of ``base``."""
    merged = ProjectConfig.from_dict(base.to_dict())

    for section, default_section in (('layout', LayoutConfig()), ('offsets', OffsetsConfig())):
        target = getattr(merged, section)
        source = getattr(override, section)
        for f in fields(source):
            value = getattr(source, f.name)
            if value != getattr(default_section, f.name):
                setattr(target, f.name, value)

    return merged
