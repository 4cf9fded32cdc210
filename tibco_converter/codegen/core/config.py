"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
import re
from dataclasses import asdict, dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ...diagnostics import ConverterError
from ...logging_config import get_logger

logger = get_logger(__name__)

_PACKAGE_RE = re.compile(r"^[a-z_][a-z0-9_]*(\.[a-z_][a-z0-9_]*)*$")
_VERSION_RE = re.compile(r"^\d+\.\d+(\.\d+)?([.-][A-Za-z0-9]+)*$")


class ConfigError(ConverterError):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class GenerationOptions:
    """Per-artifact generation toggles."""

    generate_controllers: bool = True
    generate_services: bool = True
    generate_repositories: bool = True
    generate_dtos: bool = True
    generate_configurations: bool = True
    generate_tests: bool = True
    use_lombok: bool = True
    use_validation: bool = True


@dataclass
class TemplateNames:
    """Logical template names per artifact."""

    controller: str = "controller"
    dto: str = "dto"


@dataclass
class GenerationConfig:
    """Configuration for Spring Boot code generation."""

    output_dir: str = "./output"
    package_name: str = "com.example.converted"
    spring_boot_version: str = "3.1.0"
    options: GenerationOptions = field(default_factory=GenerationOptions)
    templates: TemplateNames = field(default_factory=TemplateNames)

    # Custom settings not known to the generators
    custom: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _known(cls) -> set:
    return {f.name for f in fields(cls)}


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._defaults: Dict[str, Any] = GenerationConfig().to_dict()

    def get_config(
        self,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GenerationConfig:
        """
        Get complete configuration.

        Args:
            custom_config: Configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Defaults, then file values, then overrides
        """
        merged = json.loads(json.dumps(self._defaults))

        if config_file:
            self._merge(merged, self._load_config_file(config_file))

        if custom_config:
            self._merge(merged, custom_config)

        return self._dict_to_config(merged)

    def _merge(self, base: Dict[str, Any], update: Dict[str, Any]):
        """Merge update into base; nested sections are merged key by key."""
        for key, value in update.items():
            if is_dataclass(value):
                value = asdict(value)
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                base[key].update(value)
            else:
                base[key] = value

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.debug("Loaded configuration from %s", path)
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GenerationConfig:
        """Convert dictionary to GenerationConfig instance."""
        config_args: Dict[str, Any] = {}
        custom_args: Dict[str, Any] = dict(config_dict.get("custom") or {})
        flat_options: Dict[str, Any] = {}

        for key, value in config_dict.items():
            if key == "custom":
                continue
            if key in _known(GenerationConfig):
                config_args[key] = value
            elif key in _known(GenerationOptions):
                # Toggles are also accepted at top level
                flat_options[key] = value
            else:
                custom_args[key] = value

        if flat_options:
            config_args["options"] = {**(config_args.get("options") or {}), **flat_options}

        config_args["options"] = self._section(
            GenerationOptions, config_args.get("options"), custom_args
        )
        config_args["templates"] = self._section(
            TemplateNames, config_args.get("templates"), custom_args
        )
        config_args["custom"] = custom_args

        return GenerationConfig(**config_args)

    def _section(self, cls, values: Optional[Dict[str, Any]], custom: Dict[str, Any]):
        if not isinstance(values, dict):
            return cls()
        known = {k: v for k, v in values.items() if k in _known(cls)}
        for key, value in values.items():
            if key not in known:
                custom[key] = value
        return cls(**known)

    def save_config(self, config: GenerationConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)
        config_dict = config.to_dict()
        custom = config_dict.pop("custom")
        config_dict.update(custom)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    def validate_config(self, config: GenerationConfig) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if not _PACKAGE_RE.match(config.package_name or ""):
            warnings.append(f"Invalid Java package name: {config.package_name}")

        if not _VERSION_RE.match(str(config.spring_boot_version)):
            warnings.append(f"Invalid Spring Boot version: {config.spring_boot_version}")

        if not config.output_dir:
            warnings.append("Output directory is empty")

        return warnings


def load_config(
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GenerationConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    return ConfigManager().get_config(custom_config, config_file)


def save_config(config: GenerationConfig, output_path: Union[str, Path]):
    """Save configuration to a JSON file."""
    ConfigManager().save_config(config, output_path)


def validate_config(config: GenerationConfig) -> List[str]:
    """Validate configuration, returning warnings."""
    return ConfigManager().validate_config(config)
