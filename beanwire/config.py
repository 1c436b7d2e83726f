# -------------------------------------------------------------------------------------------------
#  Copyright (C) 2015-2025 Nautech Systems Pty Ltd. All rights reserved.
#  https://nautechsystems.io
#
#  Licensed under the GNU Lesser General Public License Version 3.0 (the "License");
#  You may not use this file except in compliance with the License.
#  You may obtain a copy of the License at https://www.gnu.org/licenses/lgpl-3.0.en.html
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.
# -------------------------------------------------------------------------------------------------
"""
Configuration for the application context.
"""

import json
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from nautilus_trader.common.component import Logger

from beanwire.exceptions import ConfigurationError


@dataclass
class ValidationConfig:
    """Graph validation and resolution safety settings."""

    # Dry-run validation of the whole graph before eager loading
    enable_graph_validation: bool = False

    # Circular dependency detection; the depth bound applies when it is disabled
    enable_circular_detection: bool = True
    max_resolution_depth: int = 50


@dataclass
class EagerConfig:
    """Eager materialization settings."""

    enabled: bool = True
    fail_on_error: bool = True


@dataclass
class TypeConfig:
    """Type resolution settings."""

    allow_imports: bool = False
    trusted_prefixes: List[str] = field(default_factory=list)

    def add_trusted_prefix(self, prefix: str) -> None:
        """Add trusted module prefix."""
        if prefix not in self.trusted_prefixes:
            self.trusted_prefixes.append(prefix)


@dataclass
class LoggingConfig:
    """Logging configuration for the context."""

    log_component_creation: bool = True
    log_property_injection: bool = False


@dataclass
class ContextConfig:
    """Complete configuration for an application context."""

    # Core settings
    context_name: str = "default"
    version: str = "1.0.0"
    description: Optional[str] = None

    # Component configurations
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    eager: EagerConfig = field(default_factory=EagerConfig)
    types: TypeConfig = field(default_factory=TypeConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Environment overrides
    enable_env_overrides: bool = True
    env_prefix: str = "BEANWIRE_"

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "ContextConfig":
        """
        Load configuration from file.

        Environment overrides are applied on top of the file's values unless
        the file disables them.

        Parameters
        ----------
        config_path : str or Path
            Path to configuration file (JSON or YAML)

        Returns
        -------
        ContextConfig
            Loaded configuration

        Raises
        ------
        ConfigurationError
            If file cannot be loaded or parsed
        """
        path = Path(config_path)

        if not path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                source=str(path),
                suggestion="Check the file path and ensure the file exists",
            )

        suffix = path.suffix.lower()
        if suffix not in (".json", ".yml", ".yaml"):
            raise ConfigurationError(
                f"Unsupported configuration file format: {path.suffix}",
                source=str(path),
                suggestion="Use .json, .yml, or .yaml files",
            )

        try:
            with open(path, "r", encoding="utf-8") as f:
                if suffix == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Failed to parse configuration file '{config_path}': {e}",
                source=str(path),
                suggestion="Check file syntax and format",
            ) from e
        except OSError as e:
            raise ConfigurationError(
                f"Failed to read configuration from '{config_path}': {e}",
                source=str(path),
                suggestion="Check file permissions",
            ) from e

        config = cls.from_dict(data or {})
        config.apply_environment_overrides()
        return config

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContextConfig":
        """
        Create configuration from dictionary.

        Parameters
        ----------
        data : Dict[str, Any]
            Configuration data

        Returns
        -------
        ContextConfig
            Configuration instance
        """
        data = dict(data)

        try:
            return cls(
                context_name=data.get("context_name", "default"),
                version=data.get("version", "1.0.0"),
                description=data.get("description"),
                validation=ValidationConfig(**data.get("validation", {})),
                eager=EagerConfig(**data.get("eager", {})),
                types=TypeConfig(**data.get("types", {})),
                logging=LoggingConfig(**data.get("logging", {})),
                enable_env_overrides=data.get("enable_env_overrides", True),
                env_prefix=data.get("env_prefix", "BEANWIRE_"),
            )
        except TypeError as e:
            raise ConfigurationError(
                f"Invalid configuration section: {e}",
                suggestion="Remove unknown keys from the configuration",
            ) from e

    @classmethod
    def from_environment(cls, prefix: Optional[str] = None) -> "ContextConfig":
        """
        Create default configuration with environment overrides applied.

        Parameters
        ----------
        prefix : str, optional
            Environment variable prefix (defaults to ``BEANWIRE_``)

        Returns
        -------
        ContextConfig
            Configuration with environment overrides
        """
        config = cls()
        config.apply_environment_overrides(prefix)
        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    def to_file(self, config_path: Union[str, Path], format: str = "yaml") -> None:
        """
        Save configuration to file.

        Parameters
        ----------
        config_path : str or Path
            Output file path
        format : str
            Output format: 'json' or 'yaml'
        """
        path = Path(config_path)
        fmt = format.lower()

        if fmt not in ("json", "yml", "yaml"):
            raise ConfigurationError(
                f"Unsupported configuration file format: {format}",
                source=str(path),
                suggestion="Use 'json' or 'yaml'",
            )

        data = self.to_dict()

        # Ensure parent directory exists
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            if fmt == "json":
                json.dump(data, f, indent=2, default=str)
            else:
                yaml.dump(data, f, default_flow_style=False, allow_unicode=True)

    def apply_environment_overrides(self, prefix: Optional[str] = None) -> None:
        """
        Apply environment variable overrides.

        Parameters
        ----------
        prefix : str, optional
            Environment variable prefix (uses config default if not provided)
        """
        if not self.enable_env_overrides:
            return

        prefix = prefix or self.env_prefix
        logger = Logger(self.__class__.__name__)

        # Map of environment variables to config paths
        env_mappings = {
            f"{prefix}VALIDATION_ENABLE_GRAPH": ("validation", "enable_graph_validation", bool),
            f"{prefix}VALIDATION_CIRCULAR_DETECTION": ("validation", "enable_circular_detection", bool),
            f"{prefix}VALIDATION_MAX_DEPTH": ("validation", "max_resolution_depth", int),
            f"{prefix}EAGER_ENABLED": ("eager", "enabled", bool),
            f"{prefix}EAGER_FAIL_ON_ERROR": ("eager", "fail_on_error", bool),
            f"{prefix}TYPES_ALLOW_IMPORTS": ("types", "allow_imports", bool),
            f"{prefix}LOGGING_COMPONENT_CREATION": ("logging", "log_component_creation", bool),
            f"{prefix}LOGGING_PROPERTY_INJECTION": ("logging", "log_property_injection", bool),
        }

        for env_var, (component, field_name, type_func) in env_mappings.items():
            value = os.environ.get(env_var)
            if value is None:
                continue

            try:
                if type_func is bool:
                    converted_value = value.lower() in ("true", "1", "yes", "on")
                else:
                    converted_value = type_func(value)
            except (ValueError, TypeError) as e:
                logger.warning(f"Invalid environment variable value {env_var}={value}: {e}")
                continue

            setattr(getattr(self, component), field_name, converted_value)
            logger.debug(f"Applied environment override: {env_var} = {converted_value}")

    def validate(self) -> List[str]:
        """
        Validate configuration.

        Returns
        -------
        List[str]
            List of validation errors (empty if valid)
        """
        errors = []

        if self.validation.max_resolution_depth < 1:
            errors.append("Validation: max_resolution_depth must be positive")

        if not self.context_name:
            errors.append("Context: context_name must not be empty")

        for prefix in self.types.trusted_prefixes:
            if not prefix or prefix.startswith("."):
                errors.append(f"Types: invalid trusted prefix '{prefix}'")

        return errors
