"""Configuration resolution for the pipeline and its analyzers.

The project's .scrutinizer.yml is merged over the declared schema of every
registered analyzer. Each analyzer gets its own section keyed by its name:

    before_commands:
        - "pip install -e ."
    after_commands: []

    loc:
        extensions: [".py", ".pyi"]

    flake8:
        enabled: true
        max_line_length: 100

Unknown keys at any level are a ConfigurationError.
"""

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..analyzers.protocol import AnalyzerConfig, AnalyzerPlugin
from ..constants import CONFIG_FILENAME
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


class PipelineConfig(BaseModel):
    """Pipeline-level keys (not analyzer-specific)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    before_commands: list[str] = Field(
        default_factory=list,
        description="Shell commands run in order before any analyzer",
    )
    after_commands: list[str] = Field(
        default_factory=list,
        description="Shell commands run in order after all analyzers",
    )


PIPELINE_KEYS = frozenset(PipelineConfig.model_fields)


class ResolvedConfig:
    """
    Validated configuration for one pipeline run.

    Immutable once built: commands are tuples, analyzer sections are frozen
    Pydantic models behind a read-only mapping.
    """

    def __init__(self, pipeline: PipelineConfig, analyzers: Mapping[str, AnalyzerConfig]):
        self._pipeline = pipeline
        self._analyzers = MappingProxyType(dict(analyzers))

    @property
    def before_commands(self) -> tuple[str, ...]:
        return tuple(self._pipeline.before_commands)

    @property
    def after_commands(self) -> tuple[str, ...]:
        return tuple(self._pipeline.after_commands)

    @property
    def analyzers(self) -> Mapping[str, AnalyzerConfig]:
        return self._analyzers

    def get_analyzer_config(self, name: str) -> AnalyzerConfig:
        try:
            return self._analyzers[name]
        except KeyError:
            raise KeyError(f"Unknown analyzer: {name}") from None

    def is_analyzer_enabled(self, name: str) -> bool:
        config = self._analyzers.get(name)
        return config is not None and config.enabled

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = self._pipeline.model_dump()
        for name, config in self._analyzers.items():
            data[name] = config.model_dump()
        return data


class ConfigManager:
    """
    Resolves raw project configuration against the analyzers' schemas.

    Example:
        manager = ConfigManager(registry.get_all())
        config = manager.process(manager.load_file(project_dir / ".scrutinizer.yml"))
        config.is_analyzer_enabled("flake8")
    """

    def __init__(self, analyzers: Iterable[AnalyzerPlugin]):
        """
        Initialize ConfigManager.

        Args:
            analyzers: Registered analyzers; a later analyzer with the same
                name replaces the schema of an earlier one
        """
        self.schemas: dict[str, type[AnalyzerConfig]] = {}
        for analyzer in analyzers:
            self.schemas[analyzer.name] = analyzer.config_class

    def process(self, raw_config: Mapping[str, Any] | None) -> ResolvedConfig:
        """
        Merge raw configuration over defaults and validate it.

        Args:
            raw_config: Parsed project configuration (None means empty)

        Returns:
            Fully resolved configuration

        Raises:
            ConfigurationError: On unknown keys or invalid values
        """
        if raw_config is None:
            raw_config = {}
        if not isinstance(raw_config, Mapping):
            raise ConfigurationError(
                f"Configuration must be a mapping, got {type(raw_config).__name__}"
            )

        unknown = [
            str(key)
            for key in raw_config
            if key not in PIPELINE_KEYS and key not in self.schemas
        ]
        if unknown:
            raise ConfigurationError(
                f"Unrecognized configuration key(s): {', '.join(unknown)}. "
                f"Available: {', '.join(sorted(PIPELINE_KEYS | set(self.schemas)))}"
            )

        pipeline_data = {key: raw_config[key] for key in PIPELINE_KEYS if key in raw_config}
        pipeline_data = {key: value for key, value in pipeline_data.items() if value is not None}
        try:
            pipeline = PipelineConfig(**pipeline_data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid pipeline configuration: {e}") from e

        analyzer_configs: dict[str, AnalyzerConfig] = {}
        for name, config_class in self.schemas.items():
            analyzer_configs[name] = self._resolve_section(
                name, config_class, raw_config.get(name)
            )
            logger.debug(f"Resolved config for {name}")

        return ResolvedConfig(pipeline, analyzer_configs)

    def default_config(self) -> dict[str, Any]:
        """Return the fully defaulted configuration document."""
        return self.process({}).to_dict()

    @staticmethod
    def load_file(path: Path) -> dict[str, Any]:
        """
        Load a YAML configuration file.

        Args:
            path: Config file path

        Returns:
            Parsed mapping; empty when the file is missing or empty

        Raises:
            ConfigurationError: If the file can't be read or parsed
        """
        if not path.is_file():
            logger.debug(f"Config file not found: {path}")
            return {}

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load config from {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config file {path} must contain a mapping, got {type(data).__name__}"
            )

        logger.info(f"Loaded config from {path}")
        return data

    @classmethod
    def load_project_file(cls, directory: Path) -> dict[str, Any]:
        return cls.load_file(directory / CONFIG_FILENAME)

    @staticmethod
    def _resolve_section(
        name: str, config_class: type[AnalyzerConfig], section: Any
    ) -> AnalyzerConfig:
        # `flake8: true` is shorthand for `flake8: {enabled: true}`
        if section is None:
            section = {}
        elif isinstance(section, bool):
            section = {"enabled": section}
        elif not isinstance(section, Mapping):
            raise ConfigurationError(
                f"Configuration for analyzer '{name}' must be a mapping or boolean, "
                f"got {type(section).__name__}"
            )

        defaults = config_class().model_dump()
        merged = ConfigManager._merge_dicts(defaults, dict(section))
        try:
            return config_class(**merged)
        except (ValidationError, TypeError) as e:
            raise ConfigurationError(f"Invalid config for analyzer '{name}': {e}") from e

    @staticmethod
    def _merge_dicts(base: dict, override: dict) -> dict:
        """
        Recursively merge dictionaries.

        Args:
            base: Base dictionary
            override: Dictionary to merge in (takes precedence)

        Returns:
            Merged dictionary
        """
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = ConfigManager._merge_dicts(result[key], value)
            else:
                result[key] = value
        return result
