"""Configuration classes for ead-tree conversions.

This module provides configuration objects for the event source, the tree
builder and the output writers, plus the immutable ``ConverterConfig`` that
bundles them.
"""

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional

OUTPUT_FORMATS = ("json", "text")
LOGGING_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class SourceConfig:
    """Configuration for reading markup and producing events."""

    chunk_size: int = 65536
    strip_namespaces: bool = True
    resolve_entities: bool = False
    huge_tree: bool = False

    def __post_init__(self) -> None:
        """Validate source configuration."""
        if self.chunk_size <= 0:
            raise ValueError("chunk_size must be > 0")


@dataclass
class TreeConfig:
    """Configuration for the event-to-tree reduction."""

    strict_close_names: bool = True
    record_text_overwrites: bool = False


@dataclass
class OutputConfig:
    """Configuration for serializing finished trees."""

    format: str = "json"
    indent: Optional[int] = 2
    ensure_ascii: bool = False
    outline_indent: int = 4

    def __post_init__(self) -> None:
        """Validate output configuration."""
        if self.format not in OUTPUT_FORMATS:
            raise ValueError(f"format must be one of {list(OUTPUT_FORMATS)}")
        if self.indent is not None and self.indent < 0:
            raise ValueError("indent must be >= 0 or None")
        if self.outline_indent <= 0:
            raise ValueError("outline_indent must be > 0")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


_SECTIONS = ("source", "tree", "output")


@dataclass(frozen=True)
class ConverterConfig:
    """Complete configuration for one converter.

    Component configurations validate themselves; this class adds the
    top-level settings and re-raises any ``ValueError`` as
    ``ConfigValidationError``.
    """

    source: SourceConfig = field(default_factory=SourceConfig)
    tree: TreeConfig = field(default_factory=TreeConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    logging_level: str = "WARNING"
    name: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete converter configuration."""
        try:
            self.source.__post_init__()
            self.output.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

        if self.logging_level not in LOGGING_LEVELS:
            raise ConfigValidationError(
                f"logging_level must be one of {list(LOGGING_LEVELS)}",
                field_name="logging_level",
            )

    def override(self, **kwargs: Any) -> "ConverterConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Field overrides; nested fields use ``section__field``

        Returns:
            New ConverterConfig instance with overrides applied

        Example:
            >>> config = ConverterConfig()
            >>> lenient = config.override(tree__strict_close_names=False)
        """
        nested_overrides: Dict[str, Dict[str, Any]] = {}
        top_level: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                section, field_name = key.split("__", 1)
                if section not in _SECTIONS:
                    raise ConfigValidationError(
                        f"Unknown configuration section: {section}",
                        field_name=key,
                        suggestions=list(_SECTIONS),
                    )
                nested_overrides.setdefault(section, {})[field_name] = value
            else:
                top_level[key] = value

        new_fields: Dict[str, Any] = {}
        for section in _SECTIONS:
            current = getattr(self, section)
            if section in nested_overrides:
                try:
                    new_fields[section] = replace(current, **nested_overrides[section])
                except (TypeError, ValueError) as e:
                    raise ConfigValidationError(str(e), field_name=section) from e
        new_fields.update(top_level)

        return replace(self, **new_fields)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        result: Dict[str, Any] = {
            section: dict(vars(getattr(self, section))) for section in _SECTIONS
        }
        result["logging_level"] = self.logging_level
        result["name"] = self.name
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConverterConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected so that typos in configuration files do not
        pass silently.
        """
        section_types = {
            "source": SourceConfig,
            "tree": TreeConfig,
            "output": OutputConfig,
        }
        values: Dict[str, Any] = {}
        for key, value in data.items():
            if key in section_types:
                if not isinstance(value, dict):
                    raise ConfigValidationError(
                        f"Section '{key}' must be an object", field_name=key
                    )
                try:
                    values[key] = section_types[key](**value)
                except (TypeError, ValueError) as e:
                    raise ConfigValidationError(str(e), field_name=key) from e
            elif key in ("logging_level", "name"):
                values[key] = value
            else:
                raise ConfigValidationError(
                    f"Unknown configuration key: {key}",
                    field_name=key,
                    suggestions=[*_SECTIONS, "logging_level", "name"],
                )
        return cls(**values)

    @classmethod
    def from_json(cls, json_str: str) -> "ConverterConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration must be a JSON object")
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: Path) -> "ConverterConfig":
        """Load configuration from a JSON file."""
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Could not read configuration file {path}: {e}") from e
        return cls.from_json(text)

    # Preset factory methods
    @classmethod
    def strict(cls) -> "ConverterConfig":
        """Preset rejecting any structural irregularity (the default)."""
        return cls(name="strict")

    @classmethod
    def lenient(cls) -> "ConverterConfig":
        """Preset that only checks stack depth on close events.

        Mismatched close names are reported as warnings instead of failing
        the conversion.
        """
        return cls(tree=TreeConfig(strict_close_names=False), name="lenient")
