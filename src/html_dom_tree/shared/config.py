"""Configuration classes for html-dom-tree.

This module provides configuration objects for the tokenizer, the tree engine
and process-wide settings, enabling control over the tag names used by the
structural edits and over how line tokens are read.
"""

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

VALID_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
_COMPONENTS = ["tokenization", "tree", "global_"]


@dataclass(frozen=True)
class TokenizationConfig:
    """Configuration for reading line tokens."""

    skip_blank_lines: bool = False
    strip_carriage_returns: bool = True

    def __post_init__(self) -> None:
        """Validate tokenization configuration."""
        if not isinstance(self.skip_blank_lines, bool):
            raise ValueError("skip_blank_lines must be a boolean")
        if not isinstance(self.strip_carriage_returns, bool):
            raise ValueError("strip_carriage_returns must be a boolean")


@dataclass(frozen=True)
class TreeConfig:
    """Configuration for the tree engine's structural and textual edits."""

    # Table row styling
    table_tag: str = "table"
    bold_tag: str = "b"

    # List removal: items directly under a removed list become paragraphs
    list_tags: Tuple[str, ...] = ("ol", "ul")
    list_item_tag: str = "li"
    paragraph_tag: str = "p"

    # Word tagging: at most one of these may trail a matched word
    word_punctuation: str = ".,?!:;"

    # Serialization
    line_separator: str = "\n"

    def __post_init__(self) -> None:
        """Validate tree configuration."""
        object.__setattr__(self, "list_tags", tuple(self.list_tags))
        for name in ("table_tag", "bold_tag", "list_item_tag", "paragraph_tag"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise ValueError(f"{name} must be a non-empty string")
        if not self.list_tags:
            raise ValueError("list_tags must name at least one tag")
        if any(not isinstance(tag, str) or not tag for tag in self.list_tags):
            raise ValueError("list_tags must contain non-empty strings")
        if " " in self.word_punctuation:
            raise ValueError("word_punctuation must not contain spaces")
        if not self.line_separator:
            raise ValueError("line_separator cannot be empty")


@dataclass(frozen=True)
class GlobalConfig:
    """Global configuration settings that apply across all components."""

    logging_level: str = "WARNING"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    enable_correlation_tracking: bool = True

    def __post_init__(self) -> None:
        """Validate global configuration."""
        if self.logging_level not in VALID_LOGGING_LEVELS:
            raise ValueError(f"logging_level must be one of {VALID_LOGGING_LEVELS}")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class EditorConfig:
    """Complete configuration for html-dom-tree.

    Immutable, so one instance can be shared by every tree built from it.
    """

    tokenization: TokenizationConfig = field(default_factory=TokenizationConfig)
    tree: TreeConfig = field(default_factory=TreeConfig)
    global_: GlobalConfig = field(default_factory=GlobalConfig)

    name: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete configuration."""
        try:
            self.tokenization.__post_init__()
            self.tree.__post_init__()
            self.global_.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

        if self.tree.paragraph_tag in self.tree.list_tags:
            raise ConfigValidationError(
                "paragraph_tag cannot also be a list tag",
                field_name="tree.paragraph_tag",
                suggestions=["Choose a paragraph tag outside list_tags"],
            )

    def override(self, **kwargs: Any) -> "EditorConfig":
        """Create a new configuration with specific overrides.

        Nested fields use a double underscore, e.g.
        ``config.override(tree__bold_tag="strong")`` or
        ``config.override(global___logging_level="DEBUG")``.
        """
        nested_overrides: Dict[str, Any] = {}
        for key, value in kwargs.items():
            component = next(
                (name for name in _COMPONENTS if key.startswith(name + "__")), None
            )
            if component is not None:
                field_name = key[len(component) + 2:]
                nested_overrides.setdefault(component, {})[field_name] = value
            else:
                nested_overrides[key] = value

        new_fields: Dict[str, Any] = {}
        for field_name in _COMPONENTS:
            current_config = getattr(self, field_name)
            if field_name in nested_overrides:
                try:
                    new_fields[field_name] = replace(
                        current_config, **nested_overrides[field_name]
                    )
                except (TypeError, ValueError) as e:
                    raise ConfigValidationError(str(e), field_name=field_name) from e
            else:
                new_fields[field_name] = current_config

        for key, value in nested_overrides.items():
            if key not in _COMPONENTS:
                new_fields[key] = value

        try:
            return replace(self, **new_fields)
        except TypeError as e:
            raise ConfigValidationError(
                str(e),
                suggestions=[f"Use one of {_COMPONENTS + ['name']}"],
            ) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _dataclass_to_dict(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            if isinstance(obj, (list, tuple)):
                return [_dataclass_to_dict(item) for item in obj]
            return obj

        return _dataclass_to_dict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EditorConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected so typos in config files surface early.
        """
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration data must be a mapping")

        components = {
            "tokenization": TokenizationConfig,
            "tree": TreeConfig,
            "global_": GlobalConfig,
        }
        field_values: Dict[str, Any] = {}
        for key, value in data.items():
            if key in components:
                target_class = components[key]
                if not isinstance(value, dict):
                    raise ConfigValidationError(
                        f"Section '{key}' must be a mapping", field_name=key
                    )
                unknown = set(value) - set(target_class.__dataclass_fields__)
                if unknown:
                    raise ConfigValidationError(
                        f"Unknown fields in '{key}': {sorted(unknown)}",
                        field_name=key,
                    )
                try:
                    field_values[key] = target_class(**value)
                except (TypeError, ValueError) as e:
                    raise ConfigValidationError(str(e), field_name=key) from e
            elif key == "name":
                field_values[key] = value
            else:
                raise ConfigValidationError(
                    f"Unknown configuration section: {key}",
                    field_name=key,
                    suggestions=[f"Use one of {_COMPONENTS + ['name']}"],
                )

        return cls(**field_values)

    @classmethod
    def from_json(cls, json_str: str) -> "EditorConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid JSON configuration: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "EditorConfig":
        """Load configuration from a JSON file."""
        config_path = Path(path)
        try:
            content = config_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Could not read config file {config_path}: {e}") from e
        return cls.from_json(content)
