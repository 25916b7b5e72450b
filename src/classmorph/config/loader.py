"""
Configuration loader for ClassMorph.

Handles loading configuration from YAML files and command-line arguments.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from classmorph.generator.errors import InvalidNamespaceError

from .models import ClassMorphConfig, ConversionOptions, OutputConfig, TargetDialect


class ConfigurationError(Exception):
    """Raised when configuration is invalid."""

    pass


def validate_target(target: str) -> TargetDialect:
    """Validate a target dialect tag."""
    try:
        return TargetDialect(target.lower())
    except ValueError:
        valid_targets = [t.value for t in TargetDialect]
        raise ConfigurationError(
            f"Invalid target '{target}'. Valid targets: {valid_targets}"
        )


def validate_options(options: ConversionOptions) -> ConversionOptions:
    """Check cross-field constraints pydantic cannot express per field."""
    try:
        options.extended_namespace_path()
    except InvalidNamespaceError as e:
        raise ConfigurationError(f"Invalid extended namespace: {e}")

    if not options.constructor_name:
        raise ConfigurationError("'constructor_name' must not be empty")

    return options


def load_config_from_yaml(config_path: Path) -> ClassMorphConfig:
    """Load configuration from a YAML file."""
    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        try:
            raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file: {e}")

    if raw_config is None:
        raise ConfigurationError("Configuration file is empty")

    try:
        config = ClassMorphConfig(**raw_config)
    except (TypeError, ValidationError) as e:
        raise ConfigurationError(f"Configuration validation failed:\n{e}")

    validate_options(config.conversion)
    return config


def create_options_from_args(
    target: str | None = None,
    constructor_name: str | None = None,
    extended_namespace: str | None = None,
    extended: bool | None = None,
    base: ConversionOptions | None = None,
    **kwargs: Any,
) -> ConversionOptions:
    """Create conversion options from CLI arguments.

    Arguments left as None fall back to ``base`` (typically loaded from YAML)
    or to the model defaults.
    """
    values: dict[str, Any] = base.model_dump() if base else {}

    if target is not None:
        values["target"] = validate_target(target)
    if constructor_name is not None:
        values["constructor_name"] = constructor_name
    if extended_namespace is not None:
        values["extended_namespace"] = extended_namespace
        # Naming a superclass implies extension unless explicitly disabled
        values["extended"] = True if extended is None else extended
    elif extended is not None:
        values["extended"] = extended
    if "root_object" in kwargs and kwargs["root_object"]:
        values["root_object"] = kwargs["root_object"]

    try:
        options = ConversionOptions(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid conversion options:\n{e}")

    return validate_options(options)


def generate_default_config(output_path: Path) -> None:
    """Generate a default configuration file."""
    defaults = ClassMorphConfig()
    default_config = {
        "conversion": {
            "constructor_name": defaults.conversion.constructor_name,
            "extended": defaults.conversion.extended,
            "extended_namespace": defaults.conversion.extended_namespace,
            "target": defaults.conversion.target.value,
            "root_object": defaults.conversion.root_object,
        },
        "output": OutputConfig().model_dump(),
        "callee": defaults.callee,
    }

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        yaml.dump(default_config, f, default_flow_style=False, sort_keys=False)
