"""YAML configuration file loading with Pydantic validation."""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError as SchemaError

from agentconf.errors import ConfigError

from .models import AgentConfig

logger = logging.getLogger(__name__)


def load_yaml(path: Path) -> dict:
    """Load a YAML file and return its contents as a dict.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed YAML contents.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
            if data is None:
                return {}
    except FileNotFoundError:
        raise ConfigError(f"Configuration file not found: {path}") from None
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at the top of {path}")
    return data


def load_agent_config(path: Path) -> AgentConfig:
    """Load an agent configuration file and validate it.

    Schema errors are reported as ConfigError. Cross-field rules are checked
    straight away so a contradictory file fails before anything is planned.

    Raises:
        ConfigError: If the file is unreadable or does not match the schema.
        ValidationError: If the parameters contradict each other.
    """
    from agentconf.validator import validate

    data = load_yaml(path)
    try:
        config = AgentConfig(**data)
    except SchemaError as e:
        raise ConfigError(f"Configuration validation failed for {path}: {e}") from e

    validate(config)
    logger.debug(f"Loaded agent config from {path}")
    return config
