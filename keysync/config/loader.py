"""Configuration loading from a YAML file and command line values."""

from pathlib import Path
from typing import Any, Dict, Optional

import structlog
import yaml
from pydantic import ValidationError

from ..errors import ConfigurationError
from .settings import Settings

logger = structlog.get_logger()


def load_config_file(config_file: Path) -> Dict[str, Any]:
    """Read a YAML mapping of settings. Dashes in keys are accepted."""
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError as e:
        raise ConfigurationError(f"Config file not found: {config_file}", config_key="config_file") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_file}: {e}", config_key="config_file") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Cannot read config file {config_file}: {e}", config_key="config_file") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"{config_file} must contain a mapping", config_key="config_file")
    return {str(key).replace("-", "_"): value for key, value in data.items()}


def load_config(
    cli_values: Optional[Dict[str, Any]] = None,
    config_file: Optional[Path] = None,
) -> Settings:
    """Build validated settings.

    Values from ``config_file`` are applied first; command line values that
    are not None override them.

    Raises:
        ConfigurationError: on a missing source directory or invalid values
    """
    values: Dict[str, Any] = {}
    if config_file is not None:
        values.update(load_config_file(config_file))
        logger.debug("Loaded config file", file=str(config_file), keys=sorted(values))

    values.update({key: value for key, value in (cli_values or {}).items() if value is not None})

    if not values.get("source"):
        raise ConfigurationError("No source directory supplied. Use -s/--source", config_key="source")

    try:
        settings = Settings(**values)
    except ValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first.get("loc", ())) or None
        raise ConfigurationError(f"Invalid configuration: {first.get('msg')}", config_key=key) from e

    if not settings.source.is_dir():
        raise ConfigurationError(f"Source directory does not exist: {settings.source}", config_key="source")

    return settings
