"""Configuration file loading and merging."""

import logging
import os
from pathlib import Path

import yaml

from stencil.config.schema import DEFAULT_CONFIG, StencilConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.yaml"

ENV_DEFAULT_LANGUAGE = "STENCIL_DEFAULT_LANGUAGE"
ENV_TEMPLATES_FILE = "STENCIL_TEMPLATES_FILE"


def get_home_config_path() -> Path:
    """Get path to global config: ~/.stencil/config.yaml."""
    return Path.home() / ".stencil" / CONFIG_FILENAME


def get_local_config_path() -> Path:
    """Get path to local config: ./.stencil/config.yaml."""
    return Path.cwd() / ".stencil" / CONFIG_FILENAME


def load_yaml_config(path: Path) -> dict[str, object] | None:
    """Load a YAML config file, return None if not found or empty."""
    if not path.exists():
        return None
    try:
        with path.open() as f:
            data = yaml.safe_load(f)
            if data is None:
                return None
            if not isinstance(data, dict):
                logger.debug("Ignoring non-mapping config file %s", path)
                return None
            result: dict[str, object] = data
            return result
    except yaml.YAMLError:
        logger.warning("Ignoring invalid YAML in config file %s", path)
        return None


def _env_config() -> StencilConfig:
    """Config values taken from STENCIL_* environment variables."""
    return StencilConfig(
        default_language=os.environ.get(ENV_DEFAULT_LANGUAGE) or None,
        templates_file=os.environ.get(ENV_TEMPLATES_FILE) or None,
    )


def load_config() -> StencilConfig:
    """Load merged configuration.

    Precedence (lowest to highest):
    1. Built-in defaults
    2. Global config (~/.stencil/config.yaml)
    3. Local config (./.stencil/config.yaml)
    4. STENCIL_DEFAULT_LANGUAGE / STENCIL_TEMPLATES_FILE env vars

    Returns merged StencilConfig.
    """
    config = DEFAULT_CONFIG

    home_data = load_yaml_config(get_home_config_path())
    if home_data:
        config = config.merge(StencilConfig.from_dict(home_data))

    local_data = load_yaml_config(get_local_config_path())
    if local_data:
        config = config.merge(StencilConfig.from_dict(local_data))

    return config.merge(_env_config())
