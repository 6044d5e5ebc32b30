"""Configuration loading."""

from stencil.config.loader import (
    get_home_config_path,
    get_local_config_path,
    load_config,
    load_yaml_config,
)
from stencil.config.schema import DEFAULT_CONFIG, StencilConfig

__all__ = [
    "DEFAULT_CONFIG",
    "StencilConfig",
    "get_home_config_path",
    "get_local_config_path",
    "load_config",
    "load_yaml_config",
]
