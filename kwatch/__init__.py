"""
kwatch configuration package.

Loads the monitoring agent settings from YAML and resolves the filters
consumed by event dispatch.
"""
from kwatch.config.loader import load_config, load_config_from_string
from kwatch.models.config import Config

__version__ = "0.1.0"

__all__ = ["Config", "load_config", "load_config_from_string", "__version__"]
