"""Configuration and messages shared across ptree."""

from .config import PairtreeConfig, configure, get_config, reset_config

__all__ = ["PairtreeConfig", "configure", "get_config", "reset_config"]
