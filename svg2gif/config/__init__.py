"""Configuration management for svg2gif."""

from .settings import AppConfig, ConfigError, ConversionConfig, S3Config, load_config

__all__ = ["AppConfig", "ConfigError", "ConversionConfig", "S3Config", "load_config"]
