"""
Configuration management for svg2gif.
"""

import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


class ConfigError(ValueError):
    """Raised when a configuration value cannot be used for a run."""


@dataclass
class S3Config:
    """Object store configuration."""
    bucket_name: str = "chromatograms"
    region: str = "us-east-1"
    access_key_id: str = ""
    secret_access_key: str = ""
    endpoint_url: Optional[str] = None  # For MinIO or other S3-compatible stores
    prefix: str = ""
    recursive: bool = True
    page_size: int = 100


@dataclass
class ConversionConfig:
    """Conversion configuration."""
    source_extension: str = ".svg"
    target_extension: str = ".gif"
    target_format: str = "GIF"
    min_size_bytes: int = 1024
    max_width: int = 1600
    density: float = 1000
    max_concurrent_jobs: int = 4
    upload_results: bool = False


@dataclass
class AppConfig:
    """Main application configuration."""
    s3: S3Config = field(default_factory=S3Config)
    conversion: ConversionConfig = field(default_factory=ConversionConfig)
    output_path: str = "Output/"
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def validate(self) -> None:
        """
        Check values that would otherwise fail halfway through a run.

        Raises:
            ConfigError: if any value is out of range
        """
        conv = self.conversion
        if conv.max_concurrent_jobs < 1:
            raise ConfigError("conversion.max_concurrent_jobs must be at least 1")
        if self.s3.page_size < 1:
            raise ConfigError("s3.page_size must be at least 1")
        if conv.max_width < 1:
            raise ConfigError("conversion.max_width must be at least 1")
        if conv.density <= 0:
            raise ConfigError("conversion.density must be positive")
        for name in ("source_extension", "target_extension"):
            if not getattr(conv, name).startswith("."):
                raise ConfigError(f"conversion.{name} must start with '.'")


def _number(section: dict, key: str, default, kind=int):
    value = section.get(key, default)
    try:
        return kind(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{key} must be a number, got {value!r}") from None


def load_config(config_path: Path) -> AppConfig:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config.yaml file

    Returns:
        AppConfig instance

    Raises:
        ConfigError: if a numeric setting cannot be parsed
    """
    if not config_path.exists():
        # Return default configuration
        return AppConfig()

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    s3_defaults = S3Config()
    s3_data = data.get('s3', {})
    s3_config = S3Config(
        bucket_name=s3_data.get('bucket_name', s3_defaults.bucket_name),
        region=s3_data.get('region', s3_defaults.region),
        access_key_id=s3_data.get('access_key_id', ''),
        secret_access_key=s3_data.get('secret_access_key', ''),
        endpoint_url=s3_data.get('endpoint_url'),
        prefix=s3_data.get('prefix', ''),
        recursive=s3_data.get('recursive', True),
        page_size=_number(s3_data, 'page_size', s3_defaults.page_size)
    )

    conv_defaults = ConversionConfig()
    conv_data = data.get('conversion', {})
    conversion_config = ConversionConfig(
        source_extension=conv_data.get('source_extension', conv_defaults.source_extension),
        target_extension=conv_data.get('target_extension', conv_defaults.target_extension),
        target_format=conv_data.get('target_format', conv_defaults.target_format),
        min_size_bytes=_number(conv_data, 'min_size_bytes', conv_defaults.min_size_bytes),
        max_width=_number(conv_data, 'max_width', conv_defaults.max_width),
        density=_number(conv_data, 'density', conv_defaults.density, float),
        max_concurrent_jobs=_number(conv_data, 'max_concurrent_jobs', conv_defaults.max_concurrent_jobs),
        upload_results=conv_data.get('upload_results', False)
    )

    config = AppConfig(
        s3=s3_config,
        conversion=conversion_config,
        output_path=data.get('output_path', 'Output/'),
        log_level=data.get('log_level', 'INFO'),
        log_file=data.get('log_file')
    )

    return config
