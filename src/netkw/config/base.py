"""
Base configuration classes for netkw.
Provides hierarchical configuration with validation and defaults.
"""

from dataclasses import dataclass, field
from typing import Literal, Optional, Union
import logging
import torch
import yaml
from pathlib import Path


# Type definitions for better type checking
DTypeName = Literal["float16", "bfloat16", "float32", "float64", "int32", "int64"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

SUPPORTED_DTYPES = ("float16", "bfloat16", "float32", "float64", "int32", "int64")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class BaseConfig:
    """Base configuration class with common functionality."""

    def validate(self) -> None:
        """Validate configuration parameters."""
        pass

    def to_dict(self) -> dict:
        """Convert configuration to dictionary."""
        return {k: v for k, v in self.__dict__.items() if not k.startswith('_')}

    @classmethod
    def from_dict(cls, config_dict: dict) -> 'BaseConfig':
        """Create configuration from dictionary."""
        return cls(**config_dict)

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> 'BaseConfig':
        """Load configuration from YAML file."""
        with open(yaml_path, 'r') as f:
            config_dict = yaml.safe_load(f)
        return cls.from_dict(config_dict or {})

    def to_yaml(self, yaml_path: Union[str, Path]) -> None:
        """Save configuration to YAML file."""
        with open(yaml_path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, indent=2)


@dataclass
class ArrayConfig(BaseConfig):
    """How raw sequences are turned into native tensors."""

    # Element type used for nested sequences and numpy arrays
    dtype: DTypeName = "float32"

    # Target device, None leaves torch's default
    device: Optional[str] = None

    def validate(self) -> None:
        """Validate array configuration."""
        super().validate()

        if self.dtype not in SUPPORTED_DTYPES:
            raise ValueError(f"dtype must be one of {list(SUPPORTED_DTYPES)}, got {self.dtype}")
        if self.device is not None and not str(self.device).strip():
            raise ValueError("device must be a non-empty string or None")

    def torch_dtype(self):
        """Resolve ``dtype`` to the torch dtype object."""
        return getattr(torch, self.dtype)


@dataclass
class LoggingConfig(BaseConfig):
    """Logging configuration for the ``netkw`` logger."""

    level: LogLevel = "WARNING"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    def validate(self) -> None:
        """Validate logging configuration."""
        super().validate()

        if str(self.level).upper() not in LOG_LEVELS:
            raise ValueError(f"level must be one of {list(LOG_LEVELS)}, got {self.level}")


@dataclass
class NetKWConfig(BaseConfig):
    """Main configuration class combining all sub-configurations."""

    arrays: ArrayConfig = field(default_factory=ArrayConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> None:
        """Validate entire configuration."""
        super().validate()
        if not isinstance(self.arrays, ArrayConfig):
            raise ValueError("arrays must be an ArrayConfig section")
        if not isinstance(self.logging, LoggingConfig):
            raise ValueError("logging must be a LoggingConfig section")
        self.arrays.validate()
        self.logging.validate()

    @classmethod
    def from_dict(cls, config_dict: dict) -> 'NetKWConfig':
        """Create NetKWConfig from dictionary, handling nested sections."""
        # Copy to avoid mutating input
        cfg = dict(config_dict or {})

        # An empty YAML section loads as None
        arrays = cfg.get('arrays')
        if arrays is None:
            cfg['arrays'] = ArrayConfig()
        elif isinstance(arrays, dict):
            cfg['arrays'] = ArrayConfig.from_dict(arrays)

        log_cfg = cfg.get('logging')
        if log_cfg is None:
            cfg['logging'] = LoggingConfig()
        elif isinstance(log_cfg, dict):
            cfg['logging'] = LoggingConfig.from_dict(log_cfg)

        return cls(**cfg)

    def to_dict(self) -> dict:
        """Convert configuration to a nested dictionary."""
        return {
            'arrays': self.arrays.to_dict(),
            'logging': self.logging.to_dict()
        }


_active_config = NetKWConfig()


def get_config() -> NetKWConfig:
    """Return the process-wide active configuration."""
    return _active_config


def set_config(config: NetKWConfig) -> NetKWConfig:
    """Validate and activate ``config``; returns the previously active one."""
    global _active_config
    config.validate()
    previous = _active_config
    _active_config = config
    return previous


def load_config(yaml_path: Union[str, Path]) -> NetKWConfig:
    """Load a YAML configuration file and make it the active configuration."""
    config = NetKWConfig.from_yaml(yaml_path)
    set_config(config)
    return config


def configure_logging(config: Optional[LoggingConfig] = None) -> logging.Logger:
    """
    Apply a logging configuration to the ``netkw`` package logger.

    Library modules only ever call ``logging.getLogger(__name__)``; this is
    for applications that want the package's debug output.

    Args:
        config: Logging configuration, defaults to the active one

    Returns:
        The configured package logger
    """
    config = config or get_config().logging
    config.validate()

    logger = logging.getLogger("netkw")
    logger.setLevel(str(config.level).upper())
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(config.format))
        logger.addHandler(handler)
    return logger
