"""
Runtime Configuration Module

Provides configuration loading and management.
"""

from .runtime import (
    RuntimeConfig,
    HashConfig,
    LoggingConfig,
    BenchConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "RuntimeConfig",
    "HashConfig",
    "LoggingConfig",
    "BenchConfig",
    "get_default_config",
    "set_default_config",
]
