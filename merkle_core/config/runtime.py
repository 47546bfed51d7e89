"""
Runtime Configuration

Central configuration for hash algorithm selection, logging and benchmark
defaults.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from merkle_core.crypto.hashers import DEFAULT_HASHER, MerkleHasher, get_hasher
from merkle_core.schemas.errors import ConfigurationError, UnknownHasherError

load_dotenv()


ENV_PREFIX = "MERKLE_"


@dataclass
class HashConfig:
    """Configuration for the hash algorithm used by trees and proofs."""
    algorithm: str = DEFAULT_HASHER.name

    def resolve(self) -> type[MerkleHasher]:
        """Return the hasher class for `algorithm`."""
        try:
            return get_hasher(self.algorithm)
        except UnknownHasherError as e:
            raise ConfigurationError(
                str(e), key="hash.algorithm", details=e.details
            ) from e


@dataclass
class LoggingConfig:
    """Configuration for CLI logging."""
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class BenchConfig:
    """Defaults for the benchmark command."""
    leaves: int = 65_536
    rounds: int = 10


def _env_int(name: str) -> int:
    raw = os.getenv(name, "")
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"{name} must be an integer, got {raw!r}", key=name
        ) from e


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    hash: HashConfig = field(default_factory=HashConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    bench: BenchConfig = field(default_factory=BenchConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - MERKLE_HASH_ALGORITHM: Hash algorithm name (sha3-256, keccak-256, sha256)
        - MERKLE_LOG_LEVEL: Log level
        - MERKLE_LOG_FILE: Optional log file path
        - MERKLE_BENCH_LEAVES: Default benchmark leaf count
        - MERKLE_BENCH_ROUNDS: Default benchmark build rounds
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM"):
            overrides.setdefault("hash", {})["algorithm"] = os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM")

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        if os.getenv(f"{ENV_PREFIX}BENCH_LEAVES"):
            overrides.setdefault("bench", {})["leaves"] = _env_int(f"{ENV_PREFIX}BENCH_LEAVES")
        if os.getenv(f"{ENV_PREFIX}BENCH_ROUNDS"):
            overrides.setdefault("bench", {})["rounds"] = _env_int(f"{ENV_PREFIX}BENCH_ROUNDS")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(
                    f"Invalid YAML in config file {path}: {e}",
                    details={"path": str(path)},
                ) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config file must contain a mapping, got {type(data).__name__}"
            )
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        hash_data = data.get("hash") or {}
        logging_data = data.get("logging") or {}
        bench_data = data.get("bench") or {}

        try:
            config = cls(
                hash=HashConfig(**hash_data),
                logging=LoggingConfig(**logging_data),
                bench=BenchConfig(**bench_data),
                extra=data.get("extra") or {},
            )
        except TypeError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

        config.validate()
        return config

    def validate(self) -> None:
        """
        Check that configured values are usable.

        Raises:
            ConfigurationError: On an unknown algorithm or non-positive bench sizes
        """
        self.hash.resolve()
        if not isinstance(self.logging.level, str):
            raise ConfigurationError(
                f"logging.level must be a string, got {self.logging.level!r}",
                key="logging.level",
            )
        for key in ("leaves", "rounds"):
            value = getattr(self.bench, key)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ConfigurationError(
                    f"bench.{key} must be a positive integer, got {value!r}",
                    key=f"bench.{key}",
                )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for section, values in overrides.items():
            target = getattr(new_config, section)
            for key, value in values.items():
                setattr(target, key, value)

        new_config.validate()
        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "hash": {
                "algorithm": self.hash.algorithm,
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
            "bench": {
                "leaves": self.bench.leaves,
                "rounds": self.bench.rounds,
            },
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config
