"""Configuration controller for YAML-based settings."""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any

import yaml

CONFIG_DIR_ENV = "HOSTCHECK_CONFIG_DIR"
PACKAGE_CONFIG_DIR = Path(__file__).resolve().parent


@dataclass(frozen=True)
class ConfigPaths:
    """Filesystem paths for configuration files."""

    config_dir: Path
    config_file: Path
    override_file: Path


class ConfigController:
    """Singleton controller for loading configuration."""

    _instance: "ConfigController | None" = None

    def __init__(self, config_dir: Path | None = None, config_file: str = "default.yaml") -> None:
        if ConfigController._instance is not None:
            raise RuntimeError("You cannot create another ConfigController class")

        if config_dir is None:
            env_dir = os.environ.get(CONFIG_DIR_ENV)
            config_dir = Path(env_dir).expanduser() if env_dir else PACKAGE_CONFIG_DIR
        self.paths = ConfigPaths(
            config_dir=config_dir,
            config_file=config_dir / config_file,
            override_file=config_dir / "override.yaml",
        )
        self.config: dict[str, Any] = {}
        self.load_config()

    @classmethod
    def get_instance(cls) -> "ConfigController":
        """Return the singleton instance of the controller."""

        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def load_from(cls, config_dir: Path) -> "ConfigController":
        """Replace the singleton with one loaded from ``config_dir``."""

        cls._instance = None
        cls._instance = cls(config_dir=config_dir)
        return cls._instance

    def load_config(self) -> None:
        """Load configuration from default and override YAML files.

        A missing ``default.yaml`` falls back to the packaged defaults.
        """

        config_file = self.paths.config_file
        if not config_file.exists():
            config_file = PACKAGE_CONFIG_DIR / "default.yaml"
        with config_file.open("r", encoding="utf-8") as file:
            config = yaml.safe_load(file) or {}

        if self.paths.override_file.exists():
            with self.paths.override_file.open("r", encoding="utf-8") as file:
                override_config = yaml.safe_load(file) or {}
            if override_config:
                config = self._deep_merge(config, override_config)

        self.config = self._normalize_config(config)

    def get_config(self) -> dict[str, Any]:
        """Return the currently loaded configuration."""

        return dict(self.config)

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge dictionaries, overriding base values with override values."""

        merged = dict(base)
        for key, value in override.items():
            if (
                key in merged
                and isinstance(merged[key], dict)
                and isinstance(value, dict)
            ):
                merged[key] = self._deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    def _normalize_config(self, config: dict[str, Any]) -> dict[str, Any]:
        """Fill in defaults and coerce value types."""

        normalized = dict(config)
        host_cfg = dict(normalized.get("host") or {})
        runtime_cfg = dict(normalized.get("runtime") or {})
        http_cfg = dict(normalized.get("http") or {})

        normalized["logging_level"] = str(normalized.get("logging_level") or "INFO")
        log_file = normalized.get("log_file")
        normalized["log_file"] = str(log_file) if log_file else None

        host_cfg["proc_cgroups"] = str(host_cfg.get("proc_cgroups", "/proc/cgroups"))
        host_cfg["mountinfo"] = str(host_cfg.get("mountinfo", "/proc/self/mountinfo"))
        host_cfg["os_release"] = str(host_cfg.get("os_release", "/etc/os-release"))

        runtime_cfg["endpoint"] = str(
            runtime_cfg.get("endpoint", "unix:///var/run/docker.sock")
        )
        runtime_cfg["timeout_s"] = float(runtime_cfg.get("timeout_s", 5.0))

        http_cfg["host"] = str(http_cfg.get("host", "0.0.0.0"))
        http_cfg["port"] = int(http_cfg.get("port", 8080))

        normalized["host"] = host_cfg
        normalized["runtime"] = runtime_cfg
        normalized["http"] = http_cfg
        return normalized
