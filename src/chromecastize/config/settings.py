"""Configuration management for chromecastize."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from . import constants

LOG = logging.getLogger(__name__)

DEFAULT_HOME = Path.home() / ".chromecastize"
CONFIG_FILENAME = "config.yaml"


# Configuration singleton
class _ConfigSingleton:
    """Configuration singleton holder."""

    _instance: ChromecastizeConfig | None = None

    @classmethod
    def get_instance(cls) -> ChromecastizeConfig:
        """Get the configuration instance."""
        if cls._instance is None:
            config_path = DEFAULT_HOME / CONFIG_FILENAME
            if config_path.exists():
                cls._instance = ChromecastizeConfig.load_from_file(config_path)
            else:
                cls._instance = ChromecastizeConfig()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the configuration instance."""
        cls._instance = None


_config_singleton = _ConfigSingleton()


@dataclass
class CategoryTable:
    """Supported/unsupported label lists for one registry category."""

    supported: list[str] = field(default_factory=list)
    unsupported: list[str] = field(default_factory=list)


@dataclass
class RegistryConfig:
    """Capability tables, seeded from constants and extendable from YAML."""

    container: CategoryTable = field(
        default_factory=lambda: CategoryTable(
            list(constants.SUPPORTED_CONTAINERS), list(constants.UNSUPPORTED_CONTAINERS)
        )
    )
    video_codec: CategoryTable = field(
        default_factory=lambda: CategoryTable(
            list(constants.SUPPORTED_VIDEO_CODECS), list(constants.UNSUPPORTED_VIDEO_CODECS)
        )
    )
    audio_codec: CategoryTable = field(
        default_factory=lambda: CategoryTable(
            list(constants.SUPPORTED_AUDIO_CODECS), list(constants.UNSUPPORTED_AUDIO_CODECS)
        )
    )


@dataclass
class ConversionDefaults:
    """Targets used when a stream or container has to change."""

    video_codec: str = constants.DEFAULT_VIDEO_CODEC
    audio_codec: str = constants.DEFAULT_AUDIO_CODEC
    container: str = constants.DEFAULT_CONTAINER


@dataclass
class GlobalConfig:
    """Global settings."""

    home: Path = DEFAULT_HOME
    ledger_file: str = "processed_files"
    backup_suffix: str = ".bak"
    log_level: str = "INFO"
    check_only: bool = False
    progress: bool = True
    probe_timeout: int = constants.PROBE_TIMEOUT_SECONDS

    @property
    def ledger_path(self) -> Path:
        """Location of the processed-file ledger."""
        return self.home / self.ledger_file


@dataclass
class ChromecastizeConfig:
    """Main configuration class."""

    registry: RegistryConfig = field(default_factory=RegistryConfig)
    defaults: ConversionDefaults = field(default_factory=ConversionDefaults)
    extensions: list[str] = field(default_factory=lambda: list(constants.VIDEO_EXTENSIONS))
    global_: GlobalConfig = field(default_factory=GlobalConfig)

    @classmethod
    def load_from_file(cls, config_path: Path) -> ChromecastizeConfig:
        """Load configuration from YAML file."""
        try:
            with config_path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}

            return cls._from_dict(data)
        except (OSError, yaml.YAMLError, AttributeError, TypeError, ValueError) as e:
            LOG.warning("Failed to load config from %s: %s", config_path, e)
            return cls()

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> ChromecastizeConfig:
        """Create config from dictionary."""
        if not isinstance(data, dict):
            msg = f"expected a mapping at the top level, got {type(data).__name__}"
            raise TypeError(msg)
        registry = cls._parse_registry(data.get("registry", {}))
        defaults_data = data.get("defaults", {})
        defaults = ConversionDefaults(
            video_codec=str(defaults_data.get("video_codec", constants.DEFAULT_VIDEO_CODEC)),
            audio_codec=str(defaults_data.get("audio_codec", constants.DEFAULT_AUDIO_CODEC)),
            container=str(defaults_data.get("container", constants.DEFAULT_CONTAINER)),
        )
        extensions = [
            str(ext).lower().lstrip(".") for ext in data.get("extensions", constants.VIDEO_EXTENSIONS)
        ]
        return cls(
            registry=registry,
            defaults=defaults,
            extensions=extensions,
            global_=cls._parse_global_config(data.get("global", {})),
        )

    @classmethod
    def _parse_registry(cls, registry_data: dict[str, Any]) -> RegistryConfig:
        """Extend the seed tables with labels from the config file."""
        registry = RegistryConfig()
        for name in ("container", "video_codec", "audio_codec"):
            table: CategoryTable = getattr(registry, name)
            section = registry_data.get(name) or {}
            if not isinstance(section, dict):
                LOG.warning("Ignoring registry section '%s': expected a mapping", name)
                continue

            for label in section.get("supported") or []:
                if str(label) not in table.supported:
                    table.supported.append(str(label))
            for label in section.get("unsupported") or []:
                if str(label) not in table.unsupported:
                    table.unsupported.append(str(label))

            overlap = set(table.supported) & set(table.unsupported)
            if overlap:
                LOG.warning(
                    "Labels listed as both supported and unsupported for %s (treated as supported): %s",
                    name,
                    ", ".join(sorted(overlap)),
                )
        return registry

    @classmethod
    def _parse_global_config(cls, global_data: dict[str, Any]) -> GlobalConfig:
        """Parse global configuration."""
        home = global_data.get("home")
        return GlobalConfig(
            home=Path(home).expanduser() if home else DEFAULT_HOME,
            ledger_file=global_data.get("ledger_file", "processed_files"),
            backup_suffix=global_data.get("backup_suffix", ".bak"),
            log_level=str(global_data.get("log_level", "INFO")).upper(),
            check_only=bool(global_data.get("check_only", False)),
            progress=bool(global_data.get("progress", True)),
            probe_timeout=int(global_data.get("probe_timeout", constants.PROBE_TIMEOUT_SECONDS)),
        )


def get_config() -> ChromecastizeConfig:
    """Get the global configuration instance."""
    return _config_singleton.get_instance()
