"""Configuration management for the host-probe CLI."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from host_probe.encoder.models import all_preset_names
from host_probe.platforms.base import DEFAULT_QUERY_TIMEOUT

logger = logging.getLogger(__name__)

# Default config locations
CONFIG_PATHS = [
    Path.home() / ".config" / "host-probe" / "config.json",
    Path.home() / ".host-probe.json",
]


@dataclass
class EncoderConfig:
    """Encoder default selection configuration."""

    preset: str | None = None  # None means use the generation default
    selection_mode: str = "auto"  # "auto" or "manual"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EncoderConfig":
        return cls(
            preset=data.get("preset"),
            selection_mode=data.get("selection_mode", "auto"),
        )


@dataclass
class Config:
    """Main configuration for host-probe."""

    query_timeout: float = DEFAULT_QUERY_TIMEOUT
    encoder: EncoderConfig = field(default_factory=EncoderConfig)

    @property
    def preferred_preset(self) -> str | None:
        """The preset to request, honoured only in manual selection mode."""
        if self.encoder.selection_mode == "manual":
            return self.encoder.preset
        return None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        """Create config from a dictionary."""
        return cls(
            query_timeout=data.get("query_timeout", DEFAULT_QUERY_TIMEOUT),
            encoder=EncoderConfig.from_dict(data.get("encoder", {})),
        )

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """Load configuration from file or return defaults."""
        if path:
            paths_to_try = [path]
        else:
            paths_to_try = CONFIG_PATHS

        for config_path in paths_to_try:
            if config_path.exists():
                try:
                    with open(config_path) as f:
                        data = json.load(f)
                    logger.info(f"Loaded config from {config_path}")
                    return cls.from_dict(data)
                except (json.JSONDecodeError, OSError) as e:
                    logger.warning(f"Failed to load config from {config_path}: {e}")

        logger.info("Using default configuration")
        return cls()

    def to_dict(self) -> dict[str, Any]:
        """Convert config to a dictionary."""
        return {
            "query_timeout": self.query_timeout,
            "encoder": {
                "preset": self.encoder.preset,
                "selection_mode": self.encoder.selection_mode,
            },
        }

    def save(self, path: Path | None = None) -> None:
        """Save configuration to file."""
        save_path = path or CONFIG_PATHS[0]
        save_path.parent.mkdir(parents=True, exist_ok=True)
        with open(save_path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved config to {save_path}")

    def validate(self) -> list[str]:
        """Validate the configuration and return any issues."""
        issues: list[str] = []

        if not isinstance(self.query_timeout, (int, float)) or self.query_timeout <= 0:
            issues.append(f"query_timeout {self.query_timeout} should be a positive number of seconds")

        if self.encoder.selection_mode not in ("auto", "manual"):
            issues.append(f"Unknown selection_mode: {self.encoder.selection_mode}")

        if self.encoder.selection_mode == "manual" and not self.encoder.preset:
            issues.append("Manual selection mode requires a preset to be specified")

        if self.encoder.preset and self.encoder.preset not in all_preset_names():
            issues.append(f"Unknown preset: {self.encoder.preset}")

        return issues
