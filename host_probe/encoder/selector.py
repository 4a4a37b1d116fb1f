"""Quick Sync encoder defaults based on the detected hardware generation."""

import logging
from dataclasses import dataclass, field

from host_probe.encoder.models import (
    MIN_HARDWARE_GENERATION,
    EncoderCapability,
    PresetSpec,
    default_preset,
    get_capabilities,
    get_presets,
)
from host_probe.platforms.base import HostQueryError
from host_probe.system.classifier import HardwareGeneration, processor_generation
from host_probe.system.detector import HostCapabilityProbe

logger = logging.getLogger(__name__)


@dataclass
class EncoderSelection:
    """Result of encoder default selection."""

    generation: HardwareGeneration
    hardware_supported: bool
    preset: PresetSpec
    reason: str
    processor_name: str | None = None
    capabilities: list[EncoderCapability] = field(default_factory=list)
    available_presets: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        return f"Selected {self.preset.name} on {self.generation.label} ({self.reason})"


class EncoderSelector:
    """Selects Quick Sync encoder defaults for the current host."""

    def __init__(self, probe: HostCapabilityProbe | None = None) -> None:
        self.probe = probe or HostCapabilityProbe()

    def select(self, user_preference: str | None = None) -> EncoderSelection:
        """
        Select the encoder defaults for this host.

        Args:
            user_preference: Preset name requested by the user (optional)

        Returns:
            EncoderSelection with the chosen preset and reasoning
        """
        try:
            identity = self.probe.processor_identity()
        except HostQueryError as e:
            logger.warning(f"Processor identity unavailable: {e}")
            identity = None

        generation = processor_generation(identity)
        hardware_supported = generation >= MIN_HARDWARE_GENERATION
        presets = get_presets(generation)

        logger.info(
            f"Processor: {identity or 'unavailable'}, "
            f"generation: {generation.name} ({generation.label})"
        )

        preset, reason = self._choose_preset(presets, user_preference, generation)
        if not hardware_supported:
            reason = f"{reason}; hardware encoding unsupported on {generation.label}"

        return EncoderSelection(
            generation=generation,
            hardware_supported=hardware_supported,
            preset=preset,
            reason=reason,
            processor_name=identity,
            capabilities=get_capabilities(generation),
            available_presets=list(presets),
        )

    def _choose_preset(
        self,
        presets: dict[str, PresetSpec],
        user_preference: str | None,
        generation: HardwareGeneration,
    ) -> tuple[PresetSpec, str]:
        """Pick the user's preset if this generation offers it, else the default."""
        fallback = default_preset(generation)

        if user_preference:
            spec = presets.get(user_preference)
            if spec is not None:
                return spec, "user preference"
            logger.warning(
                f"Preset '{user_preference}' is not available on {generation.label}, "
                f"falling back to '{fallback}'"
            )
            return presets[fallback], f"fallback ('{user_preference}' unavailable)"

        logger.debug(f"Using default preset '{fallback}'")
        return presets[fallback], "default"
