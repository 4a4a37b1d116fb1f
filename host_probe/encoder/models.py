"""Quick Sync encoder capability and preset definitions."""

from dataclasses import dataclass
from enum import Enum

from host_probe.system.classifier import HardwareGeneration


class EncoderCapability(Enum):
    """Encoder features that depend on the hardware generation."""

    B_REF_PYRAMID = "b_ref_pyramid"  # reference B-frames
    MBBRC = "mbbrc"  # macroblock-level bitrate control
    EXTBRC = "extbrc"  # extended bitrate control
    TRELLIS = "trellis"  # trellis quantization


@dataclass(frozen=True)
class PresetSpec:
    """Specification for an encoder preset."""

    name: str
    target_usage: int  # 1 = best quality, 7 = best speed
    num_ref_frame: int  # 0 lets the encoder decide
    lookahead: bool = False
    description: str = ""


# Minimum generation required for each capability
CAPABILITY_REQUIREMENTS: dict[EncoderCapability, HardwareGeneration] = {
    EncoderCapability.B_REF_PYRAMID: HardwareGeneration.G3,
    EncoderCapability.MBBRC: HardwareGeneration.G3,
    EncoderCapability.EXTBRC: HardwareGeneration.G2,
    EncoderCapability.TRELLIS: HardwareGeneration.G3,
}

# Haswell and newer
PRESETS_G3: dict[str, PresetSpec] = {
    "speed": PresetSpec(
        name="speed",
        target_usage=6,
        num_ref_frame=1,
        description="Fastest encode, lowest quality",
    ),
    "balanced": PresetSpec(
        name="balanced",
        target_usage=4,
        num_ref_frame=1,
        description="Trade-off between speed and quality",
    ),
    "quality": PresetSpec(
        name="quality",
        target_usage=2,
        num_ref_frame=0,
        lookahead=True,
        description="Best quality, slowest encode",
    ),
}

# Sandy Bridge and Ivy Bridge have no quality preset; balanced uses the encoder defaults
PRESETS_LEGACY: dict[str, PresetSpec] = {
    "speed": PresetSpec(
        name="speed",
        target_usage=4,
        num_ref_frame=0,
        description="Fastest encode, lowest quality",
    ),
    "balanced": PresetSpec(
        name="balanced",
        target_usage=2,
        num_ref_frame=0,
        description="Best quality available on this generation",
    ),
}

DEFAULT_PRESET = "quality"
DEFAULT_PRESET_LEGACY = "balanced"

# Hardware encoding needs at least Sandy Bridge; third party hardware is unsupported
MIN_HARDWARE_GENERATION = HardwareGeneration.G1


def get_presets(generation: HardwareGeneration) -> dict[str, PresetSpec]:
    """Get the presets offered on a hardware generation."""
    if generation >= HardwareGeneration.G3:
        return PRESETS_G3
    return PRESETS_LEGACY


def default_preset(generation: HardwareGeneration) -> str:
    """Get the default preset name on a hardware generation."""
    if generation >= HardwareGeneration.G3:
        return DEFAULT_PRESET
    return DEFAULT_PRESET_LEGACY


def get_capabilities(generation: HardwareGeneration) -> list[EncoderCapability]:
    """Get the capabilities supported by a hardware generation."""
    if generation < MIN_HARDWARE_GENERATION:
        return []
    return [
        capability
        for capability, required in CAPABILITY_REQUIREMENTS.items()
        if generation >= required
    ]


def all_preset_names() -> set[str]:
    """Get every preset name known on any generation."""
    return set(PRESETS_G3) | set(PRESETS_LEGACY)
