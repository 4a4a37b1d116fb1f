"""Quick Sync encoder defaults."""

from host_probe.encoder.models import EncoderCapability, PresetSpec, default_preset
from host_probe.encoder.selector import EncoderSelection, EncoderSelector

__all__ = [
    "EncoderCapability",
    "PresetSpec",
    "default_preset",
    "EncoderSelection",
    "EncoderSelector",
]
