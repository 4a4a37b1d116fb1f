"""Host capability detection."""

from host_probe.system.classifier import HardwareGeneration
from host_probe.system.detector import HostCapabilityProbe, HostInfo

__all__ = ["HardwareGeneration", "HostCapabilityProbe", "HostInfo"]
