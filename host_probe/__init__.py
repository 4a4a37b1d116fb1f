"""host-probe: Host memory, processor and display capability probe."""

__version__ = "0.1.0"

from host_probe.geometry import DisplayBounds
from host_probe.platforms.base import HostPlatform, HostQueryError
from host_probe.system.detector import HostCapabilityProbe, HostInfo

__all__ = [
    "__version__",
    "DisplayBounds",
    "HostPlatform",
    "HostQueryError",
    "HostCapabilityProbe",
    "HostInfo",
]
