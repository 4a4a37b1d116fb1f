"""OS collaborators for host queries."""

from host_probe.platforms.base import HostPlatform, HostQueryError, get_platform
from host_probe.platforms.darwin import DarwinPlatform
from host_probe.platforms.linux import LinuxPlatform
from host_probe.platforms.windows import WindowsPlatform

__all__ = [
    "HostPlatform",
    "HostQueryError",
    "get_platform",
    "DarwinPlatform",
    "LinuxPlatform",
    "WindowsPlatform",
]
