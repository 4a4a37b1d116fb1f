"""Windows host queries via the registry and user32."""

import logging

from host_probe.geometry import DisplayBounds
from host_probe.platforms.base import HostPlatform, HostQueryError

logger = logging.getLogger(__name__)

CPU_REGISTRY_KEY = r"HARDWARE\DESCRIPTION\System\CentralProcessor\0"
CPU_REGISTRY_VALUE = "ProcessorNameString"

# GetSystemMetrics indices for the primary display size
SM_CXSCREEN = 0
SM_CYSCREEN = 1


class WindowsPlatform(HostPlatform):
    """Windows collaborator: registry, psutil and user32 metrics."""

    @property
    def name(self) -> str:
        return "windows"

    def processor_name(self) -> str | None:
        import winreg

        try:
            with winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, CPU_REGISTRY_KEY) as key:
                value, _ = winreg.QueryValueEx(key, CPU_REGISTRY_VALUE)
        except FileNotFoundError:
            logger.warning(f"Registry value {CPU_REGISTRY_KEY}\\{CPU_REGISTRY_VALUE} not found")
            return None
        except OSError as e:
            raise HostQueryError(f"Failed to read processor name from registry: {e}") from e

        return value if isinstance(value, str) else None

    def primary_display(self) -> DisplayBounds:
        import ctypes

        try:
            user32 = ctypes.windll.user32
            width = user32.GetSystemMetrics(SM_CXSCREEN)
            height = user32.GetSystemMetrics(SM_CYSCREEN)
        except (AttributeError, OSError) as e:
            raise HostQueryError(f"user32 is not available: {e}") from e

        # The primary display always has its top-left corner at the origin
        if width <= 0 or height <= 0:
            raise HostQueryError("No display available (headless session)")
        return DisplayBounds(x=0, y=0, width=width, height=height)
