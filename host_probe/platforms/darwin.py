"""macOS host queries via sysctl and system_profiler."""

import json
import logging
import re
import subprocess

from host_probe.geometry import DisplayBounds
from host_probe.platforms.base import HostPlatform, HostQueryError

logger = logging.getLogger(__name__)

# e.g. "2560 x 1600 Retina" or "3840 x 2160 (2160p/4K UHD 1 - Ultra High Definition)"
RESOLUTION_RE = re.compile(r"(\d+)\s*x\s*(\d+)")


class DarwinPlatform(HostPlatform):
    """macOS collaborator: sysctl, system_profiler and psutil."""

    @property
    def name(self) -> str:
        return "darwin"

    def total_memory_bytes(self) -> int:
        try:
            result = self._run(["sysctl", "-n", "hw.memsize"])
            return int(result.stdout.strip())
        except (subprocess.CalledProcessError, ValueError) as e:
            logger.warning(f"Failed to get total memory via sysctl: {e}")
            # Fallback to psutil
            return super().total_memory_bytes()

    def processor_name(self) -> str | None:
        try:
            result = self._run(["sysctl", "-n", "machdep.cpu.brand_string"])
            return result.stdout.strip() or None
        except subprocess.CalledProcessError:
            pass

        # Apple Silicon has no brand string, the chip is listed in the hardware overview
        try:
            result = self._run(["system_profiler", "SPHardwareDataType"])
        except subprocess.CalledProcessError:
            return None

        for line in result.stdout.splitlines():
            if "Chip" in line:
                return line.split(":")[-1].strip() or None
        return None

    def primary_display(self) -> DisplayBounds:
        try:
            result = self._run(["system_profiler", "SPDisplaysDataType", "-json"])
            data = json.loads(result.stdout)
        except subprocess.CalledProcessError as e:
            raise HostQueryError(f"system_profiler failed: {e}") from e
        except json.JSONDecodeError as e:
            raise HostQueryError(f"Malformed system_profiler output: {e}") from e

        bounds = parse_main_display(data)
        if bounds is None:
            raise HostQueryError("No display available")
        return bounds


def parse_main_display(data: dict) -> DisplayBounds | None:
    """Find the main display in `system_profiler SPDisplaysDataType -json` output."""
    screens = []
    for gpu in data.get("SPDisplaysDataType", []):
        screens.extend(gpu.get("spdisplays_ndrvs", []))

    # Without a main flag, take the first screen that reports a resolution
    screens.sort(key=lambda s: s.get("spdisplays_main") != "spdisplays_yes")
    for screen in screens:
        resolution = screen.get("_spdisplays_resolution") or screen.get("_spdisplays_pixels", "")
        match = RESOLUTION_RE.search(resolution)
        if match:
            return DisplayBounds(
                x=0,
                y=0,
                width=int(match.group(1)),
                height=int(match.group(2)),
            )
    return None
