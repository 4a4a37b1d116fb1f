"""Linux host queries via /proc and xrandr."""

import logging
import os
import re
import subprocess
from pathlib import Path

from host_probe.geometry import DisplayBounds
from host_probe.platforms.base import HostPlatform, HostQueryError

logger = logging.getLogger(__name__)

CPUINFO_PATH = Path("/proc/cpuinfo")

# Checked in order; ARM kernels report "Processor" or "Hardware" instead
CPUINFO_NAME_FIELDS = ("model name", "Processor", "Hardware")

# e.g. "DP-1 connected primary 2560x1440+0+0 (normal left inverted ...)"
XRANDR_OUTPUT_RE = re.compile(
    r"^(?P<output>\S+) connected (?P<primary>primary )?"
    r"(?P<width>\d+)x(?P<height>\d+)\+(?P<x>\d+)\+(?P<y>\d+)"
)


class LinuxPlatform(HostPlatform):
    """Linux collaborator: /proc/cpuinfo, psutil and xrandr."""

    @property
    def name(self) -> str:
        return "linux"

    def processor_name(self) -> str | None:
        try:
            content = CPUINFO_PATH.read_text()
        except FileNotFoundError:
            logger.warning(f"{CPUINFO_PATH} not found, processor name unavailable")
            return None
        except OSError as e:
            raise HostQueryError(f"Failed to read {CPUINFO_PATH}: {e}") from e

        return parse_cpuinfo_name(content)

    def primary_display(self) -> DisplayBounds:
        if not (os.environ.get("DISPLAY") or os.environ.get("WAYLAND_DISPLAY")):
            raise HostQueryError("No display available (headless host)")

        try:
            result = self._run(["xrandr", "--query"])
        except subprocess.CalledProcessError as e:
            raise HostQueryError(f"xrandr failed: {e.stderr.strip() or e}") from e

        bounds = parse_xrandr_primary(result.stdout)
        if bounds is None:
            raise HostQueryError("xrandr reported no active display")
        return bounds


def parse_cpuinfo_name(content: str) -> str | None:
    """Extract the processor name from /proc/cpuinfo contents."""
    fields: dict[str, str] = {}
    for line in content.splitlines():
        key, sep, value = line.partition(":")
        if not sep:
            continue
        key = key.strip()
        if key in CPUINFO_NAME_FIELDS and key not in fields:
            fields[key] = value.strip()

    for key in CPUINFO_NAME_FIELDS:
        if fields.get(key):
            return fields[key]
    return None


def parse_xrandr_primary(output: str) -> DisplayBounds | None:
    """
    Find the primary display in `xrandr --query` output.

    Falls back to the first connected output with a geometry when no output
    is flagged as primary.
    """
    first: DisplayBounds | None = None
    for line in output.splitlines():
        match = XRANDR_OUTPUT_RE.match(line)
        if match is None:
            continue

        bounds = DisplayBounds(
            x=int(match.group("x")),
            y=int(match.group("y")),
            width=int(match.group("width")),
            height=int(match.group("height")),
        )
        if match.group("primary"):
            return bounds
        if first is None:
            first = bounds

    return first
