"""Host capability probe: memory, processor identity and display geometry."""

import logging
from dataclasses import dataclass

from host_probe.geometry import DisplayBounds
from host_probe.platforms.base import HostPlatform, HostQueryError, get_platform
from host_probe.system import classifier

logger = logging.getLogger(__name__)

BYTES_PER_KB = 1024


@dataclass
class HostInfo:
    """Snapshot of host capability information."""

    total_memory_mb: int
    processor_name: str | None
    is_recent_generation: bool
    is_mid_generation: bool
    display: DisplayBounds | None = None

    def __str__(self) -> str:
        cpu_info = self.processor_name or "unknown processor"
        display_info = str(self.display) if self.display else "no display"
        return f"Memory: {self.total_memory_mb} MB, CPU: {cpu_info}, Display: {display_info}"


def bytes_to_mb(total_bytes: int) -> int:
    """Convert bytes to megabytes, truncating after each division by 1024."""
    return total_bytes // BYTES_PER_KB // BYTES_PER_KB


class HostCapabilityProbe:
    """
    Queries host hardware facts on demand.

    Holds no state beyond its platform collaborator: every call goes to the
    host and nothing is cached, so one instance can be shared across threads.
    """

    def __init__(self, platform: HostPlatform | None = None) -> None:
        self.platform = platform or get_platform()

    def total_physical_memory_mb(self) -> int:
        """
        Get total physical memory in megabytes.

        Raises:
            HostQueryError: If the memory facility is unreachable or reports
                a malformed value.
        """
        total_bytes = self.platform.total_memory_bytes()
        if not isinstance(total_bytes, int) or total_bytes < 0:
            raise HostQueryError(f"Host reported invalid memory size: {total_bytes!r}")
        return bytes_to_mb(total_bytes)

    def processor_identity(self) -> str | None:
        """
        Get the processor display name.

        Returns None when the host has no processor descriptor.

        Raises:
            HostQueryError: On unrecoverable I/O errors.
        """
        name = self.platform.processor_name()
        if name is None:
            return None
        name = name.strip()
        return name or None

    def is_recent_generation(self) -> bool:
        """Check whether the processor looks like Haswell or newer."""
        return classifier.is_recent_generation(self._identity_or_none())

    def is_mid_generation(self) -> bool:
        """Check whether the processor looks like Sandy Bridge."""
        return classifier.is_mid_generation(self._identity_or_none())

    def primary_display_bounds(self) -> DisplayBounds:
        """
        Get the primary display's bounding rectangle.

        Raises:
            HostQueryError: If no display is available.
        """
        return self.platform.primary_display()

    def detect(self) -> HostInfo:
        """
        Collect all host facts in one snapshot.

        Memory failures propagate. A missing display is recorded as None since
        headless hosts are expected.
        """
        identity = self._identity_or_none()

        try:
            display = self.primary_display_bounds()
        except HostQueryError as e:
            logger.warning(f"Display bounds unavailable: {e}")
            display = None

        return HostInfo(
            total_memory_mb=self.total_physical_memory_mb(),
            processor_name=identity,
            is_recent_generation=classifier.is_recent_generation(identity),
            is_mid_generation=classifier.is_mid_generation(identity),
            display=display,
        )

    def _identity_or_none(self) -> str | None:
        try:
            return self.processor_identity()
        except HostQueryError as e:
            logger.warning(f"Processor identity unavailable: {e}")
            return None
