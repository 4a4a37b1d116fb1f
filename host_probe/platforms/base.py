"""Base interface for the OS collaborators queried by the probe."""

import logging
import subprocess
import sys
from abc import ABC, abstractmethod

import psutil

from host_probe.geometry import DisplayBounds

logger = logging.getLogger(__name__)

# Upper bound for any single OS query, in seconds
DEFAULT_QUERY_TIMEOUT = 5.0


class HostQueryError(Exception):
    """A required host fact could not be retrieved."""


class HostPlatform(ABC):
    """
    Abstract base class for host platform collaborators.

    Each platform answers the three raw host queries the probe needs.
    Implementations must not cache results or mutate shared state.
    """

    def __init__(self, query_timeout: float = DEFAULT_QUERY_TIMEOUT) -> None:
        self.query_timeout = query_timeout

    @property
    @abstractmethod
    def name(self) -> str:
        """Short platform name (e.g. "linux")."""
        ...

    def total_memory_bytes(self) -> int:
        """
        Get total physical memory in bytes.

        Raises:
            HostQueryError: If the memory facility cannot be reached.
        """
        try:
            return psutil.virtual_memory().total
        except (psutil.Error, OSError, RuntimeError) as e:
            raise HostQueryError(f"Failed to query physical memory: {e}") from e

    @abstractmethod
    def processor_name(self) -> str | None:
        """
        Get the processor display name.

        Returns:
            The name as reported by the host, or None if the host has no
            processor descriptor.

        Raises:
            HostQueryError: On unrecoverable I/O errors or a timed out query.
        """
        ...

    @abstractmethod
    def primary_display(self) -> DisplayBounds:
        """
        Get the bounding rectangle of the primary display.

        Raises:
            HostQueryError: If no display is available.
        """
        ...

    def _run(self, args: list[str]) -> subprocess.CompletedProcess:
        """Run a host command with the query timeout applied."""
        try:
            return subprocess.run(
                args,
                capture_output=True,
                text=True,
                check=True,
                timeout=self.query_timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise HostQueryError(
                f"'{args[0]}' did not answer within {self.query_timeout}s"
            ) from e
        except FileNotFoundError as e:
            raise HostQueryError(f"'{args[0]}' is not available on this host") from e


def get_platform(
    name: str | None = None,
    query_timeout: float = DEFAULT_QUERY_TIMEOUT,
) -> HostPlatform:
    """Get the platform collaborator for a sys.platform value (default: current)."""
    from host_probe.platforms.darwin import DarwinPlatform
    from host_probe.platforms.linux import LinuxPlatform
    from host_probe.platforms.windows import WindowsPlatform

    platform_name = name or sys.platform

    platforms: dict[str, type[HostPlatform]] = {
        "win32": WindowsPlatform,
        "linux": LinuxPlatform,
        "darwin": DarwinPlatform,
    }

    platform_class = platforms.get(platform_name)
    if platform_class is None and platform_name.startswith("linux"):
        platform_class = LinuxPlatform
    if platform_class is None:
        raise HostQueryError(f"Unsupported platform: {platform_name}")

    logger.debug(f"Using {platform_class.__name__} for {platform_name}")
    return platform_class(query_timeout=query_timeout)
