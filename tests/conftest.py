"""Shared fixtures for host-probe tests."""

import pytest

from host_probe.geometry import DisplayBounds
from host_probe.platforms.base import HostPlatform, HostQueryError

GIB = 1024**3


class FakePlatform(HostPlatform):
    """In-memory platform collaborator.

    Any fact set to an exception instance is raised when queried.
    """

    def __init__(
        self,
        memory_bytes: int | Exception = 8 * GIB,
        processor: str | None | Exception = "Intel(R) Core(TM) i7-4790K CPU @ 4.00GHz",
        display: DisplayBounds | Exception = DisplayBounds(0, 0, 1920, 1080),
    ) -> None:
        super().__init__()
        self.memory_bytes = memory_bytes
        self.processor = processor
        self.display = display
        self.calls = 0

    @property
    def name(self) -> str:
        return "fake"

    def total_memory_bytes(self) -> int:
        return self._answer(self.memory_bytes)

    def processor_name(self) -> str | None:
        return self._answer(self.processor)

    def primary_display(self) -> DisplayBounds:
        return self._answer(self.display)

    def _answer(self, value):
        self.calls += 1
        if isinstance(value, Exception):
            raise value
        return value


@pytest.fixture
def fake_platform() -> FakePlatform:
    return FakePlatform()


@pytest.fixture
def headless_platform() -> FakePlatform:
    return FakePlatform(display=HostQueryError("No display available (headless host)"))


@pytest.fixture
def make_platform():
    """Factory for fake platforms with custom host facts."""
    return FakePlatform
