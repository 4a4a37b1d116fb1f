"""Display geometry types shared by the platform collaborators and the probe."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DisplayBounds:
    """Bounding rectangle of a display, in host pixels."""

    x: int
    y: int
    width: int
    height: int

    @property
    def resolution(self) -> str:
        return f"{self.width}x{self.height}"

    def __str__(self) -> str:
        return f"{self.resolution} at ({self.x}, {self.y})"
