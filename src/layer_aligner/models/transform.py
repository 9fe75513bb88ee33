"""Geometry data structures for coordinate and state representation."""
from dataclasses import dataclass


@dataclass
class Vec2:
    """2D vector for coordinate pairs.

    Used for any x/y coordinate pair across different spaces:
    - Canvas pixels (top-left origin)
    - Normalized image coordinates (0-1)
    """
    x: float
    y: float

    def __iter__(self):
        """Allow tuple unpacking: x, y = vec2"""
        return iter((self.x, self.y))


@dataclass(frozen=True)
class Geometry:
    """Axis-aligned layer box in canvas pixels (top-left origin)."""
    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> Vec2:
        return Vec2(self.x + self.width / 2, self.y + self.height / 2)

    def contains(self, px: float, py: float) -> bool:
        return self.x <= px <= self.x + self.width and self.y <= py <= self.y + self.height

    def replace(self, **changes) -> 'Geometry':
        """Copy with some of x/y/width/height replaced."""
        values = {'x': self.x, 'y': self.y, 'width': self.width, 'height': self.height}
        values.update(changes)
        return Geometry(**values)


@dataclass(frozen=True)
class CanvasBounds:
    """Size of the rendering surface in pixels."""
    width: float
    height: float

    def normalize(self, px: float, py: float) -> Vec2:
        """Pixel position -> 0-1 canvas position (unclamped)."""
        return Vec2(px / self.width, py / self.height)
