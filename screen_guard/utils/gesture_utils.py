"""
Shared geometry types for the screen guard.

Surfaces and fractional regions are kept here so that the
classifier, the router and the presentation collaborators agree on one
representation.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Surface:
    """Size of the locked surface, captured at pointer-down."""
    width: float
    height: float


@dataclass(frozen=True)
class Region:
    """Rectangle expressed as fractions of a surface's width and height."""
    left: float
    top: float
    right: float
    bottom: float

    def to_pixels(self, surface: Surface) -> Tuple[float, float, float, float]:
        """Return (left, top, right, bottom) in surface coordinates."""
        return (
            surface.width * self.left,
            surface.height * self.top,
            surface.width * self.right,
            surface.height * self.bottom,
        )

    def contains(self, x: float, y: float, surface: Surface) -> bool:
        """Half-open containment test; NaN coordinates are never inside."""
        left, top, right, bottom = self.to_pixels(surface)
        return left <= x < right and top <= y < bottom
