"""HSLA pixel value type.

Hue is stored in degrees [0, 360); saturation, luminance and alpha are
floats in [0, 1]. An alpha of exactly zero means fully transparent.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class HSLAPixel:
    h: float = 0.0
    s: float = 0.0
    l: float = 1.0
    a: float = 1.0

    def copy(self) -> HSLAPixel:
        return HSLAPixel(self.h, self.s, self.l, self.a)

    @property
    def is_transparent(self) -> bool:
        return self.a == 0

    def to_tuple(self) -> tuple[float, float, float, float]:
        return (self.h, self.s, self.l, self.a)

    @classmethod
    def from_tuple(cls, t) -> HSLAPixel:
        """Build from a 3- or 4-sequence; alpha defaults to opaque."""
        if len(t) == 3:
            return cls(float(t[0]), float(t[1]), float(t[2]))
        return cls(float(t[0]), float(t[1]), float(t[2]), float(t[3]))
