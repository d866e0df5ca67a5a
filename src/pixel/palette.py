"""Named HSLA colours.

Stored as HSLAPixel values; look them up by name with `get_color`.
"""

import numpy as np

from src.pixel.convert import rgb_to_hsl
from src.pixel.hsla import HSLAPixel


def hex_to_hsla(h: str, alpha: float = 1.0) -> HSLAPixel:
    """Convert '#RRGGBB' to an HSLAPixel with the given alpha."""
    h = h.lstrip("#")
    r, g, b = (int(h[i : i + 2], 16) / 255.0 for i in (0, 2, 4))
    hue, sat, lum = rgb_to_hsl(np.array(r), np.array(g), np.array(b))
    return HSLAPixel(float(hue), float(sat), float(lum), alpha)


COLORS = {
    "white": HSLAPixel(0.0, 0.0, 1.0),
    "black": HSLAPixel(0.0, 0.0, 0.0),
    "transparent": HSLAPixel(0.0, 0.0, 1.0, 0.0),
    # Illinois brand colours
    "illini_orange": HSLAPixel(11.0, 1.0, 0.61),
    "illini_blue": HSLAPixel(216.0, 0.55, 0.25),
    "red": hex_to_hsla("#CC0000"),
    "yellow": hex_to_hsla("#E8C800"),
    "blue": hex_to_hsla("#0044AA"),
    "green": hex_to_hsla("#228B22"),
}


def get_color(name: str) -> HSLAPixel:
    """Look up a named colour; returns a fresh copy."""
    if name not in COLORS:
        raise ValueError(f"Unknown color: {name!r}. Available: {list(COLORS.keys())}")
    return COLORS[name].copy()
