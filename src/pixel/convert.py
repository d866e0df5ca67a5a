"""Vectorized RGB <-> HSL conversion.

All channels are float arrays in [0, 1], except hue which is in degrees.
"""

from __future__ import annotations

import numpy as np


def rgb_to_hsl(r: np.ndarray, g: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Convert RGB arrays to a stacked (..., 3) HSL array."""
    r = np.asarray(r, dtype=np.float64)
    g = np.asarray(g, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)

    maxc = np.maximum(np.maximum(r, g), b)
    minc = np.minimum(np.minimum(r, g), b)
    delta = maxc - minc
    l = (maxc + minc) / 2.0

    # Greys have delta == 0; divide by 1 there and zero the result after.
    safe_delta = np.where(delta == 0, 1.0, delta)
    denom = 1.0 - np.abs(2.0 * l - 1.0)
    safe_denom = np.where(denom == 0, 1.0, denom)
    s = np.where(delta == 0, 0.0, delta / safe_denom)

    h = np.where(
        maxc == r,
        ((g - b) / safe_delta) % 6.0,
        np.where(maxc == g, (b - r) / safe_delta + 2.0, (r - g) / safe_delta + 4.0),
    )
    h = np.where(delta == 0, 0.0, h * 60.0) % 360.0

    return np.stack([h, np.clip(s, 0.0, 1.0), l], axis=-1)


def hsl_to_rgb(h: np.ndarray, s: np.ndarray, l: np.ndarray) -> np.ndarray:
    """Convert HSL arrays to a stacked (..., 3) RGB array in [0, 1]."""
    h = np.asarray(h, dtype=np.float64) % 360.0
    s = np.asarray(s, dtype=np.float64)
    l = np.asarray(l, dtype=np.float64)

    c = (1.0 - np.abs(2.0 * l - 1.0)) * s
    hp = h / 60.0
    x = c * (1.0 - np.abs(hp % 2.0 - 1.0))
    m = l - c / 2.0
    i = np.floor(hp).astype(int) % 6
    z = np.zeros_like(c)

    r = np.where(i == 0, c, np.where(i == 1, x, np.where(i == 2, z, np.where(i == 3, z, np.where(i == 4, x, c)))))
    g = np.where(i == 0, x, np.where(i == 1, c, np.where(i == 2, c, np.where(i == 3, x, np.where(i == 4, z, z)))))
    b = np.where(i == 0, z, np.where(i == 1, z, np.where(i == 2, x, np.where(i == 3, c, np.where(i == 4, c, x)))))

    return np.clip(np.stack([r + m, g + m, b + m], axis=-1), 0.0, 1.0)
