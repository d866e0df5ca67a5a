"""
Shared fixtures for sticker sheet tests.

Provides solid-colour images and a small helper for building stickers.
"""
import pytest

from src.image.png import PNG
from src.pixel.hsla import HSLAPixel

WHITE = HSLAPixel(0.0, 0.0, 1.0)
BLACK = HSLAPixel(0.0, 0.0, 0.0)
RED = HSLAPixel(0.0, 1.0, 0.5)
CLEAR = HSLAPixel(120.0, 1.0, 0.5, 0.0)


def solid(width, height, pixel):
    return PNG(width, height, fill=pixel)


@pytest.fixture
def white_4x4():
    return solid(4, 4, WHITE)


@pytest.fixture
def black_2x2():
    return solid(2, 2, BLACK)


@pytest.fixture
def red_1x1():
    return solid(1, 1, RED)
