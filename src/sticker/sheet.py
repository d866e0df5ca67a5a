"""Sticker sheet: a base picture with layered sticker images on top.

The sheet owns a deep copy of its base picture and a fixed number of
sticker slots. Each slot is either empty or holds an owned image plus the
(x, y) of its top-left corner on the sheet. Slot indices are stable: a
sticker keeps its index until it is removed or the sheet is shrunk below
it. Removing a sticker leaves a hole, it never shifts the others down.

Rendering order: the base picture, then stickers by increasing slot index,
so higher slots draw on top of lower ones.
"""

from __future__ import annotations

import logging
import operator
from dataclasses import dataclass

from src.image.png import PNG
from src.pixel.hsla import HSLAPixel

logger = logging.getLogger(__name__)

NO_SLOT = -1


def _check_coords(x: int, y: int) -> tuple[int, int]:
    x, y = operator.index(x), operator.index(y)
    if x < 0 or y < 0:
        raise ValueError(f"Sticker coordinates must be non-negative, got ({x}, {y})")
    return x, y


def _check_max(max_stickers: int) -> int:
    max_stickers = operator.index(max_stickers)
    if max_stickers < 0:
        raise ValueError(f"max_stickers must be non-negative, got {max_stickers}")
    return max_stickers


@dataclass
class _Slot:
    image: PNG
    x: int
    y: int

    def copy(self) -> _Slot:
        return _Slot(self.image.copy(), self.x, self.y)


class StickerSheet:
    def __init__(self, picture: PNG, max_stickers: int, background: HSLAPixel | None = None):
        """
        Args:
            picture: Base picture. A deep copy is stored.
            max_stickers: Number of sticker slots (indices 0 .. max - 1).
            background: Pixel used for canvas area outside the base picture
                when stickers grow the render. Defaults to HSLAPixel().
        """
        max_stickers = _check_max(max_stickers)
        self._base = picture.copy()
        self._slots: list[_Slot | None] = [None] * max_stickers
        self._background = background.copy() if background is not None else HSLAPixel()

    # ------------------------------------------------------------------
    # Copying
    # ------------------------------------------------------------------

    def _copy_from(self, other: StickerSheet) -> None:
        """Replace this sheet's state with an independent clone of other's.

        The clone is built before anything is replaced, so copying from
        self leaves the sheet intact.
        """
        base = other._base.copy()
        slots = [s.copy() if s is not None else None for s in other._slots]
        background = other._background.copy()
        self._base, self._slots, self._background = base, slots, background

    def copy(self) -> StickerSheet:
        clone = StickerSheet.__new__(StickerSheet)
        clone._copy_from(self)
        return clone

    def assign(self, other: StickerSheet) -> StickerSheet:
        """Make this sheet an independent copy of other. Returns self."""
        if other is not self:
            self._copy_from(other)
        return self

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def max_stickers(self) -> int:
        return len(self._slots)

    @property
    def sticker_count(self) -> int:
        return sum(1 for s in self._slots if s is not None)

    @property
    def background(self) -> HSLAPixel:
        return self._background.copy()

    @property
    def base_size(self) -> tuple[int, int]:
        """(width, height) of the base picture."""
        return (self._base.width, self._base.height)

    @property
    def base(self) -> PNG:
        """A copy of the base picture."""
        return self._base.copy()

    def _slot(self, index: int) -> _Slot | None:
        if 0 <= index < len(self._slots):
            return self._slots[index]
        return None

    def position(self, index: int) -> tuple[int, int] | None:
        slot = self._slot(index)
        if slot is None:
            return None
        return (slot.x, slot.y)

    def occupied(self) -> list[int]:
        """Indices of occupied slots, in draw order."""
        return [i for i, s in enumerate(self._slots) if s is not None]

    # ------------------------------------------------------------------
    # Slot management
    # ------------------------------------------------------------------

    def add_sticker(self, sticker: PNG, x: int, y: int) -> int:
        """Place a copy of sticker in the lowest empty slot.

        Returns:
            The zero-based slot index, or NO_SLOT (-1) when every slot is taken.
        """
        x, y = _check_coords(x, y)
        for index, slot in enumerate(self._slots):
            if slot is None:
                self._slots[index] = _Slot(sticker.copy(), x, y)
                logger.debug("Added %r to slot %d at (%d, %d)", sticker, index, x, y)
                return index
        logger.warning("No free slot for sticker (max_stickers=%d)", len(self._slots))
        return NO_SLOT

    def change_max_stickers(self, max_stickers: int) -> None:
        """Resize the slot list without moving any sticker.

        Growing adds empty slots. Shrinking drops every slot at index
        >= max_stickers, along with its sticker.
        """
        max_stickers = _check_max(max_stickers)
        current = len(self._slots)
        if max_stickers >= current:
            self._slots.extend([None] * (max_stickers - current))
        else:
            dropped = sum(1 for s in self._slots[max_stickers:] if s is not None)
            del self._slots[max_stickers:]
            if dropped:
                logger.debug("Shrinking to %d slots discarded %d stickers", max_stickers, dropped)

    def get_sticker(self, index: int) -> PNG | None:
        """Return the sticker image stored in a slot, not a copy.

        Edits made through the returned image show up in later renders. The
        image is detached from the sheet once its slot is removed or
        truncated by change_max_stickers. Returns None for an invalid or
        empty slot.
        """
        slot = self._slot(index)
        return slot.image if slot is not None else None

    def remove_sticker(self, index: int) -> None:
        """Empty a slot. Invalid or already-empty slots are ignored."""
        if self._slot(index) is not None:
            self._slots[index] = None
            logger.debug("Removed sticker from slot %d", index)

    def translate(self, index: int, x: int, y: int) -> bool:
        """Move a sticker's top-left corner to (x, y).

        Returns False, changing nothing, if the slot is invalid or empty.
        """
        slot = self._slot(index)
        if slot is None:
            return False
        x, y = _check_coords(x, y)
        slot.x, slot.y = x, y
        return True

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> PNG:
        """Flatten the base picture and all stickers into a new image.

        The output grows past the base picture when stickers extend beyond
        it; area not covered by the base starts as the background pixel.
        Sticker pixels with zero alpha are skipped, all others overwrite.
        """
        slots = [s for s in self._slots if s is not None]

        width = max([self._base.width] + [s.x + s.image.width for s in slots])
        height = max([self._base.height] + [s.y + s.image.height for s in slots])

        out = PNG(width, height, fill=self._background)
        canvas = out.pixels
        canvas[: self._base.height, : self._base.width] = self._base.pixels

        for slot in slots:
            src = slot.image.pixels
            h, w = src.shape[:2]
            region = canvas[slot.y : slot.y + h, slot.x : slot.x + w]
            mask = src[:, :, 3] != 0
            region[mask] = src[mask]

        return out

    def __repr__(self) -> str:
        return (
            f"StickerSheet(base={self._base!r}, "
            f"stickers={self.sticker_count}/{self.max_stickers})"
        )
