"""
Bitmap Fonts
============

Glyph rendering for OLEDDisplay text drawing.

A Font draws one character by issuing set_pixel calls on a display; the
display takes care of clipping and locking. Text layout (line breaks,
centering, skipping glyphs that would not fit) lives in OLEDDisplay.

Built-in Face
-------------
DEFAULT_FONT is a 5×8 face covering printable ASCII (codes 32-127):
- 8 bytes per character, one byte per pixel row, top row first
- 5 bits per row, LSB = rightmost pixel
- Characters outside the table are drawn blank

Copyright (c) 2026 oled-display Contributors
"""

from abc import ABC, abstractmethod
from typing import Protocol


class PixelTarget(Protocol):
    """Anything glyphs can be drawn on (OLEDDisplay, Framebuffer)."""

    def set_pixel(self, x: int, y: int, on: bool) -> None: ...


# =============================================================================
# CHARACTER BITMAP DATA
# =============================================================================
# 5x8 glyphs for codes 32 (space) through 127.

ASCII_5X8_BITMAP = bytes([
    0,0,0,0,0,0,0,0,4,4,4,4,0,0,4,0,10,10,10,0,0,0,0,0,10,10,31,10,31,10,10,0,4,15,20,14,5,30,4,0,24,25,2,4,8,19,3,0,12,18,20,8,21,18,13,0,12,4,8,0,0,0,0,0,
    2,4,8,8,8,4,2,0,8,4,2,2,2,4,8,0,0,4,21,14,21,4,0,0,0,4,4,31,4,4,0,0,0,0,0,0,12,4,8,0,0,0,0,31,0,0,0,0,0,0,0,0,0,12,12,0,0,1,2,4,8,16,0,0,
    14,17,19,21,25,17,14,0,4,12,4,4,4,4,14,0,14,17,1,2,4,8,31,0,31,2,4,2,1,17,14,0,2,6,10,18,31,2,2,0,31,16,30,1,1,17,14,0,6,8,16,30,17,17,14,0,31,1,2,4,8,8,8,0,
    14,17,17,14,17,17,14,0,14,17,17,15,1,2,12,0,0,12,12,0,12,12,0,0,0,12,12,0,12,4,8,0,2,4,8,16,8,4,2,0,0,0,31,0,31,0,0,0,8,4,2,1,2,4,8,0,14,17,1,2,4,0,4,0,
    14,17,1,13,21,21,14,0,14,17,17,17,31,17,17,0,30,17,17,30,17,17,30,0,14,17,16,16,16,17,14,0,28,18,17,17,17,18,28,0,31,16,16,30,16,16,31,0,31,16,16,30,16,16,16,0,14,17,16,23,17,17,15,0,
    17,17,17,31,17,17,17,0,14,4,4,4,4,4,14,0,7,2,2,2,2,18,12,0,17,18,20,24,20,18,17,0,16,16,16,16,16,16,31,0,17,27,21,21,17,17,17,0,17,17,25,21,19,17,17,0,14,17,17,17,17,17,14,0,
    30,17,17,30,16,16,16,0,14,17,17,17,21,18,13,0,30,17,17,30,20,18,17,0,15,16,16,14,1,1,30,0,31,4,4,4,4,4,4,0,17,17,17,17,17,17,14,0,17,17,17,17,17,10,4,0,17,17,17,21,21,21,10,0,
    17,17,10,4,10,17,17,0,17,17,17,10,4,4,4,0,31,1,2,4,8,16,31,0,14,8,8,8,8,8,14,0,17,10,31,4,31,4,4,0,14,2,2,2,2,2,14,0,4,10,17,0,0,0,0,0,0,0,0,0,0,0,31,0,
    8,4,2,0,0,0,0,0,0,0,14,1,15,17,15,0,16,16,22,25,17,17,30,0,0,0,14,16,16,17,14,0,1,1,13,19,17,17,15,0,0,0,14,17,31,16,14,0,6,9,8,28,8,8,8,0,0,15,17,17,15,1,14,0,
    16,16,22,25,17,17,17,0,4,0,12,4,4,4,14,0,2,0,6,2,2,18,12,0,16,16,18,20,24,20,18,0,12,4,4,4,4,4,14,0,0,0,26,21,21,17,17,0,0,0,22,25,17,17,17,0,0,0,14,17,17,17,14,0,
    0,0,30,17,30,16,16,0,0,0,13,19,15,1,1,0,0,0,22,25,16,16,16,0,0,0,14,16,14,1,30,0,8,8,28,8,8,9,6,0,0,0,17,17,17,19,13,0,0,0,17,17,17,10,4,0,0,0,17,17,21,21,10,0,
    0,0,17,10,4,10,17,0,0,0,17,17,15,1,14,0,0,0,31,2,4,8,31,0,2,4,4,8,4,4,2,0,4,4,4,4,4,4,4,0,8,4,4,2,4,4,8,0,0,4,2,31,2,4,0,0,0,4,8,31,8,4,0,0,
])


class Font(ABC):
    """
    A typeface that can render single characters.

    Metrics:
        width, height: Size of the glyph cell in pixels
        outer_width, outer_height: Pen advance, including spacing
    """

    @property
    @abstractmethod
    def width(self) -> int: ...

    @property
    @abstractmethod
    def height(self) -> int: ...

    @property
    def outer_width(self) -> int:
        return self.width + 1

    @property
    def outer_height(self) -> int:
        return self.height + 1

    @abstractmethod
    def draw_char(self, target: PixelTarget, c: str, x: int, y: int, on: bool) -> None:
        """Draw character `c` with its top-left corner at (x, y)."""


class BitmapFont(Font):
    """
    Fixed-width font backed by a packed row bitmap.

    Example:
        >>> fb = Framebuffer(128, 64)
        >>> DEFAULT_FONT.draw_char(fb, "A", 0, 0, True)
    """

    def __init__(
        self,
        bitmap: bytes,
        width: int = 5,
        height: int = 8,
        first_char: int = 32,
        h_spacing: int = 1,
        v_spacing: int = 0,
    ):
        """
        Args:
            bitmap: Glyph rows, `height` bytes per character
            width: Glyph width in pixels (at most 8)
            height: Glyph height in pixels
            first_char: Character code of the first glyph in the table
            h_spacing: Blank columns between characters
            v_spacing: Blank rows between lines
        """
        if not 0 < width <= 8:
            raise ValueError(f"width must be 1-8, got {width}")
        if len(bitmap) % height:
            raise ValueError(
                f"bitmap length {len(bitmap)} is not a multiple of height {height}"
            )

        self._bitmap = bitmap
        self._width = width
        self._height = height
        self._first_char = first_char
        self._char_count = len(bitmap) // height
        self._h_spacing = h_spacing
        self._v_spacing = v_spacing

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def outer_width(self) -> int:
        return self._width + self._h_spacing

    @property
    def outer_height(self) -> int:
        return self._height + self._v_spacing

    def has_glyph(self, c: str) -> bool:
        return 0 <= ord(c) - self._first_char < self._char_count

    def glyph(self, c: str) -> bytes:
        """Row bytes for `c`, or an empty glyph if it is not in the table."""
        if not self.has_glyph(c):
            return bytes(self._height)
        offset = (ord(c) - self._first_char) * self._height
        return self._bitmap[offset:offset + self._height]

    def draw_char(self, target: PixelTarget, c: str, x: int, y: int, on: bool) -> None:
        for row, row_data in enumerate(self.glyph(c)):
            for bit in range(self._width):
                if (row_data >> bit) & 1:
                    target.set_pixel(x + self._width - 1 - bit, y + row, on)


DEFAULT_FONT = BitmapFont(ASCII_5X8_BITMAP)
