"""
Monochrome Framebuffer
======================

In-memory mirror of the SSD1306 graphic display RAM.

Memory layout (page-major, the controller's native format):
- The surface is split into height / 8 horizontal pages of 8 rows each
- Each byte holds one vertical 8-pixel slice of a page
- Bit 0 is the top row of the page, bit 7 the bottom row

For pixel (x, y):
    byte index = x + (y // 8) * width
    bit        = y & 7

So a 128x64 panel uses 8 pages × 128 columns = 1024 bytes, and the bytes
can be streamed to the controller unchanged.

Copyright (c) 2026 oled-display Contributors
"""

from PIL import Image

from oled_display.commands import PAGE_HEIGHT


class Framebuffer:
    """
    Packed 1-bit-per-pixel drawing surface.

    The buffer is allocated once, zero-filled, and mutated in place.
    Pixel writes outside the surface are silently ignored, so simple
    callers can draw shapes that hang off the edge without clipping
    them first.

    Example:
        >>> fb = Framebuffer(128, 64)
        >>> fb.set_pixel(10, 3, True)
        >>> fb.byte_at(0, 10)
        8
    """

    def __init__(self, width: int, height: int):
        """
        Allocate a blank framebuffer.

        Args:
            width: Surface width in pixels
            height: Surface height in pixels (multiple of 8)
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid framebuffer size {width}x{height}")
        if height % PAGE_HEIGHT:
            raise ValueError(
                f"height must be a multiple of {PAGE_HEIGHT}, got {height}"
            )

        self._width = width
        self._height = height
        self._pages = height // PAGE_HEIGHT
        self._data = bytearray(width * self._pages)

    @property
    def width(self) -> int:
        """Surface width in pixels."""
        return self._width

    @property
    def height(self) -> int:
        """Surface height in pixels."""
        return self._height

    @property
    def pages(self) -> int:
        """Number of 8-row pages."""
        return self._pages

    @property
    def buffer(self) -> bytes:
        """Snapshot of the packed buffer contents."""
        return bytes(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def clear(self) -> None:
        """Turn every pixel off."""
        self._data[:] = bytes(len(self._data))

    def set_pixel(self, x: int, y: int, on: bool) -> None:
        """
        Set or clear a single pixel.

        Both coordinates are checked on their own, so y >= height never
        wraps around into a lower page and a negative x never spills into
        the previous page.
        """
        if not (0 <= x < self._width and 0 <= y < self._height):
            return

        pos = x + (y // PAGE_HEIGHT) * self._width
        if on:
            self._data[pos] |= 1 << (y & 0x07)
        else:
            self._data[pos] &= ~(1 << (y & 0x07)) & 0xFF

    def get_pixel(self, x: int, y: int) -> bool:
        """Return True if the pixel is on. Out-of-range pixels read as off."""
        if not (0 <= x < self._width and 0 <= y < self._height):
            return False
        pos = x + (y // PAGE_HEIGHT) * self._width
        return bool(self._data[pos] & (1 << (y & 0x07)))

    def clear_rect(self, x: int, y: int, width: int, height: int, on: bool) -> None:
        """
        Fill the rectangle [x, x+width) × [y, y+height) with one value.

        No clipping is done up front; set_pixel drops whatever falls
        outside the surface.
        """
        for pos_x in range(x, x + width):
            for pos_y in range(y, y + height):
                self.set_pixel(pos_x, pos_y, on)

    def byte_at(self, page: int, column: int) -> int:
        """Raw buffer byte holding rows page*8 .. page*8+7 of a column."""
        return self._data[page * self._width + column]

    # =========================================================================
    # Image Conversion (Pillow)
    # =========================================================================

    def draw_image(self, image: Image.Image, x: int = 0, y: int = 0) -> None:
        """
        Draw an image over the current contents.

        The image is converted to 8-bit grayscale; a pixel is switched on
        when its luminance has the high bit set (>= 0x80) and off
        otherwise. The buffer is not cleared first, so call clear() if the
        image should replace everything.

        Args:
            image: Any Pillow image
            x: Left edge on the surface
            y: Top edge on the surface
        """
        gray = image.convert("L")
        pixels = gray.load()

        for pos_y in range(gray.height):
            for pos_x in range(gray.width):
                self.set_pixel(x + pos_x, y + pos_y, (pixels[pos_x, pos_y] & 0x80) > 0)

    def to_image(self) -> Image.Image:
        """Return the surface as a 1-bit Pillow image (on = white)."""
        img = Image.new("1", (self._width, self._height), color=0)
        pixels = img.load()
        for pos_y in range(self._height):
            for pos_x in range(self._width):
                if self.get_pixel(pos_x, pos_y):
                    pixels[pos_x, pos_y] = 255
        return img
