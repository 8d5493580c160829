"""
SSD1306 Display Controller
==========================

Driver for 128x64 monochrome OLED panels built on the SSD1306 controller
and attached over I2C.

The driver keeps the whole picture in a local Framebuffer. Drawing calls
only touch that buffer; nothing reaches the panel until update() is
called, which copies a rectangular region (or the whole surface) to the
controller's display RAM.

Update Protocol
---------------
1. Validate the rectangle (no bus traffic on failure)
2. COLUMN_ADDR start/end, PAGE_ADDR start/end: this sets the controller's
   auto-incrementing write window
3. Stream the framebuffer bytes of that window, page by page and column by
   column inside each page, matching the controller's horizontal
   addressing order
4. Bytes are sent in chunks of at most max_transfer_size, because a single
   bus transaction has a hard payload ceiling

Concurrency
-----------
Each OLEDDisplay owns one reentrant lock guarding its framebuffer, scratch
buffer and device handle. Every public drawing or I/O operation holds the
lock for its whole duration, so an update never streams a half-drawn
frame and concurrent updates are serialized. The lock is reentrant
because text drawing calls back into set_pixel.

Example:
    >>> from oled_display import OLEDDisplay, DEFAULT_FONT
    >>> from oled_display.bus import SMBusAdapter
    >>> with SMBusAdapter(1) as adapter:
    ...     display = OLEDDisplay(adapter)
    ...     display.draw_string_centered("Hello World!", DEFAULT_FONT, 25, True)
    ...     display.update()

Copyright (c) 2026 oled-display Contributors
"""

import logging
import threading
from dataclasses import replace
from enum import Enum
from typing import Optional

from PIL import Image

from oled_display.bus.base import I2CAdapter, I2CDevice
from oled_display.commands import (
    COLUMN_ADDR,
    CONTROL_COMMAND,
    CONTROL_DATA,
    INVERT_DISPLAY,
    NORMAL_DISPLAY,
    PAGE_ADDR,
    PAGE_HEIGHT,
    SET_CONTRAST,
    init_sequence,
)
from oled_display.config import DisplayConfig
from oled_display.errors import InvalidUpdateAreaError, OLEDError
from oled_display.font import Font
from oled_display.framebuffer import Framebuffer

logger = logging.getLogger(__name__)


class DisplayState(Enum):
    """Lifecycle of an OLEDDisplay."""
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


class OLEDDisplay:
    """
    SSD1306 panel driver with a local framebuffer.

    Construction clears the framebuffer and sends the power-up sequence.
    If any command write fails the exception propagates out of the
    constructor; there is no partially initialized display object.
    """

    def __init__(
        self,
        adapter: I2CAdapter,
        address: Optional[int] = None,
        config: Optional[DisplayConfig] = None,
    ):
        """
        Args:
            adapter: Opened I2C bus
            address: Panel address; overrides config.address (default 0x3C)
            config: Panel geometry and bus settings (default: 128x64)

        Raises:
            ValueError: If the configuration cannot be driven by an SSD1306
                or asks for transfers larger than the adapter allows
            TransportError: If an initialization command fails
        """
        config = config or DisplayConfig()
        if address is not None:
            config = replace(config, address=address)
        config.validate()

        bus_limit = adapter.max_transfer_size
        if bus_limit is not None and config.max_transfer_size > bus_limit:
            raise ValueError(
                f"max_transfer_size {config.max_transfer_size} exceeds the "
                f"bus limit of {bus_limit} bytes"
            )

        self._state = DisplayState.UNINITIALIZED
        self._config = config
        self._lock = threading.RLock()
        self._device = adapter.get_device(config.address)
        self._framebuffer = Framebuffer(config.width, config.height)
        self._write_buffer = bytearray(config.max_transfer_size)
        self._contrast = config.contrast
        self._inverted = False

        self.clear()
        self._init()

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def width(self) -> int:
        return self._framebuffer.width

    @property
    def height(self) -> int:
        return self._framebuffer.height

    @property
    def state(self) -> DisplayState:
        return self._state

    @property
    def address(self) -> int:
        return self._config.address

    @property
    def device(self) -> I2CDevice:
        return self._device

    @property
    def framebuffer(self) -> Framebuffer:
        """The backing framebuffer. Mutate it only through the display."""
        return self._framebuffer

    @property
    def max_transfer_size(self) -> int:
        return len(self._write_buffer)

    @property
    def contrast(self) -> int:
        """Last contrast level sent to the panel."""
        return self._contrast

    @property
    def inverted(self) -> bool:
        """True if the panel was last told to invert its output."""
        return self._inverted

    # =========================================================================
    # Initialization
    # =========================================================================

    def _write_command(self, command: int) -> None:
        self._device.write_register_byte(CONTROL_COMMAND, command)

    def _init(self) -> None:
        with self._lock:
            self._state = DisplayState.INITIALIZING
            sequence = init_sequence(self.height, self._contrast)
            logger.debug(
                "Initializing %dx%d panel at 0x%02X (%d command bytes)",
                self.width, self.height, self.address, len(sequence),
            )
            for command in sequence:
                self._write_command(command)
            self._state = DisplayState.READY

    # =========================================================================
    # Drawing (framebuffer only, no bus I/O)
    # =========================================================================

    def clear(self) -> None:
        """Turn every framebuffer pixel off."""
        with self._lock:
            self._framebuffer.clear()

    def set_pixel(self, x: int, y: int, on: bool) -> None:
        """Set or clear one pixel. Coordinates off the panel are ignored."""
        with self._lock:
            self._framebuffer.set_pixel(x, y, on)

    def get_pixel(self, x: int, y: int) -> bool:
        with self._lock:
            return self._framebuffer.get_pixel(x, y)

    def clear_rect(self, x: int, y: int, width: int, height: int, on: bool) -> None:
        """Fill [x, x+width) × [y, y+height) with `on`, clipped to the panel."""
        with self._lock:
            self._framebuffer.clear_rect(x, y, width, height, on)

    def draw_char(self, c: str, font: Font, x: int, y: int, on: bool) -> None:
        with self._lock:
            font.draw_char(self, c, x, y, on)

    def draw_string(self, text: str, font: Font, x: int, y: int, on: bool) -> None:
        """
        Draw text starting at (x, y).

        '\\n' starts a new line at the original x. A character is drawn only
        if its whole glyph cell fits on the panel; the pen advances either
        way, so clipped characters still take up their space.
        """
        with self._lock:
            pos_x = x
            pos_y = y
            for c in text:
                if c == "\n":
                    pos_y += font.outer_height
                    pos_x = x
                else:
                    if (pos_x >= 0 and pos_x + font.width < self.width
                            and pos_y >= 0 and pos_y + font.height < self.height):
                        self.draw_char(c, font, pos_x, pos_y, on)
                    pos_x += font.outer_width

    def draw_string_centered(self, text: str, font: Font, y: int, on: bool) -> None:
        """Draw a single line of text centered horizontally."""
        with self._lock:
            str_size_x = len(text) * font.outer_width
            x = (self.width - str_size_x) // 2
            self.draw_string(text, font, x, y, on)

    def draw_image(self, image: Image.Image, x: int = 0, y: int = 0) -> None:
        """
        Draw a Pillow image over the current framebuffer contents.

        The image is converted to grayscale and thresholded at 50%.
        The framebuffer is not cleared first.
        """
        with self._lock:
            self._framebuffer.draw_image(image, x, y)

    # =========================================================================
    # Panel Commands (immediate bus I/O)
    # =========================================================================

    def set_contrast(self, level: int) -> None:
        """Set panel contrast (0-255)."""
        if not 0 <= level <= 0xFF:
            raise ValueError(f"contrast must be 0-255, got {level}")
        with self._lock:
            self._write_command(SET_CONTRAST)
            self._write_command(level)
            self._contrast = level

    def invert(self, enabled: bool) -> None:
        """Invert (or restore) the panel output without touching RAM."""
        with self._lock:
            self._write_command(INVERT_DISPLAY if enabled else NORMAL_DISPLAY)
            self._inverted = enabled

    # =========================================================================
    # Synchronization
    # =========================================================================

    def update(
        self,
        x: int = 0,
        y: int = 0,
        w: Optional[int] = None,
        h: Optional[int] = None,
    ) -> None:
        """
        Copy a region of the framebuffer to the panel.

        With no arguments the whole surface is sent. The region is widened
        to whole pages vertically, since the controller stores 8 rows per
        byte.

        Args:
            x: Left edge of the update area
            y: Top edge of the update area
            w: Width of the update area (default: full width)
            h: Height of the update area (default: full height)

        Raises:
            InvalidUpdateAreaError: If the area is empty or off the panel.
                Nothing is sent in that case.
            TransportError: If a bus write fails. The update stops there;
                the panel may show a partially updated region.
        """
        if w is None:
            w = self.width
        if h is None:
            h = self.height

        with self._lock:
            if self._state is not DisplayState.READY:
                raise OLEDError(f"Display is {self._state.value}, cannot update")

            if (x < 0 or x > self.width or y < 0 or y > self.height or w <= 0 or h <= 0
                    or (x + w) > self.width or (y + h) > self.height):
                raise InvalidUpdateAreaError(x, y, w, h)

            start_column = x
            end_column = x + w - 1
            start_page = y // PAGE_HEIGHT
            end_page = (y + h - 1) // PAGE_HEIGHT

            self._write_command(COLUMN_ADDR)
            self._write_command(start_column)
            self._write_command(end_column)

            self._write_command(PAGE_ADDR)
            self._write_command(start_page)
            self._write_command(end_page)

            transfers = self._stream_window(start_column, end_column, start_page, end_page)

            logger.debug(
                "Updated columns %d-%d, pages %d-%d in %d transfers",
                start_column, end_column, start_page, end_page, transfers,
            )

    def _stream_window(
        self, start_column: int, end_column: int, start_page: int, end_page: int
    ) -> int:
        """
        Send the window's bytes in controller order, chunked.

        Returns:
            Number of data transfers issued
        """
        write_buffer = self._write_buffer
        max_size = len(write_buffer)
        buffer_index = 0
        transfers = 0

        for page in range(start_page, end_page + 1):
            for column in range(start_column, end_column + 1):
                write_buffer[buffer_index] = self._framebuffer.byte_at(page, column)
                buffer_index += 1
                if buffer_index >= max_size:
                    self._device.write_register_buffer(CONTROL_DATA, write_buffer, buffer_index)
                    transfers += 1
                    buffer_index = 0

        if buffer_index > 0:
            self._device.write_register_buffer(CONTROL_DATA, write_buffer, buffer_index)
            transfers += 1

        return transfers
