"""
Emulated SSD1306 Controller
===========================

An in-process stand-in for an SSD1306 panel on an I2C bus. It accepts
the same register writes as the real chip, interprets the command stream
and stores data bytes into its own graphic display RAM (GDDRAM), so the
result of an update can be inspected pixel by pixel or rendered to PNG.

Useful for previews without hardware (oledctl --preview) and for
checking that the driver's address windows put bytes where they belong.

Controller model (SSD1306 datasheet, section 10):
- GDDRAM is 128 columns × 8 pages, one byte per column per page
- Control byte 0x00 starts a command stream, 0x40 a data stream
- Multi-byte commands consume their argument bytes from the command stream
- In horizontal addressing mode the write cursor walks columns inside the
  column window, then moves to the next page, wrapping within the page
  window
- In page addressing mode the cursor stays on its page and wraps to the
  start column

Example:
    >>> adapter = EmulatedAdapter()
    >>> display = OLEDDisplay(adapter)
    >>> display.set_pixel(10, 3, True)
    >>> display.update()
    >>> adapter.device.get_pixel(10, 3)
    True

Copyright (c) 2026 oled-display Contributors
"""

import io
import logging
from dataclasses import dataclass, field
from typing import Optional

from PIL import Image

from oled_display.bus.base import BufferLike, I2CAdapter, I2CDevice
from oled_display.commands import (
    CHARGE_PUMP,
    COLUMN_ADDR,
    COM_SCAN_DEC,
    COM_SCAN_INC,
    COMMAND_ARGUMENTS,
    CONTROL_COMMAND,
    CONTROL_DATA,
    DEFAULT_DISPLAY_ADDRESS,
    DISPLAY_ALL_ON,
    DISPLAY_ALL_ON_RESUME,
    DISPLAY_HEIGHT,
    DISPLAY_OFF,
    DISPLAY_ON,
    DISPLAY_WIDTH,
    INVERT_DISPLAY,
    MEMORY_MODE,
    MEMORY_MODE_HORIZONTAL,
    MEMORY_MODE_PAGE,
    MEMORY_MODE_VERTICAL,
    NORMAL_DISPLAY,
    PAGE_ADDR,
    PAGE_HEIGHT,
    SEG_REMAP,
    SET_CONTRAST,
    SET_HIGH_COLUMN,
    SET_LOW_COLUMN,
    SET_MULTIPLEX,
    SET_PAGE_START,
    SET_START_LINE,
)
from oled_display.errors import TransportError

logger = logging.getLogger(__name__)

GDDRAM_COLUMNS = 128
GDDRAM_PAGES = 8


@dataclass
class ControllerState:
    """
    Register state of the emulated controller.

    Values after power-on reset follow the datasheet defaults.
    """
    is_on: bool = False
    contrast: int = 0x7F
    inverted: bool = False
    all_on: bool = False
    charge_pump: bool = False
    memory_mode: int = MEMORY_MODE_PAGE
    multiplex: int = 63
    start_line: int = 0
    seg_remap: bool = False
    com_scan_dec: bool = False

    # Address windows and write cursor
    column_start: int = 0
    column_end: int = GDDRAM_COLUMNS - 1
    page_start: int = 0
    page_end: int = GDDRAM_PAGES - 1
    column: int = 0
    page: int = 0

    # Multi-byte command being collected
    pending_command: Optional[int] = None
    pending_args: list[int] = field(default_factory=list)


class EmulatedSSD1306(I2CDevice):
    """SSD1306 controller emulation behind the I2CDevice interface."""

    def __init__(
        self,
        address: int = DEFAULT_DISPLAY_ADDRESS,
        width: int = DISPLAY_WIDTH,
        height: int = DISPLAY_HEIGHT,
    ):
        """
        Args:
            address: Bus address the device answers to
            width: Visible panel width in pixels
            height: Visible panel height in pixels
        """
        self._address = address
        self._width = width
        self._height = height
        self._state = ControllerState()
        self._gddram = bytearray(GDDRAM_COLUMNS * GDDRAM_PAGES)

        # Every register write, in order: (register, payload)
        self.transactions: list[tuple[int, bytes]] = []

    # =========================================================================
    # I2CDevice Interface
    # =========================================================================

    @property
    def address(self) -> int:
        return self._address

    def write_register_byte(self, register: int, value: int) -> None:
        self._write(register, bytes([value & 0xFF]))

    def write_register_buffer(self, register: int, data: BufferLike, length: int) -> None:
        self._write(register, bytes(data[:length]))

    def _write(self, register: int, payload: bytes) -> None:
        self.transactions.append((register, payload))
        if register == CONTROL_COMMAND:
            for byte in payload:
                self.command(byte)
        elif register == CONTROL_DATA:
            for byte in payload:
                self.write_data(byte)
        else:
            raise TransportError("Unsupported control byte", register=register)

    # =========================================================================
    # Controller Properties
    # =========================================================================

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def is_on(self) -> bool:
        """True if the panel has been switched on."""
        return self._state.is_on

    @property
    def contrast(self) -> int:
        return self._state.contrast

    @property
    def inverted(self) -> bool:
        return self._state.inverted

    @property
    def gddram(self) -> bytes:
        """Snapshot of the display RAM (column-major within each page)."""
        return bytes(self._gddram)

    def data_transfers(self) -> list[bytes]:
        """Payloads of all data-register writes, in order."""
        return [payload for register, payload in self.transactions
                if register == CONTROL_DATA]

    def command_bytes(self) -> list[int]:
        """Every byte sent to the command register, flattened."""
        result = []
        for register, payload in self.transactions:
            if register == CONTROL_COMMAND:
                result.extend(payload)
        return result

    # =========================================================================
    # Command Processing
    # =========================================================================

    def command(self, data: int) -> None:
        """
        Process one byte of the command stream.

        Arguments of a multi-byte command are collected until complete,
        then the command is applied as a whole.
        """
        state = self._state

        if state.pending_command is not None:
            state.pending_args.append(data)
            if len(state.pending_args) == COMMAND_ARGUMENTS[state.pending_command]:
                command, args = state.pending_command, state.pending_args
                state.pending_command = None
                state.pending_args = []
                self._apply(command, args)
            return

        if data in COMMAND_ARGUMENTS:
            state.pending_command = data
            state.pending_args = []
            return

        self._apply(data, [])

    def _apply(self, command: int, args: list[int]) -> None:
        state = self._state

        if command == SET_CONTRAST:
            state.contrast = args[0]
        elif command == MEMORY_MODE:
            state.memory_mode = args[0] & 0x03
        elif command == COLUMN_ADDR:
            state.column_start = args[0] & 0x7F
            state.column_end = args[1] & 0x7F
            state.column = state.column_start
        elif command == PAGE_ADDR:
            state.page_start = args[0] & 0x07
            state.page_end = args[1] & 0x07
            state.page = state.page_start
        elif command == SET_MULTIPLEX:
            state.multiplex = args[0] & 0x3F
        elif command == CHARGE_PUMP:
            state.charge_pump = (args[0] & 0x04) != 0
        elif command in COMMAND_ARGUMENTS:
            # Timing and driving scheme settings have no visible effect here
            pass
        elif command == DISPLAY_ON:
            state.is_on = True
        elif command == DISPLAY_OFF:
            state.is_on = False
        elif command == NORMAL_DISPLAY:
            state.inverted = False
        elif command == INVERT_DISPLAY:
            state.inverted = True
        elif command == DISPLAY_ALL_ON_RESUME:
            state.all_on = False
        elif command == DISPLAY_ALL_ON:
            state.all_on = True
        elif command in (SEG_REMAP, SEG_REMAP | 0x01):
            state.seg_remap = (command & 0x01) != 0
        elif command == COM_SCAN_INC:
            state.com_scan_dec = False
        elif command == COM_SCAN_DEC:
            state.com_scan_dec = True
        elif SET_START_LINE <= command <= SET_START_LINE + 0x3F:
            state.start_line = command & 0x3F
        elif SET_PAGE_START <= command <= SET_PAGE_START + 0x07:
            state.page = command & 0x07
        elif SET_LOW_COLUMN <= command <= SET_LOW_COLUMN + 0x0F:
            state.column = (state.column & 0xF0) | (command & 0x0F)
        elif SET_HIGH_COLUMN <= command <= SET_HIGH_COLUMN + 0x0F:
            state.column = ((command & 0x07) << 4) | (state.column & 0x0F)
        else:
            logger.debug("Ignoring unknown command 0x%02X", command)

    # =========================================================================
    # Data Processing
    # =========================================================================

    def write_data(self, data: int) -> None:
        """Store one byte at the write cursor and advance it."""
        state = self._state
        self._gddram[state.page * GDDRAM_COLUMNS + state.column] = data & 0xFF

        if state.memory_mode == MEMORY_MODE_HORIZONTAL:
            state.column += 1
            if state.column > state.column_end:
                state.column = state.column_start
                state.page += 1
                if state.page > state.page_end:
                    state.page = state.page_start
        elif state.memory_mode == MEMORY_MODE_VERTICAL:
            state.page += 1
            if state.page > state.page_end:
                state.page = state.page_start
                state.column += 1
                if state.column > state.column_end:
                    state.column = state.column_start
        else:
            state.column += 1
            if state.column > state.column_end:
                state.column = state.column_start

    # =========================================================================
    # Pixel Access API (for testing and previews)
    # =========================================================================

    def get_pixel(self, x: int, y: int) -> bool:
        """
        Return the RAM bit for pixel (x, y).

        This is the stored value, independent of power, inversion or
        all-on state.
        """
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise ValueError(f"Invalid position ({x}, {y})")
        byte = self._gddram[(y // PAGE_HEIGHT) * GDDRAM_COLUMNS + x]
        return bool(byte & (1 << (y & 0x07)))

    def is_lit(self, x: int, y: int) -> bool:
        """Return True if pixel (x, y) is visibly lit on the panel."""
        state = self._state
        if not state.is_on:
            return False
        if state.all_on:
            return True
        return self.get_pixel(x, y) != state.inverted

    def to_text(self, on: str = "#", off: str = ".") -> str:
        """Render the visible panel as text, one line per pixel row."""
        return "\n".join(
            "".join(on if self.is_lit(x, y) else off for x in range(self._width))
            for y in range(self._height)
        )

    def render_image(self, scale: int = 2) -> bytes:
        """
        Render the visible panel as a PNG image.

        Args:
            scale: Pixel scale factor (default 2)

        Returns:
            PNG image bytes
        """
        img = Image.new('L', (self._width, self._height), color=16)
        pixels = img.load()
        for y in range(self._height):
            for x in range(self._width):
                if self.is_lit(x, y):
                    pixels[x, y] = 230

        if scale > 1:
            img = img.resize(
                (self._width * scale, self._height * scale), Image.Resampling.NEAREST
            )

        buffer = io.BytesIO()
        img.save(buffer, format='PNG')
        return buffer.getvalue()


class EmulatedAdapter(I2CAdapter):
    """
    A bus with emulated SSD1306 panels attached.

    Each address gets its own controller, created on first use and
    returned again on later lookups.
    """

    def __init__(self, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT):
        self._width = width
        self._height = height
        self._devices: dict[int, EmulatedSSD1306] = {}

    def get_device(self, address: int) -> EmulatedSSD1306:
        if address not in self._devices:
            logger.debug("Attaching emulated SSD1306 at 0x%02X", address)
            self._devices[address] = EmulatedSSD1306(address, self._width, self._height)
        return self._devices[address]

    @property
    def device(self) -> EmulatedSSD1306:
        """The panel at the default address."""
        return self.get_device(DEFAULT_DISPLAY_ADDRESS)
