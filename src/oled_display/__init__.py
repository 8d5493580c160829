"""
OLED Display - Driver for SSD1306 Monochrome OLED Panels
=========================================================

This package drives 128x64 (and 128x32) monochrome OLED panels built on
the Solomon Systech SSD1306 controller and attached over I2C.

Drawing happens in a local framebuffer; update() copies the whole surface
or a rectangular region of it to the panel in small bus transfers.

Main Components
---------------
- **display**: OLEDDisplay, the panel driver (init, drawing, update)
- **framebuffer**: Packed page-major 1-bit surface
- **font**: Font interface and the built-in 5x8 ASCII face
- **bus**: I2C adapters (Linux i2c-dev via smbus2, in-process emulation)
- **commands**: SSD1306 opcodes and the power-up sequence
- **config**: Panel and bus settings

Quick Start
-----------
Draw text on a real panel:
    >>> from oled_display import OLEDDisplay, DEFAULT_FONT
    >>> from oled_display.bus import SMBusAdapter
    >>> with SMBusAdapter(1) as adapter:
    ...     display = OLEDDisplay(adapter)
    ...     display.draw_string_centered("Hello World!", DEFAULT_FONT, 25, True)
    ...     display.update()

Update only part of the panel:
    >>> display.clear_rect(0, 0, 32, 8, False)
    >>> display.draw_string("42", DEFAULT_FONT, 0, 0, True)
    >>> display.update(0, 0, 32, 8)

Or use the command-line tool:
    $ oledctl text "Hello World!" --center
    $ oledctl --preview out.png image logo.png

Copyright (c) 2026 oled-display Contributors
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from oled_display.commands import (
    DEFAULT_DISPLAY_ADDRESS,
    INIT_SEQUENCE,
    MAX_TRANSFER_SIZE,
)
from oled_display.config import DisplayConfig
from oled_display.display import DisplayState, OLEDDisplay
from oled_display.errors import (
    BusError,
    ConnectionError as OLEDConnectionError,  # Avoid collision with builtin
    InvalidUpdateAreaError,
    OLEDError,
    TransportError,
)
from oled_display.font import DEFAULT_FONT, BitmapFont, Font
from oled_display.framebuffer import Framebuffer

__all__ = [
    # Version info
    "__version__",
    # Driver
    "OLEDDisplay",
    "DisplayState",
    "DisplayConfig",
    "Framebuffer",
    # Fonts
    "Font",
    "BitmapFont",
    "DEFAULT_FONT",
    # Constants
    "DEFAULT_DISPLAY_ADDRESS",
    "INIT_SEQUENCE",
    "MAX_TRANSFER_SIZE",
    # Exception hierarchy
    "OLEDError",
    "InvalidUpdateAreaError",
    "BusError",
    "TransportError",
    "OLEDConnectionError",
]
