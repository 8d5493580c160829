"""
OLED Bus Module
===============

Transports between the display driver and the panel.

Module Structure
----------------
- **base**: I2CAdapter / I2CDevice interfaces consumed by OLEDDisplay
- **smbus**: Linux i2c-dev adapter (smbus2)
- **emulated**: In-process SSD1306 emulation for previews and tests

Quick Start
-----------
Real hardware:

    from oled_display.bus import SMBusAdapter

    with SMBusAdapter(1) as adapter:
        display = OLEDDisplay(adapter, address=0x3C)

No hardware:

    from oled_display.bus import EmulatedAdapter

    adapter = EmulatedAdapter()
    display = OLEDDisplay(adapter)
    ...
    png = adapter.device.render_image(scale=4)

Copyright (c) 2026 oled-display Contributors
"""

from oled_display.bus.base import BufferLike, I2CAdapter, I2CDevice
from oled_display.bus.emulated import ControllerState, EmulatedAdapter, EmulatedSSD1306
from oled_display.bus.smbus import I2C_SMBUS_BLOCK_MAX, SMBusAdapter, SMBusDevice

__all__ = [
    # Interfaces
    "BufferLike",
    "I2CAdapter",
    "I2CDevice",
    # Linux i2c-dev
    "I2C_SMBUS_BLOCK_MAX",
    "SMBusAdapter",
    "SMBusDevice",
    # Emulation
    "ControllerState",
    "EmulatedAdapter",
    "EmulatedSSD1306",
]
