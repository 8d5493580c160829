"""
Linux I2C Bus Adapter
=====================

This module drives real hardware through the Linux i2c-dev interface
using the smbus2 library.

Hardware Requirements
---------------------
- A board with an I2C controller exposed as /dev/i2c-N
  (Raspberry Pi: enable I2C in raspi-config, the header pins use bus 1)
- An SSD1306 module wired to SDA/SCL, usually at address 0x3C
  (some modules strap the address to 0x3D)

Permissions
-----------
On most distributions the i2c-dev nodes belong to the 'i2c' group:
    sudo usermod -a -G i2c $USER

Transfer Limits
---------------
SMBus block writes carry at most 32 data bytes. SMBusAdapter reports this
as its max_transfer_size, and OLEDDisplay refuses a larger chunk size at
construction, before anything is sent. Block writes also check the limit
so that no other caller can build an oversized transaction.

Copyright (c) 2026 oled-display Contributors
"""

import logging
from typing import Final

from smbus2 import SMBus

from oled_display.bus.base import BufferLike, I2CAdapter, I2CDevice
from oled_display.errors import ConnectionError, TransportError

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

# Maximum data bytes in one SMBus block write
I2C_SMBUS_BLOCK_MAX: Final[int] = 32


# =============================================================================
# Device Handle
# =============================================================================

class SMBusDevice(I2CDevice):
    """Register access to one device on an open SMBus."""

    def __init__(self, bus: SMBus, address: int):
        self._bus = bus
        self._address = address

    @property
    def address(self) -> int:
        return self._address

    def write_register_byte(self, register: int, value: int) -> None:
        try:
            self._bus.write_byte_data(self._address, register, value & 0xFF)
        except OSError as e:
            raise TransportError(
                f"I2C write to 0x{self._address:02X} failed: {e}", register=register
            ) from e

    def write_register_buffer(self, register: int, data: BufferLike, length: int) -> None:
        if length > I2C_SMBUS_BLOCK_MAX:
            raise ValueError(
                f"SMBus block writes are limited to {I2C_SMBUS_BLOCK_MAX} bytes, "
                f"got {length}"
            )
        try:
            self._bus.write_i2c_block_data(
                self._address, register, list(data[:length])
            )
        except OSError as e:
            raise TransportError(
                f"I2C block write of {length} bytes to 0x{self._address:02X} failed: {e}",
                register=register,
            ) from e


# =============================================================================
# Adapter
# =============================================================================

class SMBusAdapter(I2CAdapter):
    """
    An opened /dev/i2c-N bus.

    Example:
        >>> with SMBusAdapter(1) as adapter:
        ...     display = OLEDDisplay(adapter)
        ...     display.draw_string_centered("Hello", DEFAULT_FONT, 28, True)
        ...     display.update()
    """

    def __init__(self, bus: int = 1):
        """
        Open the bus.

        Args:
            bus: Bus number (1 opens /dev/i2c-1)

        Raises:
            ConnectionError: If the bus device cannot be opened.
        """
        self._bus_number = bus
        logger.info("Opening I2C bus /dev/i2c-%d", bus)

        try:
            self._bus = SMBus(bus)
        except FileNotFoundError as e:
            raise ConnectionError(
                f"I2C bus not found: /dev/i2c-{bus}. "
                "Check that I2C is enabled and the i2c-dev module is loaded."
            ) from e
        except PermissionError as e:
            raise ConnectionError(
                f"Permission denied accessing /dev/i2c-{bus}. "
                "You may need to add your user to the 'i2c' group: "
                "sudo usermod -a -G i2c $USER"
            ) from e
        except OSError as e:
            raise ConnectionError(f"Cannot open /dev/i2c-{bus}: {e}") from e

    @property
    def bus_number(self) -> int:
        return self._bus_number

    @property
    def max_transfer_size(self) -> int:
        return I2C_SMBUS_BLOCK_MAX

    def get_device(self, address: int) -> SMBusDevice:
        return SMBusDevice(self._bus, address)

    def close(self) -> None:
        """Close the bus, logging (not raising) errors during close."""
        try:
            self._bus.close()
            logger.debug("I2C bus /dev/i2c-%d closed", self._bus_number)
        except OSError as e:
            logger.warning("Error closing I2C bus: %s", e)
