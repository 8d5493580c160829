"""
Bus Interfaces
==============

The display driver talks to the panel through two small interfaces:

- **I2CAdapter**: an opened bus that can hand out device handles by address
- **I2CDevice**: a handle for one device on that bus, exposing register writes

Concrete adapters live in sibling modules (smbus.py for Linux i2c-dev,
emulated.py for an in-process SSD1306). Anything implementing these two
methods can drive an OLEDDisplay, including test doubles.

Copyright (c) 2026 oled-display Contributors
"""

from abc import ABC, abstractmethod
from typing import Optional, Union

BufferLike = Union[bytes, bytearray, memoryview]


class I2CDevice(ABC):
    """One addressable device on an I2C bus."""

    @property
    @abstractmethod
    def address(self) -> int:
        """7-bit bus address of the device."""

    @abstractmethod
    def write_register_byte(self, register: int, value: int) -> None:
        """
        Write a single byte to a register.

        Raises:
            TransportError: On bus I/O failure
        """

    @abstractmethod
    def write_register_buffer(self, register: int, data: BufferLike, length: int) -> None:
        """
        Write the first `length` bytes of `data` to a register in one
        bus transaction.

        Raises:
            TransportError: On bus I/O failure
        """


class I2CAdapter(ABC):
    """An opened I2C bus."""

    @abstractmethod
    def get_device(self, address: int) -> I2CDevice:
        """Return a handle for the device at `address`."""

    @property
    def max_transfer_size(self) -> Optional[int]:
        """Largest payload one buffered write may carry, or None if unlimited."""
        return None

    def close(self) -> None:
        """Release the bus. The default implementation holds nothing."""

    def __enter__(self) -> "I2CAdapter":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
