"""
Display Configuration
=====================

Panel and bus settings for the OLED driver. Configuration can come from:
- Default values (defined here, matching the common 128x64 I2C module)
- Keyword arguments
- Environment variables (see DisplayConfig.from_env)

Copyright (c) 2026 oled-display Contributors
"""

import logging
import os
from dataclasses import dataclass

from oled_display.commands import (
    DEFAULT_CONTRAST,
    DEFAULT_DISPLAY_ADDRESS,
    DISPLAY_HEIGHT,
    DISPLAY_WIDTH,
    MAX_TRANSFER_SIZE,
    PAGE_HEIGHT,
)

logger = logging.getLogger(__name__)


@dataclass
class DisplayConfig:
    """
    Configuration for one OLED panel.

    Attributes:
        width: Panel width in pixels (default: 128)
        height: Panel height in pixels, a multiple of 8 (default: 64)
        address: 7-bit I2C address of the panel (default: 0x3C)
        bus: Linux I2C bus number, as in /dev/i2c-N (default: 1)
        max_transfer_size: Largest data payload per bus write (default: 16)
        contrast: Contrast level sent during initialization (default: 0xCF)
    """

    width: int = DISPLAY_WIDTH
    height: int = DISPLAY_HEIGHT
    address: int = DEFAULT_DISPLAY_ADDRESS
    bus: int = 1
    max_transfer_size: int = MAX_TRANSFER_SIZE
    contrast: int = DEFAULT_CONTRAST

    def validate(self) -> None:
        """
        Check the settings against the controller's limits.

        Raises:
            ValueError: If any setting cannot be driven by an SSD1306.
        """
        if not 0 < self.width <= DISPLAY_WIDTH:
            raise ValueError(
                f"width must be 1-{DISPLAY_WIDTH}, got {self.width}"
            )
        if not 0 < self.height <= DISPLAY_HEIGHT or self.height % PAGE_HEIGHT:
            raise ValueError(
                f"height must be a multiple of {PAGE_HEIGHT} up to "
                f"{DISPLAY_HEIGHT}, got {self.height}"
            )
        if not 0x03 <= self.address <= 0x77:
            raise ValueError(f"Invalid I2C address: 0x{self.address:02X}")
        if self.max_transfer_size <= 0:
            raise ValueError(
                f"max_transfer_size must be positive, got {self.max_transfer_size}"
            )
        if not 0 <= self.contrast <= 0xFF:
            raise ValueError(f"contrast must be 0-255, got {self.contrast}")

    @classmethod
    def from_env(cls) -> "DisplayConfig":
        """
        Create DisplayConfig from environment variables.

        Environment variables (all optional):
            OLED_I2C_BUS: Bus number (integer)
            OLED_I2C_ADDRESS: Panel address (decimal or 0x-prefixed hex)
            OLED_MAX_TRANSFER_SIZE: Bytes per data write (integer)
            OLED_CONTRAST: Contrast level (decimal or 0x-prefixed hex)

        Invalid values are logged and the default is kept.

        Returns:
            DisplayConfig with values from environment variables
        """
        config = cls()

        if bus := os.environ.get("OLED_I2C_BUS"):
            config.bus = _parse_int("OLED_I2C_BUS", bus, config.bus)

        if address := os.environ.get("OLED_I2C_ADDRESS"):
            config.address = _parse_int("OLED_I2C_ADDRESS", address, config.address)

        if size := os.environ.get("OLED_MAX_TRANSFER_SIZE"):
            config.max_transfer_size = _parse_int(
                "OLED_MAX_TRANSFER_SIZE", size, config.max_transfer_size
            )

        if contrast := os.environ.get("OLED_CONTRAST"):
            config.contrast = _parse_int("OLED_CONTRAST", contrast, config.contrast)

        return config


def parse_int(text: str) -> int:
    """Parse a decimal or 0x-prefixed hexadecimal integer."""
    text = text.strip()
    if text.lower().startswith("0x"):
        return int(text, 16)
    return int(text)


def _parse_int(name: str, text: str, default: int) -> int:
    try:
        return parse_int(text)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %d", name, text, default)
        return default
