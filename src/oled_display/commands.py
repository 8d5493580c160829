"""
SSD1306 Command Set
===================

Opcodes, control bytes and the power-up sequence for the SSD1306 OLED
controller.

Every I2C transaction to the SSD1306 starts with a control byte that
tells the controller how to treat the bytes that follow:

- 0x00: the following bytes are commands (and command arguments)
- 0x40: the following bytes are display data (GDDRAM)

The driver addresses these control bytes as "registers" of the bus
device, so a command write is a single-byte register write to 0x00 and a
data transfer is a buffered register write to 0x40.

Reference: Solomon Systech SSD1306 datasheet, rev 1.1, section 10.

Copyright (c) 2026 oled-display Contributors
"""

from typing import Final

# =============================================================================
# Bus Constants
# =============================================================================

DEFAULT_DISPLAY_ADDRESS: Final[int] = 0x3C

CONTROL_COMMAND: Final[int] = 0x00
CONTROL_DATA: Final[int] = 0x40

# Largest payload sent in one data transfer
MAX_TRANSFER_SIZE: Final[int] = 16

# =============================================================================
# Panel Geometry
# =============================================================================

DISPLAY_WIDTH: Final[int] = 128
DISPLAY_HEIGHT: Final[int] = 64
PAGE_HEIGHT: Final[int] = 8

# =============================================================================
# Fundamental Commands
# =============================================================================

SET_CONTRAST: Final[int] = 0x81
DISPLAY_ALL_ON_RESUME: Final[int] = 0xA4
DISPLAY_ALL_ON: Final[int] = 0xA5
NORMAL_DISPLAY: Final[int] = 0xA6
INVERT_DISPLAY: Final[int] = 0xA7
DISPLAY_OFF: Final[int] = 0xAE
DISPLAY_ON: Final[int] = 0xAF

# =============================================================================
# Addressing Commands
# =============================================================================

SET_LOW_COLUMN: Final[int] = 0x00    # 0x00-0x0F, page addressing mode only
SET_HIGH_COLUMN: Final[int] = 0x10   # 0x10-0x1F, page addressing mode only
MEMORY_MODE: Final[int] = 0x20
COLUMN_ADDR: Final[int] = 0x21
PAGE_ADDR: Final[int] = 0x22
SET_PAGE_START: Final[int] = 0xB0    # 0xB0-0xB7, page addressing mode only

MEMORY_MODE_HORIZONTAL: Final[int] = 0x00
MEMORY_MODE_VERTICAL: Final[int] = 0x01
MEMORY_MODE_PAGE: Final[int] = 0x02

# =============================================================================
# Hardware Configuration Commands
# =============================================================================

SET_START_LINE: Final[int] = 0x40    # 0x40-0x7F
SEG_REMAP: Final[int] = 0xA0         # | 0x01 maps column 127 to SEG0
SET_MULTIPLEX: Final[int] = 0xA8
COM_SCAN_INC: Final[int] = 0xC0
COM_SCAN_DEC: Final[int] = 0xC8
SET_DISPLAY_OFFSET: Final[int] = 0xD3
SET_COM_PINS: Final[int] = 0xDA

# =============================================================================
# Timing & Driving Scheme Commands
# =============================================================================

SET_DISPLAY_CLOCK_DIV: Final[int] = 0xD5
SET_PRECHARGE: Final[int] = 0xD9
SET_VCOM_DETECT: Final[int] = 0xDB
CHARGE_PUMP: Final[int] = 0x8D

CHARGE_PUMP_ENABLE: Final[int] = 0x14
DEFAULT_CONTRAST: Final[int] = 0xCF

# Number of argument bytes that follow each multi-byte command.
# Commands not listed here take no arguments.
COMMAND_ARGUMENTS: Final[dict[int, int]] = {
    SET_CONTRAST: 1,
    MEMORY_MODE: 1,
    COLUMN_ADDR: 2,
    PAGE_ADDR: 2,
    SET_MULTIPLEX: 1,
    SET_DISPLAY_OFFSET: 1,
    SET_COM_PINS: 1,
    SET_DISPLAY_CLOCK_DIV: 1,
    SET_PRECHARGE: 1,
    SET_VCOM_DETECT: 1,
    CHARGE_PUMP: 1,
}


# =============================================================================
# Initialization Sequence
# =============================================================================

def init_sequence(height: int = DISPLAY_HEIGHT, contrast: int = DEFAULT_CONTRAST) -> tuple[int, ...]:
    """
    Build the power-up command sequence for a panel of the given height.

    The order matters: the panel must be switched off while the clock,
    multiplex and charge pump are configured, and switched on last.

    Args:
        height: Panel height in pixels (multiplex ratio is height - 1)
        contrast: Initial contrast level (0-255)

    Returns:
        Tuple of command bytes, one register write per byte.
    """
    com_pins = 0x12 if height > 32 else 0x02
    return (
        DISPLAY_OFF,
        SET_DISPLAY_CLOCK_DIV, 0x80,            # suggested ratio
        SET_MULTIPLEX, height - 1,
        SET_DISPLAY_OFFSET, 0x00,               # no offset
        SET_START_LINE | 0x00,                  # line #0
        CHARGE_PUMP, CHARGE_PUMP_ENABLE,
        MEMORY_MODE, MEMORY_MODE_HORIZONTAL,
        SEG_REMAP | 0x01,
        COM_SCAN_DEC,
        SET_COM_PINS, com_pins,
        SET_CONTRAST, contrast,
        SET_PRECHARGE, 0xF1,
        SET_VCOM_DETECT, 0x40,
        DISPLAY_ALL_ON_RESUME,
        NORMAL_DISPLAY,
        DISPLAY_ON,
    )


# Sequence for the reference 128x64 panel
INIT_SEQUENCE: Final[tuple[int, ...]] = init_sequence()
