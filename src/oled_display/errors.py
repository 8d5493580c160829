"""
OLED Display Error Hierarchy
============================

This module defines the exception hierarchy for the OLED display driver.
All exceptions inherit from OLEDError, allowing callers to catch every
driver-related error with a single except clause if desired.

Exception Hierarchy
-------------------
OLEDError (base)
├── InvalidUpdateAreaError - malformed update rectangle (also a ValueError)
└── BusError (bus communication)
    ├── TransportError - a register write failed
    └── ConnectionError - the bus adapter cannot be opened

Out-of-range pixel addresses are deliberately not part of this hierarchy:
drawing outside the panel is silently clipped.

Copyright (c) 2026 oled-display Contributors
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class OLEDError(Exception):
    """
    Base exception for all OLED driver errors.

    Example:
        try:
            display.update()
        except OLEDError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Argument Exceptions
# =============================================================================

class InvalidUpdateAreaError(OLEDError, ValueError):
    """
    The rectangle passed to a partial update is outside the panel.

    Raised before any bus traffic, so the device is never left with a
    half-configured address window.

    Attributes:
        x, y: Top-left corner of the requested area
        w, h: Size of the requested area
    """

    def __init__(self, x: int, y: int, w: int, h: int):
        self.x = x
        self.y = y
        self.w = w
        self.h = h
        super().__init__(
            f"Invalid update area: x={x}, y={y}, w={w}, h={h}"
        )


# =============================================================================
# Bus Exceptions
# =============================================================================

class BusError(OLEDError):
    """Base exception for bus communication errors."""
    pass


class TransportError(BusError):
    """
    A register write on the bus failed.

    The remainder of the current operation is abandoned. Bytes already
    sent are not rolled back, so the panel may show a partially updated
    region until the next successful update.

    Attributes:
        register: Control register the failed write was addressed to
    """

    def __init__(self, message: str, register: Optional[int] = None):
        self.register = register
        if register is not None:
            message = f"{message} (register 0x{register:02X})"
        super().__init__(message)


class ConnectionError(BusError):
    """
    Cannot open the bus adapter.

    Raised when:
    - The i2c-dev node does not exist
    - Permission denied (user not in the 'i2c' group)

    Note:
        This is a driver-specific ConnectionError, distinct from the
        Python builtin. It inherits from BusError for consistent error
        handling in the bus module.
    """
    pass
