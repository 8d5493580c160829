"""
Shared Test Fixtures
====================

Bus doubles for driving OLEDDisplay without hardware:

- RecordingDevice: records every register write as (register, bytes),
  copying the payload at call time so later reuse of the driver's scratch
  buffer cannot alter what was recorded
- failing_adapter: a RecordingDevice that raises TransportError on the
  Nth write

Copyright (c) 2026 oled-display Contributors
"""

from typing import Optional

import pytest

from oled_display.bus import I2CAdapter, I2CDevice
from oled_display.commands import CONTROL_COMMAND, CONTROL_DATA
from oled_display.errors import TransportError


class RecordingDevice(I2CDevice):
    """I2C device double that records writes."""

    def __init__(self, address: int = 0x3C, fail_on_write: Optional[int] = None):
        self._address = address
        self.fail_on_write = fail_on_write
        self.writes: list[tuple[int, bytes]] = []

    @property
    def address(self) -> int:
        return self._address

    def _record(self, register: int, payload: bytes) -> None:
        if self.fail_on_write is not None and len(self.writes) + 1 >= self.fail_on_write:
            raise TransportError("simulated bus failure", register=register)
        self.writes.append((register, payload))

    def write_register_byte(self, register: int, value: int) -> None:
        self._record(register, bytes([value]))

    def write_register_buffer(self, register: int, data, length: int) -> None:
        self._record(register, bytes(data[:length]))

    @property
    def commands(self) -> list[int]:
        return [p[0] for r, p in self.writes if r == CONTROL_COMMAND]

    @property
    def data_writes(self) -> list[bytes]:
        return [p for r, p in self.writes if r == CONTROL_DATA]

    def reset(self) -> None:
        self.writes.clear()


class RecordingAdapter(I2CAdapter):
    """Adapter handing out a single RecordingDevice."""

    def __init__(
        self,
        device: Optional[RecordingDevice] = None,
        transfer_limit: Optional[int] = None,
    ):
        self.device = device or RecordingDevice()
        self.transfer_limit = transfer_limit
        self.requested_addresses: list[int] = []

    @property
    def max_transfer_size(self) -> Optional[int]:
        return self.transfer_limit

    def get_device(self, address: int) -> RecordingDevice:
        self.requested_addresses.append(address)
        return self.device


@pytest.fixture
def adapter() -> RecordingAdapter:
    return RecordingAdapter()


@pytest.fixture
def display(adapter):
    """Initialized 128x64 display with the init traffic already cleared."""
    from oled_display import OLEDDisplay

    d = OLEDDisplay(adapter)
    adapter.device.reset()
    return d


@pytest.fixture
def failing_adapter():
    """Factory: adapter whose device raises on the Nth register write."""

    def factory(fail_on_write: int) -> RecordingAdapter:
        return RecordingAdapter(RecordingDevice(fail_on_write=fail_on_write))

    return factory


@pytest.fixture
def limited_adapter():
    """Factory: adapter that reports a maximum buffered-write size."""

    def factory(transfer_limit: int) -> RecordingAdapter:
        return RecordingAdapter(transfer_limit=transfer_limit)

    return factory
