"""
Linux I2C Adapter Tests
=======================

Tests for SMBusAdapter and SMBusDevice with smbus2 mocked out.

Hardware-dependent behaviour (real /dev/i2c-N nodes) is not exercised;
the tests check how register writes map onto smbus2 calls and how OS
errors map onto the driver's exception hierarchy.

Copyright (c) 2026 oled-display Contributors
"""

from unittest.mock import MagicMock, patch

import pytest

from oled_display import DisplayConfig, OLEDDisplay
from oled_display.bus import I2C_SMBUS_BLOCK_MAX, SMBusAdapter, SMBusDevice
from oled_display.errors import BusError, ConnectionError, TransportError


@pytest.fixture
def mock_smbus():
    with patch("oled_display.bus.smbus.SMBus") as smbus_class:
        yield smbus_class


# =============================================================================
# Adapter Tests
# =============================================================================

class TestSMBusAdapter:
    """Test opening and closing the bus."""

    def test_opens_bus_number(self, mock_smbus):
        adapter = SMBusAdapter(3)
        mock_smbus.assert_called_once_with(3)
        assert adapter.bus_number == 3

    def test_default_bus(self, mock_smbus):
        SMBusAdapter()
        mock_smbus.assert_called_once_with(1)

    def test_missing_bus(self, mock_smbus):
        mock_smbus.side_effect = FileNotFoundError(2, "No such file")
        with pytest.raises(ConnectionError, match="/dev/i2c-7"):
            SMBusAdapter(7)

    def test_permission_denied(self, mock_smbus):
        mock_smbus.side_effect = PermissionError(13, "Permission denied")
        with pytest.raises(ConnectionError, match="i2c"):
            SMBusAdapter(1)

    def test_other_os_error(self, mock_smbus):
        mock_smbus.side_effect = OSError(5, "I/O error")
        with pytest.raises(BusError):
            SMBusAdapter(1)

    def test_context_manager_closes(self, mock_smbus):
        with SMBusAdapter(1):
            pass
        mock_smbus.return_value.close.assert_called_once()

    def test_close_error_logged(self, mock_smbus, caplog):
        mock_smbus.return_value.close.side_effect = OSError("busy")
        adapter = SMBusAdapter(1)
        adapter.close()
        assert "Error closing I2C bus" in caplog.text

    def test_get_device(self, mock_smbus):
        device = SMBusAdapter(1).get_device(0x3D)
        assert isinstance(device, SMBusDevice)
        assert device.address == 0x3D


# =============================================================================
# Device Tests
# =============================================================================

class TestSMBusDevice:
    """Test register writes."""

    @pytest.fixture
    def bus(self):
        return MagicMock()

    @pytest.fixture
    def device(self, bus):
        return SMBusDevice(bus, 0x3C)

    def test_write_byte(self, device, bus):
        device.write_register_byte(0x00, 0xAF)
        bus.write_byte_data.assert_called_once_with(0x3C, 0x00, 0xAF)

    def test_write_buffer_prefix(self, device, bus):
        """Only the first `length` bytes of the buffer are sent."""
        buffer = bytearray([1, 2, 3, 4, 5])
        device.write_register_buffer(0x40, buffer, 3)
        bus.write_i2c_block_data.assert_called_once_with(0x3C, 0x40, [1, 2, 3])

    def test_payload_copied(self, device, bus):
        """The sent payload does not alias the caller's scratch buffer."""
        buffer = bytearray([9, 9])
        device.write_register_buffer(0x40, buffer, 2)
        buffer[0] = 0
        assert bus.write_i2c_block_data.call_args[0][2] == [9, 9]

    def test_block_limit(self, device, bus):
        with pytest.raises(ValueError):
            device.write_register_buffer(0x40, bytes(64), I2C_SMBUS_BLOCK_MAX + 1)
        bus.write_i2c_block_data.assert_not_called()

    def test_block_limit_exact(self, device, bus):
        device.write_register_buffer(0x40, bytes(32), I2C_SMBUS_BLOCK_MAX)
        bus.write_i2c_block_data.assert_called_once()

    def test_byte_error(self, device, bus):
        bus.write_byte_data.side_effect = OSError(121, "Remote I/O error")
        with pytest.raises(TransportError) as exc_info:
            device.write_register_byte(0x00, 0xAE)
        assert exc_info.value.register == 0x00
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_buffer_error(self, device, bus):
        bus.write_i2c_block_data.side_effect = OSError(121, "Remote I/O error")
        with pytest.raises(TransportError, match="register 0x40"):
            device.write_register_buffer(0x40, bytes(16), 16)


# =============================================================================
# Driver Integration
# =============================================================================

class TestDisplayOverSMBus:
    """OLEDDisplay on a mocked bus."""

    def test_init_and_update(self, mock_smbus):
        bus = mock_smbus.return_value
        with SMBusAdapter(1) as adapter:
            display = OLEDDisplay(adapter)
            display.update()

        assert bus.write_byte_data.call_count == 25 + 6
        assert bus.write_i2c_block_data.call_count == 64
        for call in bus.write_i2c_block_data.call_args_list:
            address, register, payload = call[0]
            assert (address, register) == (0x3C, 0x40)
            assert len(payload) == 16

    def test_oversized_transfer_refused(self, mock_smbus):
        """A chunk size above the SMBus block limit never reaches the bus."""
        bus = mock_smbus.return_value
        with SMBusAdapter(1) as adapter:
            assert adapter.max_transfer_size == I2C_SMBUS_BLOCK_MAX
            with pytest.raises(ValueError):
                OLEDDisplay(adapter, config=DisplayConfig(max_transfer_size=64))

        bus.write_byte_data.assert_not_called()
        bus.write_i2c_block_data.assert_not_called()

    def test_nack_during_init(self, mock_smbus):
        mock_smbus.return_value.write_byte_data.side_effect = OSError(121, "Remote I/O error")
        with SMBusAdapter(1) as adapter:
            with pytest.raises(TransportError):
                OLEDDisplay(adapter)
