"""
Emulated Controller Unit Tests
==============================

Tests for the in-process SSD1306 emulation:
- Command stream parsing (single and multi-byte commands)
- GDDRAM addressing modes and window wrap
- End-to-end updates through OLEDDisplay
- Visible output (inversion, power, PNG rendering)

Copyright (c) 2026 oled-display Contributors
"""

import io

import pytest
from PIL import Image

from oled_display import DEFAULT_FONT, DisplayConfig, OLEDDisplay, TransportError
from oled_display.bus import EmulatedAdapter, EmulatedSSD1306
from oled_display.commands import (
    CONTROL_COMMAND,
    CONTROL_DATA,
    MEMORY_MODE_HORIZONTAL,
    MEMORY_MODE_PAGE,
)


def send_commands(device, *commands):
    for command in commands:
        device.write_register_byte(CONTROL_COMMAND, command)


def send_data(device, data):
    device.write_register_buffer(CONTROL_DATA, bytes(data), len(data))


# =============================================================================
# Controller State Tests
# =============================================================================

class TestControllerReset:
    """Test power-on state."""

    def test_starts_off(self):
        device = EmulatedSSD1306()
        assert device.is_on is False
        assert device.state.memory_mode == MEMORY_MODE_PAGE

    def test_ram_blank(self):
        assert EmulatedSSD1306().gddram == bytes(1024)

    def test_off_panel_is_dark(self):
        device = EmulatedSSD1306()
        send_commands(device, 0x21, 0, 0, 0x22, 0, 0)
        send_data(device, [0xFF])
        assert device.get_pixel(0, 0) is True
        assert device.is_lit(0, 0) is False


class TestCommandParsing:
    """Test the command stream interpreter."""

    @pytest.fixture
    def device(self):
        return EmulatedSSD1306()

    def test_display_on_off(self, device):
        send_commands(device, 0xAF)
        assert device.is_on is True
        send_commands(device, 0xAE)
        assert device.is_on is False

    def test_contrast_argument(self, device):
        send_commands(device, 0x81, 0x42)
        assert device.contrast == 0x42

    def test_argument_not_decoded_as_command(self, device):
        """0xAF as a contrast argument must not switch the panel on."""
        send_commands(device, 0x81, 0xAF)
        assert device.contrast == 0xAF
        assert device.is_on is False

    def test_column_and_page_window(self, device):
        send_commands(device, 0x21, 3, 22, 0x22, 1, 2)
        state = device.state
        assert (state.column_start, state.column_end) == (3, 22)
        assert (state.page_start, state.page_end) == (1, 2)
        assert (state.column, state.page) == (3, 1)

    def test_init_sequence_state(self):
        adapter = EmulatedAdapter()
        OLEDDisplay(adapter)
        state = adapter.device.state
        assert state.is_on is True
        assert state.charge_pump is True
        assert state.memory_mode == MEMORY_MODE_HORIZONTAL
        assert state.multiplex == 63
        assert state.seg_remap is True
        assert state.com_scan_dec is True
        assert state.contrast == 0xCF
        assert state.pending_command is None

    def test_page_mode_cursor_commands(self, device):
        """Page start and nibble column commands place the cursor."""
        send_commands(device, 0x20, 0x02, 0xB2, 0x05, 0x11)
        assert device.state.page == 2
        assert device.state.column == 0x15

    def test_invert_commands(self, device):
        send_commands(device, 0xA7)
        assert device.inverted is True
        send_commands(device, 0xA6)
        assert device.inverted is False

    def test_unknown_register(self, device):
        with pytest.raises(TransportError, match="register 0x80"):
            device.write_register_byte(0x80, 0x00)

    def test_transactions_recorded(self, device):
        send_commands(device, 0xAF)
        send_data(device, [1, 2, 3])
        assert device.transactions == [(CONTROL_COMMAND, b"\xaf"), (CONTROL_DATA, b"\x01\x02\x03")]
        assert device.command_bytes() == [0xAF]
        assert device.data_transfers() == [b"\x01\x02\x03"]


# =============================================================================
# Addressing Mode Tests
# =============================================================================

class TestAddressingModes:
    """Test where data bytes land in GDDRAM."""

    @pytest.fixture
    def device(self):
        return EmulatedSSD1306()

    def test_horizontal_wraps_to_next_page(self, device):
        send_commands(device, 0x20, 0x00, 0x21, 10, 11, 0x22, 2, 3)
        send_data(device, [1, 2, 3, 4])
        ram = device.gddram
        assert ram[2 * 128 + 10:2 * 128 + 12] == bytes([1, 2])
        assert ram[3 * 128 + 10:3 * 128 + 12] == bytes([3, 4])

    def test_horizontal_wraps_to_window_start(self, device):
        send_commands(device, 0x20, 0x00, 0x21, 0, 0, 0x22, 0, 0)
        send_data(device, [1, 2])
        assert device.gddram[0] == 2

    def test_vertical(self, device):
        send_commands(device, 0x20, 0x01, 0x21, 5, 6, 0x22, 0, 1)
        send_data(device, [1, 2, 3, 4])
        ram = device.gddram
        assert ram[5] == 1
        assert ram[128 + 5] == 2
        assert ram[6] == 3
        assert ram[128 + 6] == 4

    def test_page_mode_stays_on_page(self, device):
        send_commands(device, 0x20, 0x02, 0xB2, 0x00, 0x10)
        send_data(device, [7, 8, 9])
        assert device.gddram[2 * 128:2 * 128 + 3] == bytes([7, 8, 9])
        assert device.state.page == 2


# =============================================================================
# End-to-End Tests through OLEDDisplay
# =============================================================================

class TestEndToEnd:
    """Drive the emulated panel with the real driver."""

    @pytest.fixture
    def adapter(self):
        return EmulatedAdapter()

    @pytest.fixture
    def display(self, adapter):
        return OLEDDisplay(adapter)

    def test_single_pixel(self, display, adapter):
        display.set_pixel(10, 3, True)
        display.update()
        assert adapter.device.get_pixel(10, 3) is True
        assert adapter.device.get_pixel(11, 3) is False

    def test_full_update_matches_framebuffer(self, display, adapter):
        display.clear_rect(5, 5, 10, 10, True)
        display.draw_string_centered("Hello World!", DEFAULT_FONT, 25, True)
        display.update()
        assert adapter.device.gddram == display.framebuffer.buffer

    def test_partial_update_location(self, display, adapter):
        """Only the addressed columns and pages reach the panel."""
        display.clear_rect(0, 0, 128, 64, True)
        display.update(8, 8, 16, 8)

        ram = adapter.device.gddram
        assert ram[128 + 8:128 + 24] == bytes([0xFF]) * 16
        assert sum(1 for b in ram if b) == 16

    def test_partial_update_unaligned(self, display, adapter):
        """An area starting mid-page sends whole pages."""
        display.clear_rect(0, 0, 128, 64, True)
        display.update(0, 5, 4, 4)

        device = adapter.device
        assert all(device.get_pixel(x, y) for x in range(4) for y in range(16))
        assert not device.get_pixel(4, 0)
        assert not device.get_pixel(0, 16)

    def test_partial_after_full(self, display, adapter):
        display.set_pixel(0, 0, True)
        display.update()
        display.set_pixel(100, 60, True)
        display.set_pixel(0, 0, False)
        display.update(96, 56, 8, 8)

        device = adapter.device
        assert device.get_pixel(100, 60) is True
        # outside the partial window the panel keeps the old picture
        assert device.get_pixel(0, 0) is True

    def test_invert_visible(self, display, adapter):
        display.set_pixel(1, 1, True)
        display.update()
        display.invert(True)
        device = adapter.device
        assert device.is_lit(1, 1) is False
        assert device.is_lit(0, 0) is True

    def test_all_on(self, adapter, display):
        send_commands(adapter.device, 0xA5)
        assert adapter.device.is_lit(50, 50) is True
        send_commands(adapter.device, 0xA4)
        assert adapter.device.is_lit(50, 50) is False

    def test_small_panel(self):
        adapter = EmulatedAdapter(128, 32)
        display = OLEDDisplay(adapter, config=DisplayConfig(height=32))
        display.set_pixel(127, 31, True)
        display.update()
        assert adapter.device.get_pixel(127, 31) is True
        assert adapter.device.state.multiplex == 31


# =============================================================================
# Rendering Tests
# =============================================================================

class TestRendering:
    """Test text and PNG output of the visible panel."""

    @pytest.fixture
    def device(self):
        adapter = EmulatedAdapter()
        display = OLEDDisplay(adapter)
        display.set_pixel(2, 1, True)
        display.update()
        return adapter.device

    def test_to_text(self, device):
        lines = device.to_text().split("\n")
        assert len(lines) == 64
        assert all(len(line) == 128 for line in lines)
        assert lines[1][2] == "#"
        assert lines[0][2] == "."

    def test_render_png(self, device):
        png = device.render_image(scale=3)
        assert png.startswith(b"\x89PNG")
        img = Image.open(io.BytesIO(png))
        assert img.size == (384, 192)
        assert img.getpixel((2 * 3, 1 * 3)) > img.getpixel((0, 0))

    def test_render_unscaled(self, device):
        img = Image.open(io.BytesIO(device.render_image(scale=1)))
        assert img.size == (128, 64)

    @pytest.mark.parametrize("x,y", [(-1, 0), (128, 0), (0, 64)])
    def test_get_pixel_range(self, device, x, y):
        with pytest.raises(ValueError):
            device.get_pixel(x, y)


# =============================================================================
# Adapter Tests
# =============================================================================

class TestEmulatedAdapter:
    """Test device lookup on the emulated bus."""

    def test_same_address_same_device(self):
        adapter = EmulatedAdapter()
        assert adapter.get_device(0x3C) is adapter.get_device(0x3C)
        assert adapter.device is adapter.get_device(0x3C)

    def test_addresses_independent(self):
        adapter = EmulatedAdapter()
        first = OLEDDisplay(adapter, address=0x3C)
        OLEDDisplay(adapter, address=0x3D)
        first.set_pixel(0, 0, True)
        first.update()
        assert adapter.get_device(0x3C).get_pixel(0, 0) is True
        assert adapter.get_device(0x3D).get_pixel(0, 0) is False
        assert adapter.get_device(0x3D).address == 0x3D

    def test_context_manager(self):
        with EmulatedAdapter() as adapter:
            assert isinstance(adapter, EmulatedAdapter)
