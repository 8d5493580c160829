#!/usr/bin/env python3
"""
OLED Display Demo
=================

This script demonstrates how to use the oled_display driver to:
1. Open a bus (real hardware or the emulated panel)
2. Draw text and shapes in the framebuffer
3. Send the whole frame, then refresh only a small region
4. Save a preview of what the panel shows

Usage:
    python examples/oled_demo.py            # emulated panel, PNG previews
    python examples/oled_demo.py --bus 1    # real panel on /dev/i2c-1

Copyright (c) 2026 oled-display Contributors
"""

import sys
import time
from pathlib import Path

from oled_display import DEFAULT_FONT, OLEDDisplay
from oled_display.bus import EmulatedAdapter, SMBusAdapter


def main():
    # Output directory for previews
    output_dir = Path("trash")
    output_dir.mkdir(exist_ok=True)

    # ==========================================================================
    # 1. Open a bus
    # ==========================================================================
    # With --bus N the demo drives a real panel at 0x3C; otherwise every
    # write goes to an in-process SSD1306 emulation.

    if len(sys.argv) == 3 and sys.argv[1] == "--bus":
        adapter = SMBusAdapter(int(sys.argv[2]))
        emulated = False
    else:
        adapter = EmulatedAdapter()
        emulated = True

    with adapter:
        print("Initializing panel...")
        display = OLEDDisplay(adapter)
        print(f"  {display.width}x{display.height} at 0x{display.address:02X}")

        # ======================================================================
        # 2. Draw a frame
        # ======================================================================
        display.clear()
        display.draw_string_centered("Hello World!", DEFAULT_FONT, 25, True)

        # Border
        display.clear_rect(0, 0, display.width, 1, True)
        display.clear_rect(0, display.height - 1, display.width, 1, True)
        display.clear_rect(0, 0, 1, display.height, True)
        display.clear_rect(display.width - 1, 0, 1, display.height, True)

        display.update()

        if emulated:
            (output_dir / "demo_frame.png").write_bytes(adapter.device.render_image(scale=4))
            print("  Saved demo_frame.png")

        # ======================================================================
        # 3. Partial updates
        # ======================================================================
        # Only the counter's 24x8 cell is sent each time: 24 bytes instead
        # of the full 1024.

        print("\nCounting...")
        for count in range(10):
            display.clear_rect(52, 48, 24, 8, False)
            display.draw_string(f"{count:3d}", DEFAULT_FONT, 52, 48, True)
            display.update(52, 48, 24, 8)
            time.sleep(0.1)

        if emulated:
            (output_dir / "demo_counter.png").write_bytes(adapter.device.render_image(scale=4))
            print("  Saved demo_counter.png")
            print()
            print(adapter.device.to_text())


if __name__ == "__main__":
    main()
