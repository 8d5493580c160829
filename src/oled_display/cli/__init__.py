"""
OLED Display Command-Line Interface
===================================

This package provides the command-line tool for the OLED driver:

- **oledctl**: clear the panel, draw text or images, set contrast

The tool is a Click-based CLI application that can drive real hardware
or an emulated panel rendered to PNG.

Copyright (c) 2026 oled-display Contributors
"""

__all__ = ["oledctl"]
