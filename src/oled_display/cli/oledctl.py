"""
oledctl - OLED Panel Command-Line Interface
===========================================

This module implements a small command-line tool for SSD1306 panels on
a Linux I2C bus. Each invocation opens the bus, initializes the panel,
performs one action and exits.

Usage Examples
--------------
Blank the panel:
    $ oledctl clear

Show centered text on bus 3 at address 0x3D:
    $ oledctl --bus 3 --address 0x3D text "Hello World!" --center

Show an image (converted to 1 bit, drawn at the top-left corner):
    $ oledctl image logo.png

Preview without hardware (writes a PNG of the emulated panel):
    $ oledctl --preview hello.png --scale 4 text "Hello"

Defaults for --bus and --address come from OLED_I2C_BUS and
OLED_I2C_ADDRESS when set.

Exit Codes
----------
0 - Success
1 - Bus or device error
2 - Invalid arguments or missing files
3 - Internal error

Copyright (c) 2026 oled-display Contributors
"""

import logging
import sys
from pathlib import Path
from typing import Callable, Optional

import click
from PIL import Image, UnidentifiedImageError

from oled_display import __version__
from oled_display.bus import EmulatedAdapter, I2CAdapter, SMBusAdapter
from oled_display.cli.errors import ExitCode, handle_cli_exception
from oled_display.config import DisplayConfig, parse_int
from oled_display.display import OLEDDisplay
from oled_display.font import DEFAULT_FONT

logger = logging.getLogger(__name__)


# =============================================================================
# CLI Context and Utilities
# =============================================================================

class Context:
    """
    Shared context for CLI commands.

    Stores the panel configuration, preview target and verbosity.
    """

    def __init__(self) -> None:
        self.config: DisplayConfig = DisplayConfig.from_env()
        self.preview: Optional[Path] = None
        self.scale: int = 2
        self.verbose: bool = False

    def setup_logging(self) -> None:
        """Configure logging based on verbosity."""
        level = logging.DEBUG if self.verbose else logging.INFO
        logging.basicConfig(
            level=level,
            format="%(levelname)s: %(message)s" if self.verbose else "%(message)s",
        )

    def open_adapter(self) -> I2CAdapter:
        if self.preview is not None:
            return EmulatedAdapter(self.config.width, self.config.height)
        return SMBusAdapter(self.config.bus)

    def run(self, action: Callable[[OLEDDisplay], None]) -> None:
        """
        Open the panel, run `action` on it, and clean up.

        In preview mode the emulated panel is written to the preview PNG
        after the action completes.
        """
        try:
            with self.open_adapter() as adapter:
                display = OLEDDisplay(adapter, config=self.config)
                action(display)

                if self.preview is not None:
                    png = adapter.get_device(self.config.address).render_image(self.scale)
                    self.preview.write_bytes(png)
                    logger.info("Preview written to %s", self.preview)
        except Exception as e:
            handle_cli_exception(e, verbose=self.verbose)


pass_context = click.make_pass_decorator(Context, ensure=True)


def _parse_address(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return parse_int(value)
    except ValueError:
        raise click.BadParameter(f"Invalid address '{value}'")


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.option(
    "-b", "--bus",
    type=int,
    default=None,
    help="I2C bus number, as in /dev/i2c-N (default: 1 or $OLED_I2C_BUS)",
)
@click.option(
    "-a", "--address",
    type=str,
    default=None,
    callback=_parse_address,
    help="Panel address, decimal or 0x hex (default: 0x3C or $OLED_I2C_ADDRESS)",
)
@click.option(
    "--preview",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Drive an emulated panel and write it to this PNG file",
)
@click.option(
    "--scale",
    type=click.IntRange(1, 16),
    default=2,
    help="Pixel scale factor for --preview (default: 2)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Enable verbose output",
)
@click.version_option(version=__version__, prog_name="oledctl")
@pass_context
def main(
    ctx: Context,
    bus: Optional[int],
    address: Optional[int],
    preview: Optional[Path],
    scale: int,
    verbose: bool,
) -> None:
    """
    Control an SSD1306 OLED panel on an I2C bus.

    Each command initializes the panel, draws, and sends the result.
    Use --preview to render to a PNG file instead of real hardware.
    """
    if bus is not None:
        ctx.config.bus = bus
    if address is not None:
        ctx.config.address = address
    ctx.preview = preview
    ctx.scale = scale
    ctx.verbose = verbose
    ctx.setup_logging()


# =============================================================================
# Commands
# =============================================================================

@main.command()
@pass_context
def clear(ctx: Context) -> None:
    """Blank the panel."""

    def action(display: OLEDDisplay) -> None:
        display.clear()
        display.update()

    ctx.run(action)


@main.command()
@click.argument("text")
@click.option("-x", type=int, default=0, help="Left edge in pixels (default: 0)")
@click.option("-y", type=int, default=0, help="Top edge in pixels (default: 0)")
@click.option("--center", is_flag=True, help="Center each line horizontally (ignores -x)")
@click.option("--invert", is_flag=True, help="Invert the panel output")
@pass_context
def text(ctx: Context, text: str, x: int, y: int, center: bool, invert: bool) -> None:
    """
    Draw TEXT with the built-in 5x8 font.

    A literal '\\n' in TEXT starts a new line.

    Examples:

        oledctl text "Hello World!" --center -y 28

        oledctl text "Line 1\\nLine 2"
    """
    content = text.replace("\\n", "\n")

    def action(display: OLEDDisplay) -> None:
        if center:
            pos_y = y
            for line in content.split("\n"):
                display.draw_string_centered(line, DEFAULT_FONT, pos_y, True)
                pos_y += DEFAULT_FONT.outer_height
        else:
            display.draw_string(content, DEFAULT_FONT, x, y, True)
        if invert:
            display.invert(True)
        display.update()

    ctx.run(action)


@main.command()
@click.argument(
    "image_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option("-x", type=int, default=0, help="Left edge in pixels (default: 0)")
@click.option("-y", type=int, default=0, help="Top edge in pixels (default: 0)")
@pass_context
def image(ctx: Context, image_file: Path, x: int, y: int) -> None:
    """
    Draw IMAGE_FILE on the panel.

    The image is converted to grayscale and thresholded at 50%; parts
    outside the panel are clipped.
    """
    try:
        img = Image.open(image_file)
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        click.echo(f"Error reading {image_file}: {e}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    logger.debug("Loaded %s (%dx%d, mode %s)", image_file, img.width, img.height, img.mode)

    def action(display: OLEDDisplay) -> None:
        display.draw_image(img, x, y)
        display.update()

    ctx.run(action)


@main.command()
@click.argument("level", type=click.IntRange(0, 255))
@pass_context
def contrast(ctx: Context, level: int) -> None:
    """Set panel contrast to LEVEL (0-255)."""

    def action(display: OLEDDisplay) -> None:
        display.set_contrast(level)

    ctx.run(action)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
