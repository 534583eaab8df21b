"""Screen geometry, timing and the RGB565 colour palette."""

SCREEN_WIDTH = 240
SCREEN_HEIGHT = 135
SCREEN_ROTATION = 1

BUTTON_DELAY = 150

COLOR_BLACK = 0x0000
COLOR_WHITE = 0xFFFF
COLOR_RED = 0xF800
COLOR_GREEN = 0x07E0
COLOR_BLUE = 0x001F
COLOR_YELLOW = 0xFFE0
COLOR_ORANGE = 0xFD20
COLOR_PURPLE = 0x780F
COLOR_CYAN = 0x07FF


def rgb565_to_rgb(color: int) -> tuple[int, int, int]:
    """Expand a 16-bit RGB565 colour to an 8-bit-per-channel RGB triple."""
    if not 0 <= color <= 0xFFFF:
        raise ValueError(f"not an RGB565 colour: {color!r}")
    red = (color >> 11) & 0x1F
    green = (color >> 5) & 0x3F
    blue = color & 0x1F
    return (
        (red << 3) | (red >> 2),
        (green << 2) | (green >> 4),
        (blue << 3) | (blue >> 2),
    )