"""An in-memory RGB565 screen with rectangle drawing and a text layer."""

from __future__ import annotations

from dataclasses import dataclass

from threetris.config import COLOR_BLACK, COLOR_WHITE, SCREEN_WIDTH

CHAR_WIDTH = 6
CHAR_HEIGHT = 8


@dataclass(frozen=True)
class Glyph:
    """One character placed on the screen, in the coordinates used to draw it."""

    x: int
    y: int
    char: str
    size: int
    color: int


class Canvas:
    """A framebuffer with a rotatable coordinate system and a text cursor.

    Pixels hold RGB565 values. Text is kept as a layer of glyphs; filling a
    rectangle over a glyph removes it, as painting over text would.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("canvas dimensions must be positive")
        self._native = (width, height)
        self._pixels = [COLOR_BLACK] * (width * height)
        self._glyphs: dict[tuple[int, int], Glyph] = {}
        self.rotation = 0
        self.text_size = 1
        self.text_color = COLOR_WHITE
        self.cursor = (0, 0)

    @property
    def width(self) -> int:
        return self._native[self.rotation % 2]

    @property
    def height(self) -> int:
        return self._native[(self.rotation + 1) % 2]

    @property
    def glyphs(self) -> list[Glyph]:
        """The glyphs on screen, ordered top to bottom, left to right."""
        return sorted(self._glyphs.values(), key=lambda g: (g.y, g.x))

    def set_rotation(self, rotation: int) -> None:
        self.rotation = rotation % 4

    def _to_physical(self, x: int, y: int) -> tuple[int, int]:
        native_w, native_h = self._native
        if self.rotation == 0:
            return x, y
        if self.rotation == 1:
            return native_w - 1 - y, x
        if self.rotation == 2:
            return native_w - 1 - x, native_h - 1 - y
        return y, native_h - 1 - x

    def fill_screen(self, color: int) -> None:
        self._pixels = [color] * len(self._pixels)
        self._glyphs.clear()
        self.cursor = (0, 0) if False else self.cursor

    def fill_rect(self, x: int, y: int, w: int, h: int, color: int) -> None:
        x0, y0 = max(x, 0), max(y, 0)
        x1, y1 = min(x + w, self.width), min(y + h, self.height)
        if x1 <= x0 or y1 <= y0:
            return
        ax, ay = self._to_physical(x0, y0)
        bx, by = self._to_physical(x1 - 1, y1 - 1)
        px0, px1 = min(ax, bx), max(ax, bx) + 1
        py0, py1 = min(ay, by), max(ay, by) + 1
        native_w = self._native[0]
        row = [color] * (px1 - px0)
        for py in range(py0, py1):
            start = py * native_w
            self._pixels[start + px0:start + px1] = row
        self._erase_glyphs(x0, y0, x1, y1)

    def _erase_glyphs(self, x0: int, y0: int, x1: int, y1: int) -> None:
        covered = [
            key
            for key, g in self._glyphs.items()
            if g.x < x1
            and g.x + CHAR_WIDTH * g.size > x0
            and g.y < y1
            and g.y + CHAR_HEIGHT * g.size > y0
        ]
        for key in covered:
            del self._glyphs[key]

    def draw_rect(self, x: int, y: int, w: int, h: int, color: int) -> None:
        """Draw a one-pixel outline; the interior is left untouched."""
        if w <= 0 or h <= 0:
            return
        for x_pos in range(x, x + w):
            self._plot(x_pos, y, color)
            self._plot(x_pos, y + h - 1, color)
        for y_pos in range(y, y + h):
            self._plot(x, y_pos, color)
            self._plot(x + w - 1, y_pos, color)

    def _plot(self, x: int, y: int, color: int) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            px, py = self._to_physical(x, y)
            self._pixels[py * self._native[0] + px] = color

    def set_text_size(self, size: int) -> None:
        self.text_size = max(1, size)

    def set_text_color(self, color: int) -> None:
        self.text_color = color

    def set_cursor(self, x: int, y: int) -> None:
        self.cursor = (x, y)

    def print(self, text: object) -> None:
        """Place text at the cursor and advance it past the last character."""
        x, y = self.cursor
        size = self.text_size
        for char in str(text):
            if char == "\n":
                x, y = 0, y + CHAR_HEIGHT * size
                continue
            if char == "\r":
                continue
            if not char.isspace():
                self._glyphs[(x, y)] = Glyph(x, y, char, size, self.text_color)
            x += CHAR_WIDTH * size
        self.cursor = (x, y)

    def pixel(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is off the canvas")
        px, py = self._to_physical(x, y)
        return self._pixels[py * self._native[0] + px]


def draw_centered_text(
    canvas: Canvas, text: str, y: int, text_size: int, color: int = COLOR_WHITE
) -> None:
    """Print text horizontally centred on a screen of SCREEN_WIDTH pixels."""
    canvas.set_text_size(text_size)
    canvas.set_text_color(color)
    width = len(text) * CHAR_WIDTH * text_size
    canvas.set_cursor(int((SCREEN_WIDTH - width) / 2), y)
    canvas.print(text)


def draw_text(
    canvas: Canvas, text: str, x: int, y: int, text_size: int, color: int = COLOR_WHITE
) -> None:
    canvas.set_text_size(text_size)
    canvas.set_text_color(color)
    canvas.set_cursor(x, y)
    canvas.print(text)