"""The title screen, the play loop's state machine and the desktop runner."""

from __future__ import annotations

import argparse
import random
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum, auto

from threetris.canvas import Canvas
from threetris.config import (
    COLOR_BLACK,
    COLOR_CYAN,
    COLOR_GREEN,
    COLOR_ORANGE,
    COLOR_PURPLE,
    COLOR_RED,
    COLOR_WHITE,
    COLOR_YELLOW,
    rgb565_to_rgb,
)
from threetris.controls import POS_X, POS_Y, ButtonState, Controller
from threetris.game import (
    BLOCK_SIZE,
    FIELD_HEIGHT,
    FIELD_WIDTH,
    OFFSET_X,
    OFFSET_Y,
    RandomSource,
    TetrisGame,
)

TITLE_BACKGROUND = 0x0010
PORTRAIT_WIDTH = 135
PORTRAIT_HEIGHT = 240
FRAME_DELAY_MS = 10

LETTER_BLOCK = 5
PIECE_BLOCK = 7
ANIM_INTERVAL_MS = 100
BLINK_INTERVAL_MS = 600

Rect = tuple[int, int, int, int]

_LETTERS: dict[str, tuple[Rect, ...]] = {
    "T": ((0, 0, 5, 1), (2, 1, 1, 4)),
    "H": ((0, 0, 1, 5), (4, 0, 1, 5), (0, 2, 5, 1)),
    "R": ((0, 0, 1, 5), (0, 0, 4, 1), (4, 1, 1, 1), (0, 2, 3, 1), (3, 3, 1, 1), (4, 4, 1, 1)),
    "E": ((0, 0, 1, 5), (0, 0, 5, 1), (0, 2, 4, 1), (0, 4, 5, 1)),
    "I": ((0, 0, 5, 1), (2, 1, 1, 3), (0, 4, 5, 1)),
    "S": ((0, 0, 5, 1), (0, 1, 1, 2), (0, 2, 5, 1), (4, 3, 1, 1), (0, 4, 5, 1)),
}

_TITLE_COLUMNS: tuple[tuple[int, tuple[tuple[str, int], ...]], ...] = (
    (15, (("T", COLOR_CYAN), ("H", COLOR_GREEN), ("R", COLOR_RED),
          ("E", COLOR_YELLOW), ("E", COLOR_ORANGE))),
    (75, (("T", COLOR_PURPLE), ("R", COLOR_CYAN), ("I", COLOR_GREEN), ("S", COLOR_RED))),
)

_TITLE_PIECE_COLORS = (
    COLOR_CYAN, COLOR_YELLOW, COLOR_GREEN, COLOR_RED, COLOR_PURPLE, COLOR_ORANGE,
)
_TITLE_PIECE_X = (35, 50, 65)
_TITLE_PIECE_ADJUST_Y = (-5, 5, 0)


@dataclass(frozen=True)
class _TitlePiece:
    """Filled rectangles and outlined cells in block units; half shifts by half a block."""

    fills: tuple[Rect, ...]
    outlines: tuple[tuple[int, int], ...]
    half: bool = False


_TITLE_PIECES: tuple[_TitlePiece, ...] = (
    _TitlePiece(((0, 0, 3, 1),), ((0, 0), (1, 0), (2, 0))),
    _TitlePiece(((0, 0, 1, 2), (1, 1, 1, 1)), ((0, 0), (0, 1), (1, 1))),
    _TitlePiece(((1, 0, 1, 2), (0, 1, 1, 1)), ((1, 0), (1, 1), (0, 1))),
    _TitlePiece(((1, 0, 1, 1),), ((1, 0),)),
    _TitlePiece(((0, 0, 2, 1),), ((0, 0), (1, 0)), half=True),
    _TitlePiece(((0, 0, 1, 1), (1, 1, 1, 1)), ((0, 0), (1, 1))),
    _TitlePiece(((0, 0, 1, 1), (1, 1, 1, 1), (2, 2, 1, 1)), ((0, 0), (1, 1), (2, 2))),
    _TitlePiece(((0, 0, 3, 1), (1, 1, 1, 1)), ((0, 0), (1, 0), (2, 0), (1, 1))),
)


class GameState(Enum):
    TITLE_SCREEN = auto()
    PLAYING = auto()
    GAME_OVER = auto()


@dataclass
class _TitleAnimation:
    first_draw: bool = True
    pieces: list[int] = field(default_factory=lambda: [0, 0, 0])
    colors: list[int] = field(default_factory=lambda: [0, 0, 0])
    piece_y: list[int] = field(default_factory=lambda: [100, 100, 100])
    last_anim: int = 0
    last_blink: int = 0
    show_prompt: bool = True


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class App:
    """Moves between the title screen, play and game over on each step."""

    def __init__(
        self,
        canvas: Canvas,
        game: TetrisGame,
        rng: RandomSource | None = None,
        clock: Callable[[], int] = _monotonic_ms,
    ) -> None:
        self.canvas = canvas
        self.game = game
        self._rng = rng if rng is not None else random.Random()
        self._clock = clock
        self.state = GameState.TITLE_SCREEN
        self._title = _TitleAnimation()
        self._cleared_game_over = False

    def _restart(self) -> None:
        self.canvas.fill_screen(COLOR_BLACK)
        self.game.reset()

    def step(self, buttons: ButtonState) -> GameState:
        """Run one frame with the given buttons and return the resulting state."""
        if self.state is GameState.TITLE_SCREEN:
            self.draw_title()
            if buttons.joyBtnPressed:
                self._restart()
                self.state = GameState.PLAYING
        elif self.state is GameState.PLAYING:
            if buttons.btnBPressed:
                self._restart()
            if not self.game.game_over:
                self.game.update(buttons)
                self.game.draw(self.canvas)
            else:
                self.state = GameState.GAME_OVER
        else:
            self._draw_game_over()
            if buttons.btnBPressed:
                self._cleared_game_over = False
                self._restart()
                self.state = GameState.PLAYING
        return self.state

    def _draw_game_over(self) -> None:
        canvas = self.canvas
        if not self._cleared_game_over:
            canvas.fill_rect(
                OFFSET_X, OFFSET_Y, FIELD_WIDTH * BLOCK_SIZE, FIELD_HEIGHT * BLOCK_SIZE, COLOR_BLACK
            )
            self._cleared_game_over = True
        canvas.set_text_size(2)
        canvas.set_text_color(COLOR_RED)
        canvas.set_cursor(35, 50)
        canvas.print("GAME")
        canvas.set_cursor(35, 68)
        canvas.print("OVER")
        canvas.set_text_size(1)
        canvas.set_text_color(COLOR_WHITE)
        canvas.set_cursor(25, 90)
        canvas.print("Score: ")
        canvas.print(self.game.score)
        canvas.set_cursor(20, 105)
        canvas.print("B to restart")

    def draw_title(self) -> None:
        """Draw one frame of the animated title screen."""
        canvas = self.canvas
        anim = self._title
        if anim.first_draw:
            canvas.fill_screen(TITLE_BACKGROUND)
            canvas.draw_rect(2, 2, 131, 236, COLOR_CYAN)
            canvas.draw_rect(3, 3, 129, 234, COLOR_CYAN)
            for i in range(3):
                anim.pieces[i] = self._rng.randrange(8)
                anim.colors[i] = self._rng.randrange(6)
                anim.piece_y[i] = 100 + i * 10
            anim.first_draw = False

        if self._clock() - anim.last_anim > ANIM_INTERVAL_MS:
            anim.piece_y = [y + 2 if y + 2 <= 135 else 100 for y in anim.piece_y]
            anim.last_anim = self._clock()

        self._draw_logo()

        canvas.fill_rect(48, 155, 30, 12, COLOR_WHITE)
        canvas.set_text_size(1)
        canvas.set_text_color(COLOR_BLACK)
        canvas.set_cursor(52, 157)
        canvas.print("v3.0")

        for kind, color_index, px, y, adjust in zip(
            anim.pieces, anim.colors, _TITLE_PIECE_X, anim.piece_y, _TITLE_PIECE_ADJUST_Y
        ):
            self._draw_title_piece(kind, _TITLE_PIECE_COLORS[color_index], px, y + adjust)

        canvas.set_text_color(COLOR_WHITE)
        canvas.set_text_size(1)
        canvas.set_cursor(10, 175)
        canvas.print("8 Unique Pieces")
        canvas.set_cursor(8, 188)
        canvas.print("Endless Challenge")

        if self._clock() - anim.last_blink > BLINK_INTERVAL_MS:
            anim.show_prompt = not anim.show_prompt
            anim.last_blink = self._clock()
            canvas.fill_rect(5, 205, 125, 30, TITLE_BACKGROUND)

        if anim.show_prompt:
            canvas.fill_rect(10, 208, 115, 22, COLOR_GREEN)
            canvas.draw_rect(10, 208, 115, 22, COLOR_YELLOW)
            canvas.set_text_color(COLOR_BLACK)
            canvas.set_text_size(1)
            canvas.set_cursor(15, 212)
            canvas.print("Press JoyC Btn")
            canvas.set_cursor(23, 220)
            canvas.print("to START!")

    def _draw_logo(self) -> None:
        bs = LETTER_BLOCK
        for x, letters in _TITLE_COLUMNS:
            y = 15
            for letter, color in letters:
                for dx, dy, w, h in _LETTERS[letter]:
                    self.canvas.fill_rect(x + dx * bs, y + dy * bs, w * bs, h * bs, color)
                y += bs * 6

    def _draw_title_piece(self, kind: int, color: int, px: int, py: int) -> None:
        pbs = PIECE_BLOCK
        canvas = self.canvas
        canvas.fill_rect(px - 1, py - 3, pbs * 3 + 2, pbs * 3 + 3, TITLE_BACKGROUND)
        piece = _TITLE_PIECES[kind % len(_TITLE_PIECES)]
        ox = px + (pbs // 2 if piece.half else 0)
        for dx, dy, w, h in piece.fills:
            canvas.fill_rect(ox + dx * pbs, py + dy * pbs, w * pbs, h * pbs, color)
        for dx, dy in piece.outlines:
            canvas.draw_rect(ox + dx * pbs, py + dy * pbs, pbs, pbs, COLOR_WHITE)


class _KeyboardJoystick:
    """Presents keyboard arrows and a rotate key as joystick readings."""

    CENTER = 2048
    LOW = 0
    HIGH = 4095

    def __init__(self) -> None:
        self.x = self.CENTER
        self.y = self.CENTER
        self.pressed = False

    def set_keys(self, left: bool, right: bool, up: bool, down: bool, rotate: bool) -> None:
        self.x = self.LOW if left else self.HIGH if right else self.CENTER
        self.y = self.HIGH if up else self.LOW if down else self.CENTER
        self.pressed = rotate

    def adc_value(self, index: int) -> int:
        if index == POS_X:
            return self.x
        if index == POS_Y:
            return self.y
        return 0

    def button_status(self) -> bool:
        return not self.pressed


def _render(pygame, screen, canvas: Canvas, scale: int, fonts: dict, palette: dict) -> None:
    data = bytearray()
    for y in range(canvas.height):
        for x in range(canvas.width):
            color = canvas.pixel(x, y)
            rgb = palette.get(color)
            if rgb is None:
                rgb = palette[color] = bytes(rgb565_to_rgb(color))
            data += rgb
    surface = pygame.image.frombuffer(bytes(data), (canvas.width, canvas.height), "RGB")
    screen.blit(
        pygame.transform.scale(surface, (canvas.width * scale, canvas.height * scale)), (0, 0)
    )
    for glyph in canvas.glyphs:
        font = fonts.get(glyph.size)
        if font is None:
            font = fonts[glyph.size] = pygame.font.Font(None, 11 * glyph.size * scale)
        image = font.render(glyph.char, True, rgb565_to_rgb(glyph.color))
        screen.blit(image, (glyph.x * scale, glyph.y * scale))
    pygame.display.flip()


def main(argv: Sequence[str] | None = None) -> int:
    """Play in a window: arrows move and drop, Space rotates, A holds, B restarts."""
    parser = argparse.ArgumentParser(prog="threetris", description="Falling blocks of three.")
    parser.add_argument("--scale", type=int, default=3, help="pixels per screen pixel")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    args = parser.parse_args(argv)
    if args.scale < 1:
        parser.error("--scale must be at least 1")

    import pygame

    pygame.init()
    try:
        screen = pygame.display.set_mode(
            (PORTRAIT_WIDTH * args.scale, PORTRAIT_HEIGHT * args.scale)
        )
        pygame.display.set_caption(TetrisGame.name)
        rng = random.Random(args.seed)
        clock = pygame.time.get_ticks
        canvas = Canvas(PORTRAIT_WIDTH, PORTRAIT_HEIGHT)
        app = App(canvas, TetrisGame(rng, clock), rng, clock)
        joystick = _KeyboardJoystick()
        controller = Controller(joystick)
        ticker = pygame.time.Clock()
        fonts: dict = {}
        palette: dict = {}
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT or (
                    event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE
                ):
                    return 0
            keys = pygame.key.get_pressed()
            joystick.set_keys(
                left=keys[pygame.K_LEFT],
                right=keys[pygame.K_RIGHT],
                up=keys[pygame.K_UP],
                down=keys[pygame.K_DOWN],
                rotate=keys[pygame.K_SPACE],
            )
            buttons = controller.update(bool(keys[pygame.K_a]), bool(keys[pygame.K_b]))
            app.step(buttons)
            _render(pygame, screen, canvas, args.scale, fonts, palette)
            ticker.tick(1000 // FRAME_DELAY_MS)
    finally:
        pygame.quit()