"""The falling-block game played with pieces of at most three blocks."""

from __future__ import annotations

import random
import time
from collections.abc import Callable
from enum import IntEnum
from typing import Protocol

from threetris.canvas import Canvas
from threetris.config import (
    COLOR_BLACK,
    COLOR_BLUE,
    COLOR_CYAN,
    COLOR_GREEN,
    COLOR_ORANGE,
    COLOR_PURPLE,
    COLOR_RED,
    COLOR_WHITE,
    COLOR_YELLOW,
)
from threetris.controls import ButtonState

BLOCK_SIZE = 10
FIELD_WIDTH = 10
FIELD_HEIGHT = 23
OFFSET_X = 5
OFFSET_Y = 10

GHOST_COLOR = 0x4208
INITIAL_DROP_SPEED = 500
LINE_SCORE = 100
HARD_DROP_SCORE = 2
SHIFT_REPEAT_MS = 80
ACTION_REPEAT_MS = 100

Cell = tuple[int, int]
Shape = tuple[Cell, Cell, Cell]


def _shape(dy: tuple[int, int, int], dx: tuple[int, int, int]) -> Shape:
    return tuple(zip(dy, dx))  # type: ignore[return-value]


class Piece(IntEnum):
    """The eight piece kinds, each with four clockwise rotations."""

    I = 0
    L = 1
    J = 2
    SINGLE = 3
    DOUBLE = 4
    DIAGONAL_DOUBLE = 5
    DIAGONAL_TRIPLE = 6
    T_MINUS = 7

    @property
    def color(self) -> int:
        return _COLORS[self]

    def rotation(self, rot: int) -> Shape:
        """The (dy, dx) offsets of the piece's blocks in a rotation."""
        return _SHAPES[self][rot % 4]


_SHAPES: dict[Piece, tuple[Shape, Shape, Shape, Shape]] = {
    Piece.I: (
        _shape((0, 0, 0), (-1, 0, 1)),
        _shape((-1, 0, 1), (0, 0, 0)),
        _shape((0, 0, 0), (-1, 0, 1)),
        _shape((-1, 0, 1), (0, 0, 0)),
    ),
    Piece.L: (
        _shape((-1, 0, 0), (0, 0, 1)),
        _shape((0, 0, 1), (1, 0, 0)),
        _shape((1, 0, 0), (0, 0, -1)),
        _shape((0, 0, -1), (-1, 0, 0)),
    ),
    Piece.J: (
        _shape((-1, 0, 0), (0, 0, -1)),
        _shape((0, 0, -1), (1, 0, 0)),
        _shape((1, 0, 0), (0, 0, 1)),
        _shape((0, 0, 1), (-1, 0, 0)),
    ),
    Piece.SINGLE: tuple(_shape((0, 0, 0), (0, 0, 0)) for _ in range(4)),  # type: ignore[dict-item]
    Piece.DOUBLE: (
        _shape((0, 0, 0), (-1, 0, 0)),
        _shape((-1, 0, 0), (0, 0, 0)),
        _shape((0, 0, 0), (-1, 0, 0)),
        _shape((-1, 0, 0), (0, 0, 0)),
    ),
    Piece.DIAGONAL_DOUBLE: (
        _shape((-1, 0, 0), (1, 0, 0)),
        _shape((0, 1, 0), (0, 1, 0)),
        _shape((-1, 0, 0), (1, 0, 0)),
        _shape((0, 1, 0), (0, 1, 0)),
    ),
    Piece.DIAGONAL_TRIPLE: (
        _shape((-1, 0, 1), (-1, 0, 1)),
        _shape((-1, 0, 1), (1, 0, -1)),
        _shape((-1, 0, 1), (-1, 0, 1)),
        _shape((-1, 0, 1), (1, 0, -1)),
    ),
    Piece.T_MINUS: (
        _shape((-1, 0, 0), (0, -1, 1)),
        _shape((0, -1, 1), (1, 0, 0)),
        _shape((1, 0, 0), (0, 1, -1)),
        _shape((0, 1, -1), (-1, 0, 0)),
    ),
}

_COLORS: dict[Piece, int] = {
    Piece.I: COLOR_CYAN,
    Piece.L: COLOR_BLUE,
    Piece.J: COLOR_ORANGE,
    Piece.SINGLE: COLOR_YELLOW,
    Piece.DOUBLE: COLOR_GREEN,
    Piece.DIAGONAL_DOUBLE: COLOR_RED,
    Piece.DIAGONAL_TRIPLE: COLOR_PURPLE,
    Piece.T_MINUS: COLOR_WHITE,
}


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int:
        ...


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


def lock_delay_for_level(level: int) -> int:
    """Milliseconds a landed piece may still move before it locks."""
    if level >= 16:
        return 600
    if level >= 11:
        return 500
    if level >= 6:
        return 400
    return 300


class TetrisGame:
    """Game state, rules and drawing. Field cells hold 0 or piece value + 1."""

    name = "THREETRIS"

    def __init__(
        self,
        rng: RandomSource | None = None,
        clock: Callable[[], int] = _monotonic_ms,
    ) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._clock = clock
        self._last_move = 0
        self._last_left_right = 0
        self._button_held = False
        self._last_score: int | None = None
        self._last_level: int | None = None
        self._last_lines: int | None = None
        self.reset()

    def _random_piece(self) -> Piece:
        return Piece(self._rng.randrange(len(Piece)))

    def reset(self) -> None:
        """Start a new game on an empty field."""
        self.field = [[0] * FIELD_WIDTH for _ in range(FIELD_HEIGHT)]
        self.score = 0
        self.level = 1
        self.lines_cleared = 0
        self.drop_speed = INITIAL_DROP_SPEED
        self.game_over = False
        self.needs_redraw = True
        self.last_drop_time = 0
        self.lock_delay_active = False
        self.lock_delay_start = 0
        self.held_piece: Piece | None = None
        self.next_piece = self._random_piece()
        self.can_hold = True
        self.current_piece = self.next_piece
        self.current_rot = 0
        self.pos_x = 0
        self.pos_y = 0
        self._new_piece(set_piece=False)

    def _new_piece(self, set_piece: bool) -> None:
        if set_piece:
            self.can_hold = True
        self.current_piece = self.next_piece
        self.next_piece = self._random_piece()
        self._spawn()

    def _spawn(self) -> None:
        self.current_rot = 0
        self.pos_x = FIELD_WIDTH // 2 - 1
        self.pos_y = 0
        self.lock_delay_active = False

    def update(self, buttons: ButtonState) -> None:
        """Apply input, then gravity and locking."""
        self.handle_input(buttons)
        now = self._clock()
        if now - self.last_drop_time <= self.drop_speed:
            return
        if self.collides(self.pos_y + 1, self.pos_x, self.current_piece, self.current_rot):
            if not self.lock_delay_active:
                self.lock_delay_active = True
                self.lock_delay_start = now
            if now - self.lock_delay_start >= lock_delay_for_level(self.level):
                self._place_piece()
                self._clear_lines()
                self._new_piece(set_piece=True)
                if self.collides(self.pos_y, self.pos_x, self.current_piece, self.current_rot):
                    self.game_over = True
        else:
            self.pos_y += 1
            self.lock_delay_active = False
        self.last_drop_time = now

    def _try_shift(self, dx: int, now: int) -> None:
        if not self.collides(self.pos_y, self.pos_x + dx, self.current_piece, self.current_rot):
            self.pos_x += dx
            if self.lock_delay_active:
                self.lock_delay_start = now
        self._last_left_right = now

    def handle_input(self, buttons: ButtonState) -> None:
        """Move, drop, rotate or hold the current piece from the button state."""
        now = self._clock()
        if buttons.down and now - self._last_left_right > SHIFT_REPEAT_MS:
            self._try_shift(-1, now)
        elif buttons.up and now - self._last_left_right > SHIFT_REPEAT_MS:
            self._try_shift(1, now)

        if now - self._last_move < ACTION_REPEAT_MS:
            return

        if buttons.leftPressed and not self._button_held:
            while not self.collides(
                self.pos_y + 1, self.pos_x, self.current_piece, self.current_rot
            ):
                self.pos_y += 1
                self.score += HARD_DROP_SCORE
            self.lock_delay_active = False
            self.last_drop_time = 0
        elif buttons.right:
            if not self.collides(
                self.pos_y + 1, self.pos_x, self.current_piece, self.current_rot
            ):
                self.pos_y += 1
                self.score += 1
                self.lock_delay_active = False
        elif buttons.joyBtnPressed and not self._button_held:
            new_rot = (self.current_rot + 1) % 4
            if not self.collides(self.pos_y, self.pos_x, self.current_piece, new_rot):
                self.current_rot = new_rot
                if self.lock_delay_active:
                    self.lock_delay_start = now
        elif buttons.btnAPressed and not self._button_held:
            self.hold()
        else:
            self._button_held = False
            return
        self._last_move = now
        self._button_held = True

    def collides(self, y: int, x: int, piece: Piece, rot: int) -> bool:
        """True when the piece at (x, y) leaves the field or overlaps a block.

        Blocks above the top edge are allowed.
        """
        for dy, dx in Piece(piece).rotation(rot):
            px, py = x + dx, y + dy
            if px < 0 or px >= FIELD_WIDTH or py >= FIELD_HEIGHT:
                return True
            if py >= 0 and self.field[py][px] > 0:
                return True
        return False

    def _place_piece(self) -> None:
        for x, y in self.cells():
            if 0 <= y < FIELD_HEIGHT and 0 <= x < FIELD_WIDTH:
                self.field[y][x] = self.current_piece + 1

    def _clear_lines(self) -> None:
        remaining = [row for row in self.field if not all(row)]
        cleared = FIELD_HEIGHT - len(remaining)
        if not cleared:
            return
        self.field = [[0] * FIELD_WIDTH for _ in range(cleared)] + remaining
        self.score += LINE_SCORE * cleared
        self.lines_cleared += cleared
        new_level = 1 + self.lines_cleared // 10
        if new_level > self.level:
            self.level = new_level
            speed_level = min(20, self.level)
            self.drop_speed = max(50, INITIAL_DROP_SPEED - (speed_level - 1) * 23)

    def drop_distance(self) -> int:
        """Rows the current piece can fall before it lands."""
        distance = 0
        for test_y in range(self.pos_y + 1, FIELD_HEIGHT):
            if self.collides(test_y, self.pos_x, self.current_piece, self.current_rot):
                break
            distance = test_y - self.pos_y
        return distance

    def hold(self) -> None:
        """Swap the current piece into the hold slot, once per placed piece."""
        if not self.can_hold:
            return
        if self.held_piece is None:
            self.held_piece = self.current_piece
            self._new_piece(set_piece=False)
        else:
            self.current_piece, self.held_piece = self.held_piece, self.current_piece
            self._spawn()
        self.can_hold = False
        self.lock_delay_active = False

    def cells(self) -> list[Cell]:
        """Field coordinates (x, y) of the current piece's blocks."""
        return [
            (self.pos_x + dx, self.pos_y + dy)
            for dy, dx in self.current_piece.rotation(self.current_rot)
        ]

    def _block_origin(self, x: int, y: int) -> Cell:
        return OFFSET_X + x * BLOCK_SIZE, OFFSET_Y + y * BLOCK_SIZE

    def _draw_block(self, canvas: Canvas, x: int, y: int, color: int) -> None:
        px, py = self._block_origin(x, y)
        canvas.fill_rect(px, py, BLOCK_SIZE - 1, BLOCK_SIZE - 1, color)
        canvas.draw_rect(px, py, BLOCK_SIZE - 1, BLOCK_SIZE - 1, COLOR_WHITE)

    def draw(self, canvas: Canvas) -> None:
        """Render the field, pieces, hold and next boxes, and counters."""
        if self.needs_redraw:
            canvas.set_rotation(0)
            canvas.fill_screen(COLOR_BLACK)
            canvas.draw_rect(
                OFFSET_X - 1,
                OFFSET_Y - 1,
                FIELD_WIDTH * BLOCK_SIZE + 1,
                FIELD_HEIGHT * BLOCK_SIZE + 1,
                COLOR_WHITE,
            )
            self._last_score = self._last_level = self._last_lines = None
            self.needs_redraw = False

        for y, row in enumerate(self.field):
            for x, value in enumerate(row):
                if value > 0:
                    self._draw_block(canvas, x, y, Piece(value - 1).color)
                else:
                    px, py = self._block_origin(x, y)
                    canvas.fill_rect(px, py, BLOCK_SIZE - 1, BLOCK_SIZE - 1, COLOR_BLACK)

        self._draw_ghost(canvas)

        for x, y in self.cells():
            if 0 <= y < FIELD_HEIGHT and 0 <= x < FIELD_WIDTH:
                self._draw_block(canvas, x, y, self.current_piece.color)

        self._draw_hold(canvas)
        self._draw_next(canvas)

        if self.score != self._last_score:
            canvas.fill_rect(110, 5, 50, 10, COLOR_BLACK)
            canvas.set_text_size(1)
            canvas.set_text_color(COLOR_WHITE)
            canvas.set_cursor(110, 5)
            canvas.print("S:")
            canvas.print(self.score)
            self._last_score = self.score

        if self.level != self._last_level:
            canvas.fill_rect(108, 120, 50, 10, COLOR_BLACK)
            canvas.set_text_size(1)
            canvas.set_text_color(COLOR_WHITE)
            canvas.set_cursor(108, 120)
            canvas.print("LV:")
            canvas.set_text_color(COLOR_GREEN)
            canvas.print(self.level)
            self._last_level = self.level

    def _draw_ghost(self, canvas: Canvas) -> None:
        distance = self.drop_distance()
        if distance <= 0:
            return
        for x, y in self.cells():
            y += distance
            if 0 <= y < FIELD_HEIGHT and 0 <= x < FIELD_WIDTH:
                px, py = self._block_origin(x, y)
                canvas.draw_rect(px, py, BLOCK_SIZE - 1, BLOCK_SIZE - 1, GHOST_COLOR)

    @staticmethod
    def _draw_mini_piece(canvas: Canvas, piece: Piece, x: int, y: int, scale: int) -> None:
        for dy, dx in piece.rotation(0):
            canvas.fill_rect(x + dx * scale, y + dy * scale, scale - 1, scale - 1, piece.color)

    def _draw_hold(self, canvas: Canvas) -> None:
        canvas.fill_rect(110, 15, 30, 30, COLOR_BLACK)
        canvas.draw_rect(109, 14, 32, 32, COLOR_WHITE)
        canvas.set_text_size(1)
        canvas.set_text_color(COLOR_WHITE)
        canvas.set_cursor(108, 48)
        canvas.print("HOLD")
        if self.held_piece is not None:
            self._draw_mini_piece(canvas, self.held_piece, 117, 22, 5)

        if self.lines_cleared != self._last_lines:
            canvas.fill_rect(108, 60, 50, 10, COLOR_BLACK)
            canvas.set_text_size(1)
            canvas.set_text_color(COLOR_WHITE)
            canvas.set_cursor(108, 60)
            canvas.print("L:")
            canvas.set_text_color(COLOR_CYAN)
            canvas.print(self.lines_cleared)
            self._last_lines = self.lines_cleared

    def _draw_next(self, canvas: Canvas) -> None:
        canvas.fill_rect(110, 75, 30, 30, COLOR_BLACK)
        canvas.draw_rect(109, 74, 32, 32, COLOR_WHITE)
        canvas.set_text_size(1)
        canvas.set_text_color(COLOR_WHITE)
        canvas.set_cursor(108, 108)
        canvas.print("NEXT")
        self._draw_mini_piece(canvas, self.next_piece, 117, 82, 5)