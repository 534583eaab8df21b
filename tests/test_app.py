import random

import pytest

from threetris.app import App, GameState
from threetris.canvas import Canvas
from threetris.config import COLOR_BLACK, COLOR_CYAN, COLOR_GREEN, COLOR_PURPLE, COLOR_WHITE
from threetris.controls import ButtonState
from threetris.game import OFFSET_X, OFFSET_Y, TetrisGame

NOTHING = ButtonState()
JOY = ButtonState(joyBtn=True, joyBtnPressed=True)
RESTART = ButtonState(btnB=True, btnBPressed=True)


class FakeClock:
    def __init__(self) -> None:
        self.now = 0

    def __call__(self) -> int:
        return self.now


@pytest.fixture
def setup():
    clock = FakeClock()
    rng = random.Random(7)
    canvas = Canvas(135, 240)
    game = TetrisGame(rng, clock)
    return App(canvas, game, rng, clock), canvas, game, clock


def text_at(canvas: Canvas, y: int) -> str:
    return "".join(g.char for g in canvas.glyphs if g.y == y)


def test_starts_on_title_screen(setup):
    app, canvas, _, _ = setup
    assert app.state is GameState.TITLE_SCREEN
    assert app.step(NOTHING) is GameState.TITLE_SCREEN


def test_title_draws_logo_and_version(setup):
    app, canvas, _, _ = setup
    app.step(NOTHING)
    assert canvas.pixel(15, 15) == COLOR_CYAN
    assert canvas.pixel(75, 15) == COLOR_PURPLE
    assert text_at(canvas, 157) == "v3.0"
    assert text_at(canvas, 175) == "8UniquePieces"


def test_title_prompt_blinks(setup):
    app, canvas, _, clock = setup
    app.step(NOTHING)
    assert canvas.pixel(12, 210) == COLOR_GREEN
    clock.now = 700
    app.step(NOTHING)
    assert canvas.pixel(12, 210) == 0x0010
    assert text_at(canvas, 212) == ""
    clock.now = 1400
    app.step(NOTHING)
    assert canvas.pixel(12, 210) == COLOR_GREEN


def test_title_pieces_stay_in_band(setup):
    app, _, _, clock = setup
    for frame in range(60):
        clock.now = frame * 150
        app.step(NOTHING)
        assert all(100 <= y <= 135 for y in app._title.piece_y)


def test_joystick_button_starts_game(setup):
    app, canvas, game, _ = setup
    game.score = 42
    assert app.step(JOY) is GameState.PLAYING
    assert game.score == 0
    assert not game.game_over


def test_playing_draws_field_border(setup):
    app, canvas, game, clock = setup
    app.step(JOY)
    clock.now = 50
    app.step(NOTHING)
    assert canvas.pixel(OFFSET_X - 1, OFFSET_Y - 1) == COLOR_WHITE


def test_restart_while_playing_resets_score(setup):
    app, _, game, _ = setup
    app.step(JOY)
    game.score = 55
    app.step(RESTART)
    assert app.state is GameState.PLAYING
    assert game.score == 0


def test_game_over_transition_and_screen(setup):
    app, canvas, game, _ = setup
    app.step(JOY)
    game.game_over = True
    game.score = 9
    assert app.step(NOTHING) is GameState.GAME_OVER
    app.step(NOTHING)
    assert text_at(canvas, 50) == "GAME"
    assert text_at(canvas, 68) == "OVER"
    assert text_at(canvas, 90) == "Score:" + str(game.score)
    assert canvas.pixel(OFFSET_X + 1, OFFSET_Y + 1) == COLOR_BLACK


def test_game_over_restart_returns_to_play(setup):
    app, _, game, _ = setup
    app.step(JOY)
    game.game_over = True
    app.step(NOTHING)
    assert app.step(RESTART) is GameState.PLAYING
    assert not game.game_over
    assert game.score == 0


def test_game_over_ignores_other_buttons(setup):
    app, _, game, _ = setup
    app.step(JOY)
    game.game_over = True
    app.step(NOTHING)
    assert app.step(JOY) is GameState.GAME_OVER