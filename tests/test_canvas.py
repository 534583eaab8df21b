import pytest

from threetris.canvas import Canvas, draw_centered_text, draw_text
from threetris.config import COLOR_BLACK, COLOR_RED, COLOR_WHITE, SCREEN_WIDTH


def count(canvas, color):
    return sum(
        canvas.pixel(x, y) == color
        for y in range(canvas.height)
        for x in range(canvas.width)
    )


def test_new_canvas_is_black():
    canvas = Canvas(8, 4)
    assert count(canvas, COLOR_BLACK) == 32


def test_fill_screen_sets_every_pixel():
    canvas = Canvas(6, 5)
    canvas.fill_screen(COLOR_RED)
    assert count(canvas, COLOR_RED) == 30


def test_fill_rect_covers_exact_area():
    canvas = Canvas(10, 10)
    canvas.fill_rect(2, 3, 4, 5, COLOR_RED)
    assert count(canvas, COLOR_RED) == 4 * 5
    assert canvas.pixel(2, 3) == COLOR_RED
    assert canvas.pixel(5, 7) == COLOR_RED
    assert canvas.pixel(6, 7) == COLOR_BLACK
    assert canvas.pixel(1, 3) == COLOR_BLACK


def test_fill_rect_is_clipped():
    canvas = Canvas(5, 5)
    canvas.fill_rect(-3, -3, 100, 100, COLOR_RED)
    assert count(canvas, COLOR_RED) == 25


def test_draw_rect_leaves_interior():
    canvas = Canvas(10, 10)
    canvas.draw_rect(1, 1, 5, 4, COLOR_WHITE)
    assert canvas.pixel(1, 1) == COLOR_WHITE
    assert canvas.pixel(5, 4) == COLOR_WHITE
    assert canvas.pixel(3, 2) == COLOR_BLACK
    assert count(canvas, COLOR_WHITE) == 2 * 5 + 2 * (4 - 2)


def test_rotation_swaps_dimensions():
    canvas = Canvas(135, 240)
    canvas.set_rotation(1)
    assert (canvas.width, canvas.height) == (240, 135)
    canvas.set_rotation(4)
    assert (canvas.width, canvas.height) == (135, 240)


@pytest.mark.parametrize("rotation", [0, 1, 2, 3])
def test_rotated_fill_keeps_area(rotation):
    canvas = Canvas(7, 11)
    canvas.set_rotation(rotation)
    canvas.fill_rect(1, 2, 3, 4, COLOR_RED)
    assert canvas.pixel(1, 2) == COLOR_RED
    assert canvas.pixel(3, 5) == COLOR_RED
    assert canvas.pixel(0, 0) == COLOR_BLACK
    canvas.set_rotation(0)
    assert count(canvas, COLOR_RED) == 12


def test_pixel_out_of_bounds():
    canvas = Canvas(4, 4)
    with pytest.raises(IndexError):
        canvas.pixel(4, 0)


def test_print_places_glyphs_and_advances_cursor():
    canvas = Canvas(100, 50)
    canvas.set_text_size(2)
    canvas.set_cursor(3, 4)
    canvas.print("AB")
    glyphs = canvas.glyphs
    assert [g.char for g in glyphs] == ["A", "B"]
    assert glyphs[1].x - glyphs[0].x == glyphs[0].size * 6
    assert canvas.cursor == (glyphs[1].x + 12, 4)


def test_print_number():
    canvas = Canvas(100, 50)
    canvas.print(42)
    assert "".join(g.char for g in canvas.glyphs) == "42"


def test_fill_rect_erases_text():
    canvas = Canvas(100, 50)
    draw_text(canvas, "HI", 10, 10, 1, COLOR_WHITE)
    canvas.fill_rect(10, 10, 6, 8, COLOR_BLACK)
    assert [g.char for g in canvas.glyphs] == ["I"]
    canvas.fill_screen(COLOR_BLACK)
    assert canvas.glyphs == []


def test_draw_text_sets_style():
    canvas = Canvas(100, 50)
    draw_text(canvas, "X", 5, 6, 3, COLOR_RED)
    (glyph,) = canvas.glyphs
    assert (glyph.x, glyph.y, glyph.size, glyph.color) == (5, 6, 3, COLOR_RED)


def test_centered_text_is_symmetric():
    canvas = Canvas(SCREEN_WIDTH, 135)
    draw_centered_text(canvas, "SCORE", 20, 2)
    glyphs = canvas.glyphs
    left = glyphs[0].x
    right = glyphs[-1].x + 6 * 2
    assert left == SCREEN_WIDTH - right
    assert all(g.color == COLOR_WHITE for g in glyphs)