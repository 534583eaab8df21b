# threetris

A small falling-block puzzle game in which every piece has at most three
cells. The game has eight pieces: the straight I, the L and J corners, a
single block, a domino, a two-cell diagonal, a three-cell diagonal and a
"T-minus-one" shape. Pieces fall into a field 10 cells wide and 23 cells
tall. A full row clears.

- A ghost outline shows where the current piece will land.
- You can hold a piece, once for each piece that locks.
- A box previews the next piece.
- A lock delay gives you time to move a piece after it lands: 300 ms at
  levels 1–5, 400 ms from level 6, 500 ms from level 11 and 600 ms from
  level 16.
- The game never ends by level. Every 10 cleared lines raise the level by
  one. Each level cuts the fall interval by 23 ms, starting at 500 ms and
  stopping at 50 ms at level 20.

## Installation

```
pip install .
```

The game window uses `pygame`.

## Playing

```
threetris [--scale N] [--seed N]
```

`--scale` sets how many window pixels draw one screen pixel. The default is
3 and the value must be at least 1. `--seed` seeds the random piece
generator. The screen is 135 × 240 pixels in portrait orientation.

| Key         | Action                                  |
|-------------|-----------------------------------------|
| Space       | start from the title screen; rotate clockwise |
| Left / Right| move the piece left / right             |
| Down        | soft drop (1 point per row)             |
| Up          | hard drop (2 points per row)            |
| A           | hold the piece                          |
| B           | restart, during play or after game over |
| Esc         | quit                                    |

Each cleared line scores 100 points. The game is over when a new piece has
no room to appear.

## Using the package in code

- `threetris.game.TetrisGame(rng, clock)` holds the rules and the state.
  `rng` is any object with `randrange`. `clock` returns milliseconds.
  - `update(buttons)` handles input, gravity and locking.
  - `handle_input(buttons)` applies the buttons only.
  - `collides(y, x, piece, rot)` checks whether a placement is blocked.
  - `drop_distance()` gives how far the piece can fall.
  - `hold()` moves the current piece to the hold slot.
  - `cells()` lists the `(x, y)` cells of the current piece.
  - `reset()` starts a new game.
  - `draw(canvas)` renders the game.
  - `threetris.game.Piece` lists the eight pieces, with their colours and
    rotations.
- `threetris.controls.ButtonState` stores the held buttons and the buttons
  just pressed. `buttons_from_readings(...)` builds one from raw joystick
  and button readings. `Controller(joystick).update(btn_a, btn_b)` reads
  a joystick and returns a new state.
- `threetris.canvas.Canvas(width, height)` is an in-memory RGB565 frame
  buffer. It supports rotation, filled and outlined rectangles, and a text
  layer. Read pixels back with `pixel(x, y)` and glyphs with `glyphs`.
  `draw_text` and `draw_centered_text` are helpers for drawing text on it.
- `threetris.config.rgb565_to_rgb` converts a 16-bit colour to an 8-bit RGB
  triple.
- `threetris.app.App(canvas, game, rng, clock)` switches between the title
  screen, play and game over. `step(buttons)` runs one frame.
- `threetris.minijoyc.MiniJoyC(bus, address, sleep)` drives a Mini JoyC I²C
  joystick unit at the register level. It reads ADC values, positions in
  8-bit or 10-bit mode (`PosReadMode`), the button and calibration. It also
  sets the LED colour, calibration values and the unit's I²C address.

## What it does not do

`MiniJoyC` does not open an I²C bus. You supply the bus, as any object with
`write(address, data)` and `read(address, length)` (the `I2CBus` protocol).
The `threetris` command does not use the joystick unit. It takes keyboard
input only. Text appears in pygame's default font, not a pixel font, and the
game keeps no high-score table.

## Running the tests

```
pip install .[test]
pytest
```