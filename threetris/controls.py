"""Turn joystick and button readings into game button states."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

POS_X = 0
POS_Y = 1

DOWN_BELOW = 1200
UP_ABOVE = 3000
RIGHT_BELOW = 1600
LEFT_ABOVE = 3000


@dataclass(frozen=True)
class ButtonState:
    """Held buttons plus the ones that went down since the previous reading."""

    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False
    btnA: bool = False
    btnB: bool = False
    joyBtn: bool = False
    upPressed: bool = False
    downPressed: bool = False
    leftPressed: bool = False
    rightPressed: bool = False
    btnAPressed: bool = False
    btnBPressed: bool = False
    joyBtnPressed: bool = False


def buttons_from_readings(
    joy_x: int,
    joy_y: int,
    joy_button: bool,
    btn_a: bool,
    btn_b: bool,
    previous: ButtonState,
) -> ButtonState:
    """Build a ButtonState from raw readings.

    The stick's axes are swapped for the device's orientation, and the raw
    stick button line reads False while pressed.
    """
    up = joy_x > UP_ABOVE
    down = joy_x < DOWN_BELOW
    right = joy_y < RIGHT_BELOW
    left = joy_y > LEFT_ABOVE
    joy_btn = not joy_button
    return ButtonState(
        up=up,
        down=down,
        left=left,
        right=right,
        btnA=btn_a,
        btnB=btn_b,
        joyBtn=joy_btn,
        upPressed=up and not previous.up,
        downPressed=down and not previous.down,
        leftPressed=left and not previous.left,
        rightPressed=right and not previous.right,
        btnAPressed=btn_a and not previous.btnA,
        btnBPressed=btn_b and not previous.btnB,
        joyBtnPressed=joy_btn and not previous.joyBtn,
    )


class Joystick(Protocol):
    def adc_value(self, index: int) -> int:
        ...

    def button_status(self) -> bool:
        ...


class Controller:
    """Polls a joystick and keeps the latest button state."""

    def __init__(self, joystick: Joystick) -> None:
        self.joystick = joystick
        self.buttons = ButtonState()

    def update(self, btn_a: bool, btn_b: bool) -> ButtonState:
        joy_x = self.joystick.adc_value(POS_X)
        joy_y = self.joystick.adc_value(POS_Y)
        joy_button = self.joystick.button_status()
        self.buttons = buttons_from_readings(
            joy_x, joy_y, joy_button, btn_a, btn_b, self.buttons
        )
        return self.buttons