import pytest

from threetris.controls import ButtonState, Controller, buttons_from_readings

CENTER = 2048


def read(joy_x=CENTER, joy_y=CENTER, joy_button=True, a=False, b=False, previous=None):
    return buttons_from_readings(
        joy_x, joy_y, joy_button, a, b, previous or ButtonState()
    )


def test_centred_stick_presses_nothing():
    assert read() == ButtonState()


@pytest.mark.parametrize(
    "joy_x, joy_y, held",
    [
        (1000, CENTER, "down"),
        (3500, CENTER, "up"),
        (CENTER, 1000, "right"),
        (CENTER, 3500, "left"),
    ],
)
def test_directions_follow_swapped_axes(joy_x, joy_y, held):
    state = read(joy_x, joy_y)
    directions = {d for d in ("up", "down", "left", "right") if getattr(state, d)}
    assert directions == {held}
    assert getattr(state, held + "Pressed") is True


def test_thresholds_are_exclusive():
    assert read(joy_x=1200).down is False
    assert read(joy_x=3000).up is False
    assert read(joy_y=1600).right is False
    assert read(joy_y=3000).left is False


def test_stick_button_is_active_low():
    assert read(joy_button=False).joyBtn is True
    assert read(joy_button=True).joyBtn is False


def test_pressed_only_on_first_reading():
    first = read(joy_x=1000, a=True)
    second = read(joy_x=1000, a=True, previous=first)
    assert first.downPressed and first.btnAPressed
    assert second.down and second.btnA
    assert not second.downPressed and not second.btnAPressed


def test_release_then_press_again():
    held = read(b=True)
    released = read(previous=held)
    again = read(b=True, previous=released)
    assert released.btnB is False
    assert again.btnBPressed is True


class FakeJoystick:
    def __init__(self, samples):
        self.samples = list(samples)
        self.current = None

    def adc_value(self, index):
        if index == 0:
            self.current = self.samples.pop(0)
        return self.current[index]

    def button_status(self):
        return self.current[2]


def test_controller_tracks_edges_across_updates():
    joystick = FakeJoystick([(CENTER, CENTER, False), (CENTER, CENTER, False), (CENTER, CENTER, True)])
    controller = Controller(joystick)
    first = controller.update(False, False)
    second = controller.update(False, True)
    third = controller.update(False, True)
    assert first.joyBtnPressed is True
    assert second.joyBtn is True and second.joyBtnPressed is False
    assert second.btnBPressed is True
    assert third.joyBtn is False and third.btnBPressed is False
    assert controller.buttons == third