import pytest

from threetris import config
from threetris.config import rgb565_to_rgb


def test_white_is_full_intensity():
    assert rgb565_to_rgb(config.COLOR_WHITE) == (255, 255, 255)


def test_black_is_zero():
    assert rgb565_to_rgb(config.COLOR_BLACK) == (0, 0, 0)


def test_red_has_only_red_channel():
    assert rgb565_to_rgb(config.COLOR_RED) == (255, 0, 0)


def test_primary_channels_are_separate():
    r, g, b = rgb565_to_rgb(config.COLOR_GREEN)
    assert r == 0 and b == 0 and g == rgb565_to_rgb(config.COLOR_WHITE)[1]
    r, g, b = rgb565_to_rgb(config.COLOR_BLUE)
    assert r == 0 and g == 0 and b == rgb565_to_rgb(config.COLOR_WHITE)[2]


def test_channels_stay_in_byte_range():
    for color in range(0, 0x10000, 97):
        assert all(0 <= c <= 255 for c in rgb565_to_rgb(color))


def test_conversion_is_monotonic_in_each_channel():
    reds = [rgb565_to_rgb(r << 11)[0] for r in range(32)]
    assert reds == sorted(reds)
    assert len(set(reds)) == 32


@pytest.mark.parametrize("bad", [-1, 0x10000])
def test_out_of_range_colour_is_rejected(bad):
    with pytest.raises(ValueError):
        rgb565_to_rgb(bad)