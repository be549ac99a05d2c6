import random

import pytest

from agarcore.colors import Color, random_color


def test_rgb_values_from_palette():
    assert Color.RED.rgb() == (1.0, 0.0, 0.0)
    assert Color.ORANGE.rgb() == (1.0, 0.65, 0.0)
    assert Color.PURPLE.rgb() == (0.6, 0.2, 0.8)


def test_rgb_primary_values():
    assert Color.GREEN.rgb() == (0.0, 1.0, 0.0)
    assert Color.BLUE.rgb() == (0.0, 0.0, 1.0)
    assert Color.YELLOW.rgb() == (1.0, 1.0, 0.0)


@pytest.mark.parametrize(
    "name", ["RED", "ORANGE", "YELLOW", "GREEN", "BLUE", "PURPLE"]
)
def test_rgb_components_in_range(name):
    components = Color[name].rgb()
    assert len(components) == 3
    assert all(0.0 <= c <= 1.0 for c in components)


def test_rgb_distinct():
    values = [
        Color.RED.rgb(),
        Color.ORANGE.rgb(),
        Color.YELLOW.rgb(),
        Color.GREEN.rgb(),
        Color.BLUE.rgb(),
        Color.PURPLE.rgb(),
    ]
    assert len(set(values)) == 6


def test_random_color_is_reproducible():
    first = [random_color(random.Random(7)) for _ in range(5)]
    second = [random_color(random.Random(7)) for _ in range(5)]
    assert first == second


def test_random_color_covers_palette():
    rng = random.Random(3)
    seen = {random_color(rng) for _ in range(500)}
    assert seen == set(Color)


def test_random_color_without_rng_is_a_member():
    assert random_color() in set(Color)