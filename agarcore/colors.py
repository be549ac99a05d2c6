"""Player colours."""

from __future__ import annotations

import random
from enum import Enum


class Color(Enum):
    """The colours a player's cells may be drawn in."""

    RED = 0
    ORANGE = 1
    YELLOW = 2
    GREEN = 3
    BLUE = 4
    PURPLE = 5

    def rgb(self) -> tuple[float, float, float]:
        """Red, green and blue components in the range 0 to 1."""
        return _RGB[self]


_RGB = {
    Color.RED: (1.0, 0.0, 0.0),
    Color.ORANGE: (1.0, 0.65, 0.0),
    Color.YELLOW: (1.0, 1.0, 0.0),
    Color.GREEN: (0.0, 1.0, 0.0),
    Color.BLUE: (0.0, 0.0, 1.0),
    Color.PURPLE: (0.6, 0.2, 0.8),
}


def random_color(rng: random.Random | None = None) -> Color:
    """Pick a colour uniformly at random."""
    chooser = rng if rng is not None else random
    return chooser.choice(list(Color))