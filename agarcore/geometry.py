"""Planar coordinates, velocities and mass/radius conversions."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum

from .settings import MASS_AREA_RATIO


class Action(IntEnum):
    """What a player asks its cells to do on a tick."""

    NONE = 0
    FEED = 1
    SPLIT = 2


@dataclass
class Coordinate:
    """A point (or displacement) in the arena."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Coordinate) -> Coordinate:
        return Coordinate(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Coordinate) -> Coordinate:
        return Coordinate(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Coordinate:
        if not isinstance(factor, (int, float)):
            return NotImplemented
        return Coordinate(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> Coordinate:
        if not isinstance(divisor, (int, float)):
            return NotImplemented
        return Coordinate(self.x / divisor, self.y / divisor)

    def __str__(self) -> str:
        return f"({self.x:g}, {self.y:g})"

    def norm_sqr(self) -> float:
        return self.x * self.x + self.y * self.y

    def norm(self) -> float:
        return math.sqrt(self.norm_sqr())

    def normalize(self) -> None:
        """Scale this vector in place to unit length (a zero vector stays zero)."""
        unit = self.normed()
        self.x, self.y = unit.x, unit.y

    def normed(self) -> Coordinate:
        """Return a unit-length copy; a zero vector yields a zero vector."""
        length = self.norm()
        if length == 0:
            return Coordinate(0.0, 0.0)
        return self / length

    def distance_to(self, other: Coordinate) -> float:
        return (other - self).norm()


Location = Coordinate


@dataclass
class Velocity:
    """A velocity vector in arena units per second."""

    dx: float = 0.0
    dy: float = 0.0

    @classmethod
    def from_angle(cls, angle: float, speed: float) -> Velocity:
        return cls(speed * math.cos(angle), speed * math.sin(angle))

    def set_speed(self, new_speed: float) -> None:
        """Rescale the components towards ``new_speed``."""
        if self.speed() == 0:
            return
        self.dx *= new_speed / self.speed()
        if self.speed() == 0:
            return
        self.dy *= new_speed / self.speed()

    def direction(self) -> float:
        if self.dy != 0:
            angle = math.atan(self.dx / self.dy)
        elif self.dx != 0:
            angle = math.copysign(math.pi / 2, self.dx)
        else:
            angle = 0.0
        if self.dx < 0:
            angle = angle + math.pi if self.dy > 0 else angle - math.pi
        return angle

    def clamp_speed(self, low: float, high: float) -> None:
        if self.speed() > high:
            self.set_speed(high)
        elif self.speed() < low:
            self.set_speed(low)

    def accelerate(self, acc: float, dt: float) -> None:
        """Grow the magnitude by ``acc * dt`` keeping the direction."""
        magnitude = self.magnitude()
        if magnitude == 0:
            return
        x_ratio = self.dx / magnitude
        y_ratio = self.dy / magnitude
        self.dx += x_ratio * acc * dt
        self.dy += y_ratio * acc * dt

    def decelerate(self, decel: float, dt: float) -> None:
        """Shrink the magnitude by ``decel * dt``, stopping at zero."""
        magnitude = self.magnitude()
        if magnitude == 0:
            self.dx = 0.0
            self.dy = 0.0
            return
        ddx = self.dx / magnitude * decel
        ddy = self.dy / magnitude * decel
        self.dx = self.dx - ddx * dt if abs(ddx * dt) <= abs(self.dx) else 0.0
        self.dy = self.dy - ddy * dt if abs(ddy * dt) <= abs(self.dy) else 0.0

    def magnitude(self) -> float:
        return math.sqrt(self.dx * self.dx + self.dy * self.dy)

    def speed(self) -> float:
        return self.magnitude()

    def __add__(self, other: Velocity) -> Velocity:
        return Velocity(self.dx + other.dx, self.dy + other.dy)

    def __sub__(self, other: Velocity) -> Velocity:
        return Velocity(self.dx - other.dx, self.dy - other.dy)

    def __mul__(self, factor: float) -> Velocity:
        if not isinstance(factor, (int, float)):
            return NotImplemented
        return Velocity(self.dx * factor, self.dy * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> Velocity:
        if not isinstance(divisor, (int, float)):
            return NotImplemented
        return Velocity(self.dx / divisor, self.dy / divisor)


def radius_conversion(mass: float) -> float:
    """Radius of a ball of the given mass."""
    area = mass / MASS_AREA_RATIO
    return math.sqrt(area / math.pi)


def mass_conversion(radius: float) -> int:
    """Mass of a ball of the given radius, rounded to a whole unit."""
    area = math.pi * radius ** 2
    return int(round(MASS_AREA_RATIO * area))


def clamp(x, low, high):
    return max(min(x, high), low)


def div_round_up(num: int, denom: int) -> int:
    return (num + denom - 1) // denom