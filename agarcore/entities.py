"""Balls in the arena: pellets, food, viruses and player cells."""

from __future__ import annotations

import itertools
import time
from abc import ABC, abstractmethod

from .geometry import Location, Velocity, radius_conversion
from .settings import (
    CELL_EAT_MARGIN,
    CELL_MIN_SIZE,
    PLAYER_RATE,
    RECOMBINE_TIMER_SEC,
)

PELLET_MASS = 1
FOOD_MASS = 10
VIRUS_INITIAL_MASS = 100
CELL_EAT_REQUIREMENT = 25

_ball_ids = itertools.count(2)


class Ball(ABC):
    """A round thing at a position in the arena."""

    def __init__(self, x: float, y: float) -> None:
        self.x = float(x)
        self.y = float(y)
        self.id = next(_ball_ids)

    @abstractmethod
    def radius(self) -> float:
        """Radius of the ball."""

    @abstractmethod
    def mass(self) -> int:
        """Mass of the ball."""

    def height(self) -> float:
        return 2 * self.radius()

    def width(self) -> float:
        return 2 * self.radius()

    def collides_with(self, other: Ball) -> bool:
        """True when the centre of the smaller ball lies inside the larger one."""
        sqr_rads = max(self.radius(), other.radius()) ** 2
        return sqr_rads >= self._sqr_distance_to(other)

    def touches(self, other: Ball) -> bool:
        return self.touches_with_margin(other, 0)

    def touches_with_margin(self, other: Ball, margin: float) -> bool:
        sqr_rads = (self.radius() + other.radius()) ** 2
        return sqr_rads >= self._sqr_distance_to(other) + margin

    def can_eat(self, other: Ball) -> bool:
        return self.mass() > other.mass() * CELL_EAT_MARGIN

    def location(self) -> Location:
        return Location(self.x, self.y)

    def __lt__(self, other: Ball) -> bool:
        return self.id < other.id

    def __gt__(self, other: Ball) -> bool:
        return self.id > other.id

    def _sqr_distance_to(self, other: Ball) -> float:
        return (self.location() - other.location()).norm_sqr()


class MovingBall(Ball):
    """A ball that carries a velocity."""

    def __init__(self, x: float, y: float, velocity: Velocity | None = None) -> None:
        super().__init__(x, y)
        self.velocity = Velocity(velocity.dx, velocity.dy) if velocity else Velocity()

    def speed(self) -> float:
        return self.velocity.speed()

    def accelerate(self, accel: float, dt: float) -> None:
        self.velocity.accelerate(accel, dt)

    def decelerate(self, decel: float, dt: float) -> None:
        self.velocity.decelerate(decel, dt)

    def move(self, dt: float) -> None:
        self.x += self.velocity.dx * dt
        self.y += self.velocity.dy * dt


class Pellet(Ball):
    """A small static piece of mass scattered over the arena."""

    def radius(self) -> float:
        return radius_conversion(self.mass())

    def mass(self) -> int:
        return PELLET_MASS


class Food(MovingBall):
    """Mass ejected by a feeding player."""

    def radius(self) -> float:
        return radius_conversion(self.mass())

    def mass(self) -> int:
        return FOOD_MASS


class Virus(MovingBall):
    """A virus; grows when fed and pops cells that run into it."""

    def __init__(self, x: float, y: float, velocity: Velocity | None = None) -> None:
        super().__init__(x, y, velocity)
        self.num_food_hits = 0
        self._mass = VIRUS_INITIAL_MASS

    def radius(self) -> float:
        return radius_conversion(self.mass())

    def mass(self) -> int:
        return self._mass

    def set_mass(self, new_mass: float) -> None:
        self._mass = int(new_mass)


class Cell(MovingBall):
    """One of the cells that make up a player."""

    def __init__(
        self, x: float, y: float, mass: float, velocity: Velocity | None = None
    ) -> None:
        super().__init__(x, y, velocity)
        self.splitting_velocity = Velocity()
        self.recombine_timer = time.monotonic()
        self._can_recombine = False
        self._mass = 0
        self.set_mass(mass)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def radius(self) -> float:
        return radius_conversion(self.mass())

    def mass(self) -> int:
        return self._mass

    def can_eat(self, other: Ball) -> bool:
        """Cells may eat other cells only once they pass a minimum mass."""
        if isinstance(other, Cell) and self.mass() <= CELL_EAT_REQUIREMENT:
            return False
        return super().can_eat(other)

    def move(self, dt: float) -> None:
        self.x += (self.velocity.dx + self.splitting_velocity.dx) * dt
        self.y += (self.velocity.dy + self.splitting_velocity.dy) * dt

    def set_mass(self, new_mass: float) -> None:
        """Set the mass, never going below the minimum cell size."""
        new_mass = int(new_mass)
        if CELL_MIN_SIZE >= VIRUS_INITIAL_MASS:
            self._mass = new_mass
        else:
            self._mass = max(new_mass, CELL_MIN_SIZE)

    def increment_mass(self, inc: float) -> None:
        self.set_mass(self.mass() + inc)

    def reduce_mass_by_factor(self, factor: float) -> None:
        self.set_mass(self.mass() / factor)

    def can_recombine(self) -> bool:
        if self._can_recombine:
            return True
        self._can_recombine = time.monotonic() >= self.recombine_timer
        return self._can_recombine

    def reset_recombine_timer(self) -> None:
        self.recombine_timer = time.monotonic() + RECOMBINE_TIMER_SEC
        self._can_recombine = False

    def mass_decay(self, rate_modifier: float = 1.0) -> None:
        """Lose a fraction of mass proportional to the decay rate."""
        decayed = int(self.mass() * (1 - PLAYER_RATE * rate_modifier))
        self._mass = max(decayed, CELL_MIN_SIZE)