import itertools
import time

import pytest

from agarcore.entities import (
    FOOD_MASS,
    PELLET_MASS,
    VIRUS_INITIAL_MASS,
    Cell,
    Food,
    Pellet,
    Virus,
)
from agarcore.geometry import Velocity, radius_conversion
from agarcore.settings import CELL_MIN_SIZE


def test_cell_construct():
    cell = Cell(100, 125, 25)
    assert cell.x == pytest.approx(100)
    assert cell.y == pytest.approx(125)
    assert cell.mass() == 25


def test_cell_position_mass():
    cell = Cell(100, 125, 25)
    assert cell.location().x == pytest.approx(100)
    assert cell.location().y == pytest.approx(125)
    assert cell.mass() == 25


_DXS = [-2 + 0.3 * k for k in range(14)]
_DTS = [0.25 * k for k in range(9)]


def test_cell_move():
    cell = Cell(0, 0, 1)
    for dx, dy, dt in itertools.product(_DXS, _DXS, _DTS):
        cell.x = 0
        cell.y = 0
        cell.velocity.dx = dx
        cell.velocity.dy = dy
        cell.move(dt)
        assert cell.x == pytest.approx(dt * dx)
        assert cell.y == pytest.approx(dt * dy)
        assert cell.location().x == pytest.approx(cell.x)
        assert cell.location().y == pytest.approx(cell.y)


def test_cell_move_includes_splitting_velocity():
    cell = Cell(0, 0, 25, Velocity(1, 2))
    cell.splitting_velocity = Velocity(3, 4)
    cell.move(0.5)
    assert cell.x == pytest.approx(2)
    assert cell.y == pytest.approx(3)


def test_cell_mass_never_below_minimum():
    cell = Cell(0, 0, 1)
    assert cell.mass() == CELL_MIN_SIZE
    cell.increment_mass(-100)
    assert cell.mass() == CELL_MIN_SIZE


def test_cell_increment_and_reduce():
    cell = Cell(0, 0, 101)
    cell.increment_mass(9)
    assert cell.mass() == 110
    cell.reduce_mass_by_factor(2)
    assert cell.mass() == 55


def test_cell_mass_decay():
    cell = Cell(0, 0, 1000)
    cell.mass_decay()
    assert 997 <= cell.mass() < 1000
    small = Cell(0, 0, CELL_MIN_SIZE)
    small.mass_decay(5.0)
    assert small.mass() == CELL_MIN_SIZE


def test_cell_eat_requirement():
    big = Cell(0, 0, 30)
    assert big.can_eat(Cell(0, 0, 25))
    assert not Cell(0, 0, 26).can_eat(Cell(0, 0, 25))
    assert Cell(0, 0, 25).can_eat(Pellet(0, 0))


def test_cell_cannot_eat_similar_virus():
    virus = Virus(0, 0)
    assert not Cell(0, 0, 105).can_eat(virus)
    assert Cell(0, 0, 200).can_eat(virus)


def test_collides_with():
    cell = Cell(0, 0, 100)
    assert cell.collides_with(Pellet(3, 0))
    assert not cell.collides_with(Pellet(10, 0))


def test_touches():
    a = Cell(0, 0, 25)
    assert a.touches(Cell(5, 0, 25))
    assert not a.touches(Cell(6, 0, 25))


def test_touches_with_margin_is_stricter():
    a = Cell(0, 0, 25)
    b = Cell(5, 0, 25)
    assert a.touches_with_margin(b, 0)
    assert not a.touches_with_margin(b, 10)


def test_dimensions():
    pellet = Pellet(1, 1)
    assert pellet.width() == pytest.approx(2 * radius_conversion(PELLET_MASS))
    assert pellet.height() == pellet.width()


def test_entity_masses():
    assert Pellet(0, 0).mass() == PELLET_MASS
    assert Food(0, 0).mass() == FOOD_MASS
    assert Virus(0, 0).mass() == VIRUS_INITIAL_MASS


def test_virus_set_mass_and_hits():
    virus = Virus(0, 0)
    virus.set_mass(110.7)
    virus.num_food_hits += 1
    assert virus.mass() == 110
    assert virus.num_food_hits == 1
    assert virus.radius() > radius_conversion(VIRUS_INITIAL_MASS)


def test_moving_ball_copies_velocity():
    vel = Velocity(3, 4)
    food = Food(0, 0, vel)
    food.decelerate(5, 0.5)
    assert vel == Velocity(3, 4)
    assert food.speed() == pytest.approx(2.5)


def test_moving_ball_accelerate_and_move():
    food = Food(0, 0, Velocity(3, 4))
    food.accelerate(5, 1)
    food.move(1)
    assert food.x == pytest.approx(6)
    assert food.y == pytest.approx(8)


def test_ids_increase_and_order():
    a = Cell(0, 0, 25)
    b = Cell(0, 0, 25)
    assert b.id > a.id
    assert a < b
    assert b > a
    assert sorted([b, a]) == [a, b]


def test_cell_equality_by_id():
    a = Cell(0, 0, 25)
    b = Cell(0, 0, 25)
    assert a == a
    assert a != b


def test_recombine_timer():
    cell = Cell(0, 0, 50)
    assert cell.can_recombine()
    cell.reset_recombine_timer()
    assert not cell.can_recombine()
    cell.recombine_timer = time.monotonic() - 1
    assert cell.can_recombine()