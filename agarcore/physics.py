"""Movement limits, arena boundaries and collisions between a player's own cells."""

from __future__ import annotations

import math
from itertools import combinations
from typing import Sequence

from .entities import Ball, Cell
from .geometry import Location, clamp
from .settings import CELL_MAX_SPEED

_SELF_COLLISION_PASSES = 5
_EQUAL_MASS_TOLERANCE = 10


def max_speed(mass: float) -> float:
    """Top speed of a cell of the given mass; heavier cells are slower."""
    return CELL_MAX_SPEED / math.pow(mass, 0.439)


def split_speed(mass: float) -> float:
    """Launch speed of a cell split off with the given mass."""
    return clamp(3 * math.pow(max_speed(mass), 1.2), 20.0, 130.0)


def check_boundary_collisions(ball: Ball, arena_width: float, arena_height: float) -> None:
    """Keep ``ball`` wholly inside the arena (and never at a negative position)."""
    radius = ball.radius()
    ball.x = max(0.0, clamp(ball.x, radius, arena_width - radius))
    ball.y = max(0.0, clamp(ball.y, radius, arena_height - radius))


def _border_ratios(cell: Cell, arena_width: float, arena_height: float) -> tuple[float, float]:
    """Push ratios for a cell; a cell pinned to a wall takes the whole push on that axis."""
    ratio_x, ratio_y = 0.5, 0.5
    radius = cell.radius()
    if cell.x == radius or cell.x == arena_width - radius:
        ratio_x = 1.0
        cell.velocity.dx = 0.0
    if cell.y == radius or cell.y == arena_height - radius:
        ratio_y = 1.0
        cell.velocity.dy = 0.0
    return ratio_x, ratio_y


def avoid_static_overlap(
    cell_a: Cell, cell_b: Cell, arena_width: float, arena_height: float
) -> None:
    """Push two overlapping cells apart along the line between their centres."""
    dx = cell_b.x - cell_a.x
    dy = cell_b.y - cell_a.y
    dist = math.sqrt(dx * dx + dy * dy)
    target_dist = cell_a.radius() + cell_b.radius()
    if dist > target_dist:
        return

    spread = abs(dx) + abs(dy)
    if spread == 0:
        return
    x_ratio = dx / spread
    y_ratio = dy / spread
    depth = target_dist - dist

    a_ratio = _border_ratios(cell_a, arena_width, arena_height)
    b_ratio = _border_ratios(cell_b, arena_width, arena_height)

    cell_a.x -= x_ratio * depth * a_ratio[0]
    cell_a.y -= y_ratio * depth * a_ratio[1]
    cell_b.x += x_ratio * depth * b_ratio[0]
    cell_b.y += y_ratio * depth * b_ratio[1]

    check_boundary_collisions(cell_a, arena_width, arena_height)
    check_boundary_collisions(cell_b, arena_width, arena_height)


def separate_cells(cell_a: Cell, cell_b: Cell, player_target: Location) -> None:
    """Move the lighter of two overlapping cells out of the way.

    The lighter cell only moves when it is also the one farther from the
    player's target; otherwise neither cell moves.
    """
    dx = cell_b.x - cell_a.x
    dy = cell_b.y - cell_a.y
    dist = math.sqrt(dx * dx + dy * dy)
    target_dist = cell_a.radius() + cell_b.radius()
    if dist > target_dist:
        return

    spread = abs(dx) + abs(dy)
    if spread == 0:
        return
    x_ratio = dx / spread
    y_ratio = dy / spread

    diff_a = (player_target - cell_a.location()).norm_sqr()
    diff_b = (player_target - cell_b.location()).norm_sqr()
    depth = target_dist - dist

    a_is_lighter = cell_a.mass() < cell_b.mass()
    by_mass = 1 if a_is_lighter else -1
    by_target = 1 if diff_a >= diff_b else -1
    sign = by_target if by_mass == by_target else 0

    mover = cell_a if a_is_lighter else cell_b
    shift_x = x_ratio * depth * sign
    shift_y = y_ratio * depth * sign
    mover.x += -shift_x if dx >= 0 else shift_x
    mover.y += -shift_y if dy >= 0 else shift_y


def elastic_collision(cell_a: Cell, cell_b: Cell, dx: float, dy: float, dist: float) -> None:
    """Bounce two cells off each other along the normal ``(dx, dy) / dist``.

    Only the lighter cell's velocity changes; equal cells both change.
    """
    if dist == 0:
        return
    nx = dx / dist
    ny = dy / dist
    tx, ty = -ny, nx

    va, vb = cell_a.velocity, cell_b.velocity
    norm_a = va.dx * nx + va.dy * ny
    norm_b = vb.dx * nx + vb.dy * ny
    tan_a = va.dx * tx + va.dy * ty
    tan_b = vb.dx * tx + vb.dy * ty

    m1 = cell_a.mass()
    m2 = cell_b.mass()
    v1 = (norm_a * (m1 - m2) + 2.0 * m2 * norm_b) / (m1 + m2)
    v2 = (norm_b * (m2 - m1) + 2.0 * m1 * norm_a) / (m1 + m2)

    if m1 <= m2:
        va.dx = tx * tan_a + nx * v1
        va.dy = ty * tan_a + ny * v1
    if m1 >= m2:
        vb.dx = tx * tan_b + nx * v2
        vb.dy = ty * tan_b + ny * v2


def prevent_overlap(
    cell_a: Cell,
    cell_b: Cell,
    dt: float,
    player_target: Location,
    arena_width: float,
    arena_height: float,
) -> None:
    """Undo the last move of two overlapping cells, bounce them and move again."""
    dx = cell_b.x - cell_a.x
    dy = cell_b.y - cell_a.y
    dist = math.sqrt(dx * dx + dy * dy)
    target_dist = cell_a.radius() + cell_b.radius()
    if dist > target_dist:
        return

    for cell in (cell_a, cell_b):
        cell.x -= (cell.velocity.dx + cell.splitting_velocity.dx) * dt
        cell.y -= (cell.velocity.dy + cell.splitting_velocity.dy) * dt

    elastic_collision(cell_a, cell_b, dx, dy, dist)

    cell_a.move(dt)
    cell_b.move(dt)

    if cell_a.touches(cell_b):
        if abs(cell_a.mass() - cell_b.mass()) <= _EQUAL_MASS_TOLERANCE:
            avoid_static_overlap(cell_a, cell_b, arena_width, arena_height)
        else:
            separate_cells(cell_a, cell_b, player_target)

    check_boundary_collisions(cell_a, arena_width, arena_height)
    check_boundary_collisions(cell_b, arena_width, arena_height)


def resolve_self_collisions(
    cells: Sequence[Cell],
    dt: float,
    player_target: Location,
    arena_width: float,
    arena_height: float,
) -> bool:
    """Keep one player's cells from overlapping each other.

    Returns True if some cells still touched after the bounded number of
    passes (and were then pushed apart statically).
    """
    overlap = False
    for _ in range(_SELF_COLLISION_PASSES):
        overlap = False
        for cell_a, cell_b in combinations(cells, 2):
            if cell_a.touches(cell_b):
                overlap = True
                prevent_overlap(cell_a, cell_b, dt, player_target, arena_width, arena_height)
        if not overlap:
            break

    if overlap:
        for cell_a, cell_b in combinations(cells, 2):
            if cell_a.touches(cell_b):
                avoid_static_overlap(cell_a, cell_b, arena_width, arena_height)
    return overlap