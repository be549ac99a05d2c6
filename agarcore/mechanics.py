"""Game rules that change masses: splitting, eating, feeding, viruses and decay."""

from __future__ import annotations

import math
from typing import MutableSequence

from .entities import FOOD_MASS, VIRUS_INITIAL_MASS, Cell, Food, Virus
from .geometry import Location, Velocity, clamp, div_round_up
from .physics import check_boundary_collisions, max_speed, split_speed
from .player import Player
from .settings import (
    ANTI_TEAM_ACTIVATION_TIME,
    CELL_MIN_SIZE,
    CELL_POP_REDUCTION,
    CELL_POP_SIZE,
    CELL_SPLIT_MINIMUM,
    DECAY_FOR_NUM_SECONDS,
    FOOD_SPEED,
    NUMBER_OF_FOOD_HITS,
)

_TICKS_PER_SECOND = 60
_ANTI_TEAM_GROWTH = 1.1
# a virus spawned by overfeeding is pushed this many ticks ahead along the food's path
_NEW_VIRUS_PUSH = 10


def split_cell(
    cell: Cell, target: Location, arena_width: float, arena_height: float
) -> Cell | None:
    """Split ``cell`` in half towards ``target``.

    Returns the newly created cell, or None if ``cell`` is too small to split.
    """
    if cell.mass() < CELL_SPLIT_MINIMUM or cell.mass() < 2 * CELL_MIN_SIZE:
        return None

    split_mass = cell.mass() // 2
    cell.set_mass(cell.mass() - split_mass)

    direction = (target - cell.location()).normed()
    radius = cell.radius()
    loc = cell.location() + direction * radius
    loc.x = max(0.0, clamp(loc.x, radius, arena_width - radius))
    loc.y = max(0.0, clamp(loc.y, radius, arena_height - radius))

    speed = split_speed(split_mass)
    velocity = Velocity(direction.x * speed, direction.y * speed)

    new_cell = Cell(loc.x, loc.y, split_mass, velocity)
    new_cell.splitting_velocity = Velocity(velocity.dx, velocity.dy)

    cell.reset_recombine_timer()
    new_cell.reset_recombine_timer()
    return new_cell


def disrupt(cell: Cell, virus: Virus, create_limit: int) -> list[Cell]:
    """Pop ``cell`` on ``virus``, returning the small cells that burst out of it."""
    total_mass = cell.mass()

    # shrink by roughly CELL_POP_REDUCTION, keeping the removed mass a multiple
    # of CELL_POP_SIZE
    cell.reduce_mass_by_factor(CELL_POP_REDUCTION)
    cell.increment_mass((total_mass - cell.mass()) % CELL_POP_SIZE)

    pop_mass = total_mass - cell.mass()
    num_new_cells = min(div_round_up(pop_mass, CELL_POP_SIZE), create_limit)

    remaining_mass = pop_mass
    theta = cell.velocity.direction()
    created: list[Cell] = []
    for c in range(max(num_new_cells, 0)):
        dvel_angle = cell.velocity.direction() + 2 * math.pi * c / num_new_cells
        burst = Velocity.from_angle(theta + dvel_angle, max_speed(CELL_POP_SIZE))
        new_mass = min(remaining_mass, CELL_POP_SIZE)

        new_cell = Cell(virus.x, virus.y, new_mass, cell.velocity)
        new_cell.splitting_velocity = burst
        new_cell.reset_recombine_timer()
        created.append(new_cell)
        remaining_mass -= new_mass

    cell.reset_recombine_timer()
    return created


def recombine_cells(player: Player) -> None:
    """Merge every pair of the player's touching cells that may recombine."""
    cells = player.cells
    # The list shrinks while it is walked: a merged cell is swapped with the
    # last one and dropped, and the swapped-in cell is examined next.
    i = 0
    while i < len(cells):
        cell = cells[i]
        if cell.can_recombine():
            j = i + 1
            while j < len(cells):
                other = cells[j]
                if other.can_recombine() and cell.touches(other):
                    cell.increment_mass(other.mass())
                    cells[j] = cells[-1]
                    cells.pop()
                else:
                    j += 1
        i += 1


def eat_food(cell: Cell, foods: MutableSequence[Food]) -> int:
    """Let ``cell`` eat every food it covers; returns how many were eaten."""
    if cell.mass() < FOOD_MASS:
        return 0
    kept = [food for food in foods if not (cell.can_eat(food) and cell.collides_with(food))]
    num_eaten = len(foods) - len(kept)
    foods[:] = kept
    cell.increment_mass(num_eaten * FOOD_MASS)
    return num_eaten


def emit_foods(player: Player, foods: MutableSequence[Food]) -> list[Food]:
    """Eject one food from each large enough cell towards the player's target."""
    emitted: list[Food] = []
    for cell in player.cells:
        if cell.mass() < CELL_MIN_SIZE + FOOD_MASS:
            continue
        direction = (player.target - cell.location()).normed()
        loc = cell.location() + direction * cell.radius()
        velocity = Velocity(direction.x * FOOD_SPEED, direction.y * FOOD_SPEED)
        food = Food(loc.x, loc.y, velocity)
        foods.append(food)
        emitted.append(food)
        cell.increment_mass(-food.mass())
    return emitted


def eat_others(player: Player, cell: Cell) -> int:
    """Let ``cell`` eat any of ``player``'s cells it covers; returns the count."""
    original_mass = player.mass()
    original_size = len(player.cells)
    player.cells[:] = [
        other
        for other in player.cells
        if not (cell.collides_with(other) and cell.can_eat(other))
    ]
    cell.increment_mass(original_mass - player.mass())
    return original_size - len(player.cells)


def hit_virus(
    food: Food,
    food_velocity: Velocity,
    viruses: MutableSequence[Virus],
    dt: float,
    arena_width: float,
    arena_height: float,
) -> bool:
    """Feed the first virus ``food`` runs into; returns True if it hit one.

    A virus fed too often returns to its initial mass and spawns a new virus
    travelling along the food's path.
    """
    for virus in viruses:
        if not food.collides_with(virus):
            continue
        if virus.num_food_hits >= NUMBER_OF_FOOD_HITS:
            virus.num_food_hits = 0
            virus.set_mass(VIRUS_INITIAL_MASS)

            new_virus = Virus(virus.x, virus.y, food_velocity)
            new_virus.move(dt * _NEW_VIRUS_PUSH)
            check_boundary_collisions(new_virus, arena_width, arena_height)
            new_virus.set_mass(VIRUS_INITIAL_MASS)
            viruses.append(new_virus)
        else:
            virus.num_food_hits += 1
            virus.set_mass(virus.mass() + FOOD_MASS)
        return True
    return False


def maybe_activate_anti_team(player: Player) -> None:
    """Speed up a player's mass decay if it ate viruses within the last minute."""
    fall_off_time = player.elapsed_ticks - _TICKS_PER_SECOND * ANTI_TEAM_ACTIVATION_TIME
    player.virus_eaten_ticks = [
        tick for tick in player.virus_eaten_ticks if tick >= fall_off_time
    ]
    n_eaten = len(player.virus_eaten_ticks)
    if n_eaten == 0:
        return
    player.anti_team_decay = math.pow(_ANTI_TEAM_GROWTH, n_eaten - 1)


def decay_player_mass(player: Player) -> bool:
    """Decay every cell of the player if enough ticks passed; returns True if it did."""
    ticks_since_decay = player.elapsed_ticks - player.last_decay_tick
    if ticks_since_decay < _TICKS_PER_SECOND * DECAY_FOR_NUM_SECONDS:
        return False
    for cell in player.cells:
        cell.mass_decay(player.anti_team_decay)
    player.last_decay_tick = player.elapsed_ticks
    return True