"""The game engine: advances the arena one tick at a time."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from datetime import timedelta
from itertools import combinations
from typing import Iterable, Iterator, Sequence

from .entities import PELLET_MASS, VIRUS_INITIAL_MASS, Ball, Cell, Food, Pellet, Virus
from .game_state import GameConfig, GameState
from .geometry import Action, Location, Velocity, radius_conversion
from .mechanics import (
    decay_player_mass,
    disrupt,
    eat_food,
    eat_others,
    emit_foods,
    hit_virus,
    maybe_activate_anti_team,
    recombine_cells,
    split_cell,
)
from .physics import check_boundary_collisions, max_speed, resolve_self_collisions
from .player import UNASSIGNED_PID, Player
from .settings import (
    CELL_MIN_SIZE,
    DEFAULT_ARENA_HEIGHT,
    DEFAULT_ARENA_WIDTH,
    DEFAULT_NUM_PELLETS,
    DEFAULT_NUM_VIRUSES,
    FOOD_DECEL,
    MAX_MASS_IN_THE_GAME,
    NEW_MASS_IF_NO_SPLIT,
    NUM_CELLS_TO_SPLIT,
    PLAYER_CELL_LIMIT,
    SPLIT_DECELERATION,
)

_PELLET_GRID_SIZE = 510
_VIRUS_GRID_SIZE = 25
_REGEN_INTERVAL_TICKS = 720
_ACTION_INTERVAL_TICKS = 10
_DECAY_INTERVAL_TICKS = 60
_FEED_COOLDOWN = 10
_SPLIT_COOLDOWN = 30


class EngineError(RuntimeError):
    """Raised for invalid requests to the engine."""


@dataclass(frozen=True)
class _Mode:
    mass_decay: bool
    squared_pellets: bool
    regen_pellets: bool
    agent_mass: int


_BASE_MODES = {
    0: _Mode(True, False, True, 25),
    1: _Mode(False, True, False, 25),
    2: _Mode(True, True, False, 25),
    3: _Mode(False, False, True, 25),
    4: _Mode(True, False, True, 25),
}
_MODES = {
    **_BASE_MODES,
    5: _Mode(True, True, False, 1000),
    6: _Mode(True, False, True, 1000),
    **{number: _BASE_MODES[4] for number in (7, 8, 9, 10)},
}


class _Grid:
    """Buckets ball indices by square regions of the arena."""

    def __init__(
        self, balls: Sequence[Ball], size: int, arena_width: float, arena_height: float
    ) -> None:
        self.size = size
        self.columns = int((arena_width + size - 1) / size)
        self.rows = int((arena_height + size - 1) / size)
        self.buckets: dict[tuple[int, int], list[int]] = {}
        for index, ball in enumerate(balls):
            key = (int(ball.x) // size, int(ball.y) // size)
            self.buckets.setdefault(key, []).append(index)

    def near(self, x: float, y: float) -> Iterator[int]:
        """Indices of balls in the region holding (x, y) and its eight neighbours."""
        gx = int(x) // self.size
        gy = int(y) // self.size
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                nx, ny = gx + dx, gy + dy
                if 0 <= nx < self.columns and 0 <= ny < self.rows:
                    yield from self.buckets.get((nx, ny), ())


def _seconds(elapsed: float | timedelta) -> float:
    if isinstance(elapsed, timedelta):
        return elapsed.total_seconds()
    return float(elapsed)


class Engine:
    """Runs one game: spawns entities, moves players and applies the rules."""

    def __init__(
        self,
        arena_width: float = DEFAULT_ARENA_WIDTH,
        arena_height: float = DEFAULT_ARENA_HEIGHT,
        num_pellets: int = DEFAULT_NUM_PELLETS,
        num_viruses: int = DEFAULT_NUM_VIRUSES,
        pellet_regen: bool = True,
        mode_number: int = 0,
    ) -> None:
        if mode_number not in _MODES:
            raise EngineError("Invalid mode number")
        self.state = GameState(
            GameConfig(
                float(arena_width),
                float(arena_height),
                num_pellets,
                num_viruses,
                pellet_regen,
            )
        )
        self.mode_number = mode_number
        self._mode = _MODES[mode_number]

    # ----- accessors -----

    def ticks(self) -> int:
        """Number of ticks that have elapsed in the game."""
        return self.state.ticks

    def players(self) -> dict[int, Player]:
        return self.state.players

    def pellets(self) -> list[Pellet]:
        return self.state.pellets

    def foods(self) -> list[Food]:
        return self.state.foods

    def viruses(self) -> list[Virus]:
        return self.state.viruses

    def arena_width(self) -> float:
        return self.state.config.arena_width

    def arena_height(self) -> float:
        return self.state.config.arena_height

    def player_count(self) -> int:
        return len(self.state.players)

    def pellet_count(self) -> int:
        return len(self.state.pellets)

    def virus_count(self) -> int:
        return len(self.state.viruses)

    def food_count(self) -> int:
        return len(self.state.foods)

    def pellet_regen(self) -> bool:
        return self.state.config.pellet_regen

    # ----- players -----

    def add_player(self, player_cls: type[Player] = Player, name: str = "") -> int:
        """Create a player of ``player_cls``, spawn it and return its id."""
        pid = self.state.next_pid
        self.state.next_pid += 1
        player = player_cls(pid, name) if name else player_cls(pid)
        self.state.players[pid] = player
        self.respawn(player)
        return pid

    def player(self, pid: int) -> Player:
        try:
            return self.state.players[pid]
        except KeyError:
            raise EngineError(f"Player ID: {pid} does not exist.") from None

    def respawn(self, player: Player) -> None:
        """Kill ``player`` and give it a single fresh cell."""
        player.kill()
        player_mass = max(CELL_MIN_SIZE, self._mode.agent_mass)
        min_radius = radius_conversion(CELL_MIN_SIZE)
        if self.state.pellets and self._mode.squared_pellets:
            loc = self.state.pellets[0].location()
            loc.x = min(loc.x + 2 * min_radius, self.arena_width() - min_radius)
            loc.y = min(loc.y + 2 * min_radius, self.arena_height() - min_radius)
        else:
            loc = self.random_location(min_radius)
        player.add_cell(loc, player_mass)

    # ----- game lifecycle -----

    def reset(self) -> None:
        """Clear the game and populate the arena afresh."""
        self.state.clear()
        self.initialize_game()

    def reset_state(self) -> None:
        """Clear the game, restart player ids and reseed the generator randomly."""
        self.state.clear()
        self.state.ticks = 0
        self.state.next_pid = 0
        self.state.main_agent_pid = UNASSIGNED_PID
        self.state.rng.seed()

    def initialize_game(self) -> None:
        if self._mode.squared_pellets:
            self._create_squared_pellets()
        else:
            self._add_pellets(self.state.config.target_num_pellets)
        self._add_viruses(self.state.config.target_num_viruses)

    def random_location(self, radius: float = 0.0) -> Location:
        """A uniformly random point at least ``radius`` from every wall."""
        rng = self.state.rng
        x = rng.uniform(0, self.arena_width() - 2 * radius) + radius
        y = rng.uniform(0, self.arena_height() - 2 * radius) + radius
        return Location(x, y)

    def seed(self, s: int) -> None:
        self.state.rng.seed(s)

    def tick(self, elapsed_seconds: float | timedelta) -> None:
        """Advance the game by one tick lasting ``elapsed_seconds``."""
        dt = _seconds(elapsed_seconds)
        width, height = self.arena_width(), self.arena_height()
        pellet_grid = _Grid(self.state.pellets, _PELLET_GRID_SIZE, width, height)
        virus_grid = _Grid(self.state.viruses, _VIRUS_GRID_SIZE, width, height)
        eaten_pellets: set[int] = set()
        eaten_viruses: set[int] = set()

        for player in list(self.state.players.values()):
            if not player.dead():
                self._tick_player(
                    player, dt, pellet_grid, virus_grid, eaten_pellets, eaten_viruses
                )

        self.state.pellets[:] = _without(self.state.pellets, eaten_pellets)
        self.state.viruses[:] = _without(self.state.viruses, eaten_viruses)

        self._players_collision()
        self._move_foods(dt)

        if self._mode.regen_pellets and self.state.ticks % _REGEN_INTERVAL_TICKS == 0:
            config = self.state.config
            self._add_pellets(config.target_num_pellets - len(self.state.pellets))
            self._add_viruses(config.target_num_viruses - len(self.state.viruses))
        self.state.ticks += 1

    # ----- spawning -----

    def _add_pellets(self, n: int) -> None:
        radius = radius_conversion(PELLET_MASS)
        for _ in range(max(n, 0)):
            loc = self.random_location(radius)
            self.state.pellets.append(Pellet(loc.x, loc.y))

    def _add_viruses(self, n: int) -> None:
        radius = radius_conversion(VIRUS_INITIAL_MASS)
        for _ in range(max(n, 0)):
            loc = self.random_location(radius)
            self.state.viruses.append(Virus(loc.x, loc.y))

    def _create_squared_pellets(self) -> None:
        """Lay pellets one unit apart along a square centred in the arena."""
        width, height = self.arena_width(), self.arena_height()
        square_size = min(width, height) / 2
        spacing = 1.0
        points_per_side = int(square_size / spacing)
        cx, cy = width / 2, height / 2
        half = square_size / 2

        def sides() -> Iterable[tuple[float, float]]:
            offsets = [i * spacing for i in range(points_per_side)]
            yield from ((cx - half + d, cy - half) for d in offsets)
            yield from ((cx + half, cy - half + d) for d in offsets)
            yield from ((cx + half - d, cy + half) for d in offsets)
            yield from ((cx - half, cy + half - d) for d in offsets)

        for x, y in sides():
            if 0 <= x <= width and 0 <= y <= height:
                self.state.pellets.append(Pellet(x, y))

    # ----- per-player tick -----

    def _tick_player(
        self,
        player: Player,
        dt: float,
        pellet_grid: _Grid,
        virus_grid: _Grid,
        eaten_pellets: set[int],
        eaten_viruses: set[int],
    ) -> None:
        player.elapsed_ticks += 1
        if self.state.ticks % _ACTION_INTERVAL_TICKS == 0:
            player.take_action(self.state)

        self._move_player(player, dt)

        created: list[Cell] = []
        create_limit = PLAYER_CELL_LIMIT - len(player.cells)
        can_eat_virus = len(player.cells) >= NUM_CELLS_TO_SPLIT
        player.highest_mass = max(player.highest_mass, player.mass())

        if self._virus_collisions(
            player.cells, created, create_limit, can_eat_virus, virus_grid, eaten_viruses
        ):
            player.virus_eaten_ticks.append(player.elapsed_ticks)
            player.viruses_eaten += 1

        self._eat_pellets(player.cells, pellet_grid, eaten_pellets)

        num_cells = len(player.cells)
        for cell in player.cells:
            self._maybe_auto_split(cell, created, num_cells, player.target)
            player.food_eaten += eat_food(cell, self.state.foods)
        create_limit -= len(created)

        self._maybe_emit_food(player)
        self._maybe_split(player, created, create_limit)
        player.add_cells(created)
        recombine_cells(player)

        if self._mode.mass_decay and player.elapsed_ticks % _DECAY_INTERVAL_TICKS == 0:
            maybe_activate_anti_team(player)
            decay_player_mass(player)

    def _move_player(self, player: Player, dt: float) -> None:
        width, height = self.arena_width(), self.arena_height()
        for cell in player.cells:
            cell.velocity.dx = 3 * (player.target.x - cell.x)
            cell.velocity.dy = 3 * (player.target.y - cell.y)
            cell.velocity.clamp_speed(0, max_speed(cell.mass()))
            cell.move(dt)
            cell.splitting_velocity.decelerate(SPLIT_DECELERATION, dt)
            check_boundary_collisions(cell, width, height)
        if player.cells:
            player.min_mass_cell = min(cell.mass() for cell in player.cells)
        resolve_self_collisions(player.cells, dt, player.target, width, height)

    def _virus_collisions(
        self,
        cells: Sequence[Cell],
        created: list[Cell],
        create_limit: int,
        can_eat_virus: bool,
        grid: _Grid,
        eaten: set[int],
    ) -> bool:
        """Let the first cell that covers a nearby virus eat or pop on it."""
        for cell in cells:
            for index in grid.near(cell.x, cell.y):
                if index in eaten:
                    continue
                virus = self.state.viruses[index]
                if cell.can_eat(virus) and cell.collides_with(virus):
                    if can_eat_virus:
                        cell.increment_mass(virus.mass())
                    else:
                        created.extend(disrupt(cell, virus, create_limit))
                    eaten.add(index)
                    return True
        return False

    def _eat_pellets(self, cells: Sequence[Cell], grid: _Grid, eaten: set[int]) -> None:
        for cell in cells:
            for index in grid.near(cell.x, cell.y):
                if index in eaten:
                    continue
                pellet = self.state.pellets[index]
                if cell.can_eat(pellet) and cell.collides_with(pellet):
                    eaten.add(index)
                    cell.increment_mass(PELLET_MASS)

    def _maybe_auto_split(
        self, cell: Cell, created: list[Cell], num_cells: int, target: Location
    ) -> None:
        """Force a cell past the mass cap to split, or trim it if it cannot."""
        if cell.mass() < MAX_MASS_IN_THE_GAME:
            return
        if num_cells < PLAYER_CELL_LIMIT:
            new_cell = split_cell(cell, target, self.arena_width(), self.arena_height())
            if new_cell is not None:
                created.append(new_cell)
        else:
            cell.set_mass(NEW_MASS_IF_NO_SPLIT)

    def _maybe_emit_food(self, player: Player) -> None:
        if player.feed_cooldown > 0:
            player.feed_cooldown -= 1
        if player.action == Action.FEED and player.feed_cooldown == 0:
            emit_foods(player, self.state.foods)
            player.feed_cooldown = _FEED_COOLDOWN

    def _maybe_split(self, player: Player, created: list[Cell], create_limit: int) -> None:
        if player.split_cooldown > 0:
            player.split_cooldown -= 1
        if player.action == Action.SPLIT and player.split_cooldown == 0:
            self._player_split(player, created, create_limit)
            player.split_cooldown = _SPLIT_COOLDOWN

    def _player_split(self, player: Player, created: list[Cell], create_limit: int) -> None:
        if create_limit == 0:
            return
        num_splits = 0
        for cell in player.cells:
            new_cell = split_cell(cell, player.target, self.arena_width(), self.arena_height())
            if new_cell is None:
                continue
            created.append(new_cell)
            num_splits += 1
            if num_splits == create_limit:
                return

    # ----- whole-arena steps -----

    def _players_collision(self) -> None:
        """Let cells of different players eat one another."""
        for p1, p2 in combinations(list(self.state.players.values()), 2):
            for cell in list(p2.cells):
                p2.cells_eaten += eat_others(p1, cell)
            for cell in list(p1.cells):
                p1.cells_eaten += eat_others(p2, cell)

    def _move_foods(self, dt: float) -> None:
        foods = self.state.foods
        width, height = self.arena_width(), self.arena_height()
        i = 0
        while i < len(foods):
            food = foods[i]
            if food.velocity.magnitude() == 0:
                i += 1
                continue
            food_velocity = Velocity(food.velocity.dx, food.velocity.dy)
            food.decelerate(FOOD_DECEL, dt)
            food.move(dt)
            check_boundary_collisions(food, width, height)
            if hit_virus(food, food_velocity, self.state.viruses, dt, width, height):
                foods[i] = foods[-1]
                foods.pop()
            else:
                i += 1


def _without(items: list, removed: set[int]) -> list:
    return [item for index, item in enumerate(items) if index not in removed]