"""Players: a named collection of cells steered towards a target."""

from __future__ import annotations

import math
import random
from typing import TYPE_CHECKING, Iterable

from .colors import Color, random_color
from .entities import Cell
from .geometry import Action, Coordinate, Location
from .settings import CELL_MIN_SIZE

if TYPE_CHECKING:
    from .game_state import GameState

# Player ids are unsigned 16-bit numbers; the all-ones value marks "no id".
UNASSIGNED_PID = 0xFFFF


class Player:
    """A player in the arena, owning zero or more cells."""

    def __init__(
        self,
        pid: int = UNASSIGNED_PID,
        name: str = "unnamed",
        color: Color | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._pid = pid & 0xFFFF
        self._name = name
        self._color = color if color is not None else random_color(rng)
        self._score = 0

        self.cells: list[Cell] = []
        self.action = Action.NONE
        self.target = Location(0.0, 0.0)
        self.split_cooldown = 0
        self.feed_cooldown = 0
        self.virus_eaten_ticks: list[int] = []
        self.anti_team_decay = 1.0
        self.elapsed_ticks = 0
        self.last_decay_tick = 0
        self.is_bot = False
        self.min_mass_cell = 0

        self.food_eaten = 0
        self.highest_mass = CELL_MIN_SIZE
        self.cells_eaten = 0
        self.viruses_eaten = 0
        self.top_position = 0

    @property
    def pid(self) -> int:
        return self._pid

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = value

    def color(self) -> Color:
        return self._color

    def add_cell(self, *args) -> Cell:
        """Create a cell from ``(x, y, mass)`` or ``(location, mass)`` and own it."""
        if args and isinstance(args[0], Coordinate):
            location, *rest = args
            cell = Cell(location.x, location.y, *rest)
        else:
            cell = Cell(*args)
        self.cells.append(cell)
        return cell

    def add_cells(self, new_cells: Iterable[Cell]) -> None:
        self.cells.extend(new_cells)

    def kill(self) -> None:
        """Remove every cell and reset the per-life counters."""
        self.cells.clear()
        self.min_mass_cell = CELL_MIN_SIZE
        self._score = 0
        self.split_cooldown = 0
        self.feed_cooldown = 0
        self.anti_team_decay = 1.0
        self.elapsed_ticks = 0
        self.last_decay_tick = 0
        self.virus_eaten_ticks = []

    def dead(self) -> bool:
        return not self.cells

    def set_score(self, new_score: int) -> None:
        self._score = new_score

    def increment_score(self, inc: int) -> None:
        self._score += inc

    def x(self) -> float:
        """Mass-weighted mean x of the cells (NaN for a dead player)."""
        total = self.mass()
        if total == 0:
            return math.nan
        return sum(cell.x * cell.mass() for cell in self.cells) / total

    def y(self) -> float:
        """Mass-weighted mean y of the cells (NaN for a dead player)."""
        total = self.mass()
        if total == 0:
            return math.nan
        return sum(cell.y * cell.mass() for cell in self.cells) / total

    def location(self) -> Location:
        return Location(self.x(), self.y())

    def mass(self) -> int:
        return sum(cell.mass() for cell in self.cells)

    def score(self) -> int:
        return self.mass()

    def take_action(self, state: GameState) -> None:
        """Choose an action for this tick; bots override this."""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Player):
            return NotImplemented
        return self._pid == other._pid

    def __hash__(self) -> int:
        return hash(self._pid)

    def __lt__(self, other: Player) -> bool:
        return self.mass() < other.mass()

    def __gt__(self, other: Player) -> bool:
        return self.mass() > other.mass()

    def __str__(self) -> str:
        return f"{self._name}({self._pid})"