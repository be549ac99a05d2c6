"""The full state of one game: configuration, players and arena contents."""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from .entities import Food, Pellet, Virus
from .player import Player

_LEADERBOARD_HEADER = (
    "Food Eaten\tHeighest Mass\tCells Eaten\tViruses Eaten\ttime_alive\tName"
)


@dataclass(frozen=True)
class GameConfig:
    """Fixed parameters of a game."""

    arena_width: float
    arena_height: float
    target_num_pellets: int
    target_num_viruses: int
    pellet_regen: bool
    multi_channel_observation: bool = False


@dataclass
class GameState:
    """Everything that changes while a game runs."""

    config: GameConfig
    players: dict[int, Player] = field(default_factory=dict)
    pellets: list[Pellet] = field(default_factory=list)
    foods: list[Food] = field(default_factory=list)
    viruses: list[Virus] = field(default_factory=list)
    main_agent_pid: int = 0
    rng: random.Random = field(default_factory=random.Random)
    ticks: int = 0
    next_pid: int = 0

    def clear(self) -> None:
        """Drop all players and entities and restart the tick counter."""
        self.players.clear()
        self.pellets.clear()
        self.foods.clear()
        self.viruses.clear()
        self.ticks = 0

    def leaderboard(self) -> list[Player]:
        """Players from heaviest to lightest; among equals, later-added first."""
        ordered = list(reversed(list(self.players.values())))
        return sorted(ordered, key=lambda player: player.mass(), reverse=True)

    def format_leaderboard(self) -> str:
        """The leaderboard as a tab-separated table, one player per line."""
        lines = [_LEADERBOARD_HEADER]
        for rank, player in enumerate(self.leaderboard(), start=1):
            lines.append(
                f"{rank}.\t{player.food_eaten:>5}\t{player.highest_mass}\t\t"
                f"{player.cells_eaten}\t\t{player.viruses_eaten}\t\t{player}"
            )
        return "\n".join(lines) + "\n"